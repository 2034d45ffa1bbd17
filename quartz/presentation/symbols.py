"""
Symbols — Console markers in Unicode and ASCII flavours

The display.symbols setting picks a set ("unicode", "ascii", "auto").
"auto" looks at the stream encoding and locale and falls back to ASCII
when unsure.

Output helpers live here too, since both deal with what a terminal can
show: sanitize_control_chars() for model output, safe_print() for
streams that cannot encode everything.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


TRUTHY = ('1', 'true', 'yes')

# Substitutions tried before giving up on a character
ASCII_FALLBACKS = {
    '→': '->',
    '←': '<-',
    '…': '...',
    '–': '-',
    '—': '--',
    '“': '"',
    '”': '"',
    '‘': "'",
    '’': "'",
    '•': '*',
    '·': '.',
    '✓': '[OK]',
    '✗': '[x]',
}


def sanitize_control_chars(text: str) -> str:
    """
    Drop control characters except tab, newline and carriage return.

    Model output can carry escape sequences that clear or rewrite the
    terminal; run it through here before it is printed or saved.
    """
    if not text:
        return text
    return ''.join(ch for ch in text if ch in '\t\n\r' or ord(ch) >= 32)


def to_ascii(text: str) -> str:
    for char, replacement in ASCII_FALLBACKS.items():
        text = text.replace(char, replacement)
    return text


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    print() that survives narrow console encodings.

    On UnicodeEncodeError the text is retried with ASCII_FALLBACKS
    applied, then with unencodable characters replaced by '?'.
    """
    stream = file if file is not None else sys.stdout

    try:
        print(text, end=end, file=stream)
        return
    except UnicodeEncodeError:
        text = to_ascii(text)

    try:
        print(text, end=end, file=stream)
    except UnicodeEncodeError:
        encoding = getattr(stream, 'encoding', None) or 'utf-8'
        print(text.encode(encoding, errors='replace').decode(encoding), end=end, file=stream)


@dataclass(frozen=True)
class SymbolSet:
    """Markers used by the logger and command output."""
    # Log levels
    info: str
    success: str
    warning: str
    error: str
    debug: str

    # Status markers
    check_pass: str
    check_fail: str

    # Lists
    bullet: str
    current: str

    # Token usage
    tokens_in: str
    tokens_out: str


UNICODE = SymbolSet(
    info='ℹ',
    success='✓',
    warning='⚠',
    error='✗',
    debug='·',
    check_pass='✓',
    check_fail='✗',
    bullet='•',
    current='●',
    tokens_in='↓',
    tokens_out='↑',
)

ASCII = SymbolSet(
    info='[i]',
    success='[OK]',
    warning='[!]',
    error='[ERR]',
    debug='[.]',
    check_pass='[OK]',
    check_fail='[x]',
    bullet='*',
    current='*',
    tokens_in='<-',
    tokens_out='->',
)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in TRUTHY


def supports_unicode() -> bool:
    """
    Guess whether stdout can render the Unicode set.

    QUARTZ_ASCII_ONLY and QUARTZ_UNICODE force the answer; otherwise
    the stream encoding decides, then the locale variables.
    """
    if _env_flag('QUARTZ_ASCII_ONLY'):
        return False
    if _env_flag('QUARTZ_UNICODE'):
        return True

    encoding = (getattr(sys.stdout, 'encoding', None) or '').lower().replace('-', '').replace('_', '')
    if encoding:
        if 'utf' in encoding:
            return True
        if encoding.startswith('cp') or encoding in ('ascii', 'latin1', 'iso88591'):
            return False

    locale = ' '.join(os.environ.get(name, '') for name in ('LC_ALL', 'LANG')).lower()
    if 'utf-8' in locale or 'utf8' in locale:
        return True

    # Windows Terminal renders Unicode regardless of code page
    return bool(os.environ.get('WT_SESSION'))


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """Symbol set for "unicode", "ascii" or "auto"/None (detect)."""
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
