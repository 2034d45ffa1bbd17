"""
Presentation — Display layer for Quartz CLI

Contains display and output:
- Symbols: Visual vocabulary (unicode/ascii), safe printing
- Logger: Console logger collaborator
"""

from .symbols import (
    SymbolSet, get_symbols, supports_unicode,
    safe_print, sanitize_control_chars,
    UNICODE, ASCII
)
from .logger import ConsoleLogger

__all__ = [
    # Symbols
    "SymbolSet", "get_symbols", "supports_unicode",
    "safe_print", "sanitize_control_chars",
    "UNICODE", "ASCII",
    # Logger
    "ConsoleLogger",
]
