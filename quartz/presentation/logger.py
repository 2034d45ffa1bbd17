"""
Logger — Console output collaborator

Symbol-prefixed lines through safe_print. Warnings and errors go to
stderr, everything else to stdout. debug() is silent unless verbose.

Extra positional arguments are appended after the message, so
logger.info("Parameters:", params) works like the print builtin.
"""

import json
import sys
from typing import Any, Optional, TextIO

from .symbols import SymbolSet, get_symbols, safe_print


class ConsoleLogger:
    """Logger collaborator used by middleware and handlers."""

    def __init__(
        self,
        symbols: Optional[SymbolSet] = None,
        verbose: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None
    ):
        self.symbols = symbols or get_symbols()
        self.verbose = verbose
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def info(self, message: str, *details: Any) -> None:
        self._emit(self.symbols.info, message, details, self.stdout)

    def success(self, message: str, *details: Any) -> None:
        self._emit(self.symbols.success, message, details, self.stdout)

    def warn(self, message: str, *details: Any) -> None:
        self._emit(self.symbols.warning, message, details, self.stderr)

    def error(self, message: str, *details: Any) -> None:
        self._emit(self.symbols.error, message, details, self.stderr)

    def debug(self, message: str, *details: Any) -> None:
        if self.verbose:
            self._emit(self.symbols.debug, message, details, self.stderr)

    def line(self, text: str = "") -> None:
        """Unprefixed output (command results, help text)."""
        safe_print(text, file=self.stdout)

    def _emit(self, marker: str, message: str, details: tuple, stream: TextIO) -> None:
        text = message
        if details:
            text = " ".join([message] + [_render(d) for d in details])
        safe_print(f"{marker} {text}", file=stream)


def _render(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str, ensure_ascii=False)
    return str(value)
