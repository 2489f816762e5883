"""Error types for the CAM toolchain.

Each phase reports at most one error and stops. Errors carry the source
position where it is known and render the one-line diagnostic printed to the
user, e.g. ``Error (3:7): Unidentified character '$'.``.
"""

from __future__ import annotations
from typing import Optional


class CamError(Exception):
    """Base class for lexical, syntax and runtime errors."""

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def diagnostic(self) -> str:
        if self.line is None:
            return f"Error: {self.message}"
        return f"Error ({self.line}:{self.column}): {self.message}"

    def __str__(self) -> str:
        return self.diagnostic()


class LexError(CamError, SyntaxError):
    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"Unidentified character '{char}'.", line, column)
        self.char = char


class ParseError(CamError, SyntaxError):
    pass


class InterpreterError(CamError, RuntimeError):
    pass
