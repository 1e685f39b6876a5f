"""Common error and source location utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional


#describes an exact line/column position captured during lexing
@dataclass(frozen=True, slots=True)
class SourceLocation:
    """A 1-based line/column location inside the consumed input."""

    line: int
    column: int

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.line}:{self.column}"


#normalizes the base exception for the lexer, parser and interpreter layers
class PebbleError(Exception):
    """Base class for Pebble-related errors."""

    kind: ClassVar[str] = "Error"

    def __init__(self, message: str, location: Optional[SourceLocation] = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


#lexer raises this when a line holds a character sequence no rule matches
class LexError(PebbleError):
    """Raised when the lexer encounters an invalid character sequence."""

    kind = "LexError"


#parser uses this to surface syntax errors
class ParseError(PebbleError):
    """Raised when the parser encounters an invalid construct."""

    kind = "SyntaxError"


#block structure problems are a flavour of syntax error
class IndentError(ParseError):
    """Raised when indentation does not open or close a block correctly."""

    kind = "IndentationError"


#runtime failures raised while evaluating parsed nodes
class EvalError(PebbleError):
    """Base class for errors raised by the interpreter."""


class UnboundNameError(EvalError):
    kind = "NameError"


class InvalidTypeError(EvalError):
    kind = "TypeError"


class DivisionByZeroError(EvalError):
    kind = "ZeroDivisionError"


#a program recursed deeper than the host interpreter's stack allows
class RecursionDepthError(EvalError):
    kind = "RecursionError"
