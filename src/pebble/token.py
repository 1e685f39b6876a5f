"""Token definitions for the Pebble language."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Optional, Union

from .errors import SourceLocation


#enumerates every lexical category produced by the lexer
class TokenType(Enum):
    # Literals and identifiers
    INTEGER = auto()
    FLOAT = auto()
    BOOL = auto()
    STRING = auto()
    IDENTIFIER = auto()

    # Single-character tokens
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    LESS = auto()
    GREATER = auto()
    ASSIGN = auto()
    COLON = auto()
    COMMA = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()

    # Two-character tokens
    EQUAL_EQUAL = auto()
    BANG_EQUAL = auto()
    LESS_EQUAL = auto()
    GREATER_EQUAL = auto()

    # Keywords
    IF = auto()
    ELIF = auto()
    ELSE = auto()
    DEF = auto()
    RETURN = auto()
    NOT = auto()
    AND = auto()
    OR = auto()

    # Minus sign glued to the numeric literal that follows it
    UNARY_MINUS = auto()

    # Structural markers carrying the absolute depth of their line
    INDENT = auto()
    DEDENT = auto()


#keyword lookup so the lexer can reclassify identifiers quickly
KEYWORDS: Final[dict[str, TokenType]] = {
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    "if": TokenType.IF,
    "elif": TokenType.ELIF,
    "else": TokenType.ELSE,
    "def": TokenType.DEF,
    "return": TokenType.RETURN,
}

BOOLEANS: Final[dict[str, bool]] = {"True": True, "False": False}

#operators ordered so two-character forms win over their prefixes
TWO_CHAR_TOKENS: Final[dict[str, TokenType]] = {
    "==": TokenType.EQUAL_EQUAL,
    "!=": TokenType.BANG_EQUAL,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
}

ONE_CHAR_TOKENS: Final[dict[str, TokenType]] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "<": TokenType.LESS,
    ">": TokenType.GREATER,
    "=": TokenType.ASSIGN,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

Literal = Union[int, float, bool, str]


#encapsulates the lexeme string, token kind, literal value, and location
@dataclass(slots=True)
class Token:
    type: TokenType
    lexeme: str
    location: SourceLocation
    literal: Optional[Literal] = None

    @property
    def depth(self) -> Optional[int]:
        """Absolute indentation depth carried by an INDENT/DEDENT marker, else None."""
        return self.literal

    def describe(self) -> str:
        if self.type in (TokenType.INDENT, TokenType.DEDENT):
            return f"{self.type.name}({self.literal})"
        if self.type is TokenType.UNARY_MINUS:
            return "unary '-'"
        return repr(self.lexeme)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Token({self.type}, {self.lexeme!r}, {self.location})"


#builds the synthetic marker tokens the lexer prepends to a line
def indent_marker(token_type: TokenType, depth: int, line: int) -> Token:
    return Token(token_type, "", SourceLocation(line=line, column=1), literal=depth)
