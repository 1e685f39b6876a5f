"""Lexical analysis for the Pebble language.

Source is consumed one physical line at a time. Each call compares the line's
indentation with the depth recorded for the previous line and prepends a single
INDENT or DEDENT marker carrying the new absolute depth when they differ.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import LexError, SourceLocation
from .token import (
    BOOLEANS,
    KEYWORDS,
    ONE_CHAR_TOKENS,
    TWO_CHAR_TOKENS,
    Token,
    TokenType,
    indent_marker,
)

_WHITESPACE = re.compile(r"\s+")
_FLOAT = re.compile(r"\d*\.\d+")
_NEG_FLOAT = re.compile(r"-(\d*\.\d+)")
_INTEGER = re.compile(r"\d+")
_NEG_INTEGER = re.compile(r"-(\d+)")
_STRING = re.compile(r"\"([^\"]*)\"|'([^']*)'")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


#transforms one raw source line into the tokens consumed by the parser
@dataclass(slots=True)
class Lexer:
    source: str
    prev_indent: int = 0
    line_number: int = 1
    _length: int = field(init=False)
    _index: int = field(init=False, default=0)
    _tokens: List[Token] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self._length = len(self.source)
        self._index = 0
        self._tokens = []

    def lex(self) -> Tuple[List[Token], int]:
        indent = self._measure_indent()
        if indent > self.prev_indent:
            self._tokens.append(indent_marker(TokenType.INDENT, indent, self.line_number))
        elif indent < self.prev_indent:
            self._tokens.append(indent_marker(TokenType.DEDENT, indent, self.line_number))

        while not self._is_at_end():
            if self._skip(_WHITESPACE):
                continue
            if self._number(_FLOAT, _NEG_FLOAT, TokenType.FLOAT, float):
                continue
            if self._number(_INTEGER, _NEG_INTEGER, TokenType.INTEGER, int):
                continue
            if self._string():
                continue
            if self._operator():
                continue
            if self._identifier():
                continue
            remainder = self.source[self._index:].rstrip("\n")
            raise LexError(f"unexpected token {remainder}", self._location())
        return self._tokens, indent

    # Internal helpers -------------------------------------------------

    #counts leading whitespace; a blank line gets one less so it never indents
    def _measure_indent(self) -> int:
        match = _WHITESPACE.match(self.source)
        indent = match.end() if match else 0
        self._index = indent
        if self._is_at_end():
            indent -= 1
        return indent

    def _is_at_end(self) -> bool:
        return self._index >= self._length

    def _location(self) -> SourceLocation:
        return SourceLocation(line=self.line_number, column=self._index + 1)

    def _add(self, token_type: TokenType, lexeme: str, literal=None) -> None:
        self._tokens.append(Token(token_type, lexeme, self._location(), literal=literal))
        self._index += len(lexeme)

    def _skip(self, pattern: re.Pattern) -> bool:
        match = pattern.match(self.source, self._index)
        if match is None:
            return False
        self._index = match.end()
        return True

    #a leading '-' glued to a literal becomes UNARY_MINUS followed by the magnitude
    def _number(self, positive: re.Pattern, negative: re.Pattern, token_type: TokenType, convert) -> bool:
        match = positive.match(self.source, self._index)
        if match is not None:
            lexeme = match.group(0)
            self._add(token_type, lexeme, convert(lexeme))
            return True
        match = negative.match(self.source, self._index)
        if match is not None:
            self._add(TokenType.UNARY_MINUS, "-")
            lexeme = match.group(1)
            self._add(token_type, lexeme, convert(lexeme))
            return True
        return False

    #no escape processing: contents run between the outer matching quotes
    def _string(self) -> bool:
        match = _STRING.match(self.source, self._index)
        if match is None:
            return False
        contents = match.group(1) if match.group(1) is not None else match.group(2)
        self._add(TokenType.STRING, match.group(0), contents)
        return True

    def _operator(self) -> bool:
        pair = self.source[self._index:self._index + 2]
        if pair in TWO_CHAR_TOKENS:
            self._add(TWO_CHAR_TOKENS[pair], pair)
            return True
        char = self.source[self._index]
        if char in ONE_CHAR_TOKENS:
            self._add(ONE_CHAR_TOKENS[char], char)
            return True
        return False

    #identifiers are reclassified as booleans or keywords on an exact match
    def _identifier(self) -> bool:
        match = _IDENTIFIER.match(self.source, self._index)
        if match is None:
            return False
        lexeme = match.group(0)
        if lexeme in BOOLEANS:
            self._add(TokenType.BOOL, lexeme, BOOLEANS[lexeme])
        else:
            self._add(KEYWORDS.get(lexeme, TokenType.IDENTIFIER), lexeme)
        return True


#convenience wrapper returning the line's tokens and its indentation depth
def tokenize(line: str, prev_indent: int, line_number: int = 1) -> Tuple[List[Token], int]:
    return Lexer(line, prev_indent, line_number).lex()


__all__ = ["Lexer", "tokenize"]
