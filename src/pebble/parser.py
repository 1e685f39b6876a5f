"""Parser that turns Pebble tokens into nodes, pulling more lines for blocks.

Lexing and parsing interleave: a statement ending in ':' asks the line
supplier for further lines and tokenizes each one against the depth of the
line before it. The depth of every open block header lives on an
``IndentStack`` shared by all of the nested block frames, so a single
DEDENT marker can close several blocks at once, one frame per return.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple

from . import ast
from .errors import IndentError, ParseError, SourceLocation
from .indent import IndentStack
from .lexer import tokenize
from .token import Token, TokenType

#returns the next raw source line (newline included), or "" at end of input
LineSupplier = Callable[[], str]

_EQUALITY = {
    TokenType.EQUAL_EQUAL: ast.Operator.EQUAL,
    TokenType.BANG_EQUAL: ast.Operator.NOT_EQUAL,
}

_RELATIONAL = {
    TokenType.LESS: ast.Operator.LESS,
    TokenType.GREATER: ast.Operator.GREATER,
    TokenType.LESS_EQUAL: ast.Operator.LESS_EQUAL,
    TokenType.GREATER_EQUAL: ast.Operator.GREATER_EQUAL,
}

_ADDITIVE = {
    TokenType.PLUS: ast.Operator.ADD,
    TokenType.MINUS: ast.Operator.SUB,
}

_MULTIPLICATIVE = {
    TokenType.STAR: ast.Operator.MULT,
    TokenType.SLASH: ast.Operator.DIV,
}


#navigates one line of tokens at a time via recursive descent
@dataclass(slots=True)
class Parser:
    line_supplier: Optional[LineSupplier] = None
    indents: IndentStack = field(default_factory=IndentStack)
    depth: int = 0
    line_number: int = 0
    on_tokens: Optional[Callable[[int, List[Token]], None]] = None
    _tokens: List[Token] = field(init=False, default_factory=list)
    _current: int = field(init=False, default=0)

    #forgets any block state left behind by a failed statement
    def reset(self) -> None:
        self.indents.clear()
        self.depth = 0
        self._load([])

    #tokenizes a top-level line; top-level lines are measured against depth 0
    def start(self, line: str) -> List[Token]:
        self.reset()
        self.line_number += 1
        tokens, self.depth = tokenize(line, 0, self.line_number)
        self._echo(tokens)
        return tokens

    def parse(self, tokens: List[Token]) -> Tuple[List[Token], ast.Node]:
        """Parse one statement or expression off the head of ``tokens``.

        Returns the tokens left over together with the node. When the
        statement opened a block, the leftover tokens belong to the line
        that closed it, which is a later line than the one parsing began on.
        """
        self._load(tokens)
        node = self._statement()
        return self._remaining(), node

    #yields every statement starting on a top-level line, including the ones
    #that follow on the line which closed a block
    def statements(self, line: str) -> Iterator[ast.Node]:
        tokens = self.start(line)
        #only the end-of-input line measures shallower than a top-level line
        if tokens and tokens[0].type is TokenType.DEDENT:
            tokens = tokens[1:]
        if tokens and tokens[0].type is TokenType.INDENT:
            raise IndentError("unexpected indent", tokens[0].location)
        while tokens:
            line_number = self.line_number
            tokens, node = self.parse(tokens)
            if tokens and self.line_number == line_number:
                raise ParseError("not all tokens from previous line were parsed", tokens[0].location)
            yield node

    # Statements ----------------------------------------------------------------

    #directs statements based on one token of lookahead, two for assignment
    def _statement(self) -> ast.Node:
        if self._check(TokenType.IDENTIFIER) and self._check_next(TokenType.ASSIGN):
            return self._assignment()
        if self._check(TokenType.IF):
            return self._if_stmt()
        if self._check(TokenType.DEF):
            return self._function_def()
        if self._match(TokenType.RETURN):
            return ast.Return(self._expression())
        return self._expression()

    def _assignment(self) -> ast.VarAssign:
        name = self._advance().lexeme
        self._advance()  # consume '='
        return ast.VarAssign(name, self._expression())

    #`elif` chains nest as a single-entry else body
    def _if_stmt(self) -> ast.If:
        header_depth = self.depth
        self._advance()  # consume 'if' or 'elif'
        condition = self._expression()
        then_body = self._block()
        else_body: Optional[List[ast.Node]] = None
        self._skip_dedent_before_else(header_depth)
        if self._check(TokenType.ELIF):
            else_body = [self._if_stmt()]
        elif self._match(TokenType.ELSE):
            else_body = self._block()
        return ast.If(condition, then_body, else_body)

    #handles `def name(a, b):` headers and delegates to block parsing for body
    def _function_def(self) -> ast.FunctionDef:
        self._advance()  # consume 'def'
        name = self._consume(TokenType.IDENTIFIER, "function name").lexeme
        self._consume(TokenType.LEFT_PAREN, "'('")
        params: List[str] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                params.append(self._consume(TokenType.IDENTIFIER, "parameter name").lexeme)
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "')'")
        body = self._block()
        return ast.FunctionDef(name, params, body)

    # Blocks --------------------------------------------------------------------

    def _block(self) -> List[ast.Node]:
        header_depth = self.depth
        self._consume(TokenType.COLON, "':'")
        if not self._is_at_end():
            raise ParseError("expected new line after ':'", self._peek().location)

        self.indents.push(header_depth)
        self._next_line()
        if not self._check(TokenType.INDENT):
            raise IndentError("expected indent", self._location())
        body_depth = self._advance().depth

        body: List[ast.Node] = []
        while True:
            if self._is_at_end():
                self._next_line()
                continue
            token = self._peek()
            if token.type is TokenType.DEDENT:
                #a nested block closed back to this body's own level
                if token.depth == body_depth:
                    self._advance()
                    continue
                self._close_block(token)
                return body
            if token.type is TokenType.INDENT:
                raise IndentError("unexpected indent", token.location)

            body.append(self._statement())
            if not self._is_at_end() and not self._check(TokenType.DEDENT):
                raise ParseError("not all tokens from previous line were parsed", self._peek().location)

    #pops one level; the marker stays for enclosing frames unless none remain
    def _close_block(self, dedent: Token) -> None:
        if dedent.depth > self.indents.top:
            raise IndentError(
                "unindent does not match any outer indentation level",
                dedent.location,
            )
        self.indents.pop()
        if not self.indents:
            self._advance()

    #an `else` line arrives behind the marker that closed the `if` body
    def _skip_dedent_before_else(self, header_depth: int) -> None:
        if (
            self._check(TokenType.DEDENT)
            and self._peek().depth == header_depth
            and (self._check_next(TokenType.ELSE) or self._check_next(TokenType.ELIF))
        ):
            self._advance()

    #blank lines that would only open an indent are skipped without updating depth
    def _next_line(self) -> None:
        if self.line_supplier is None:
            raise ParseError("unexpected end of input: block is incomplete", self._location())
        while True:
            line = self.line_supplier()
            self.line_number += 1
            tokens, depth = tokenize(line, self.depth, self.line_number)
            if line.strip() or not tokens or tokens[0].type is not TokenType.INDENT:
                break
        self.depth = depth
        self._echo(tokens)
        self._load(tokens)

    # Expressions ---------------------------------------------------------------
    #
    # Each binary level recurses into itself for its right operand, so every
    # level is right-associative: `1 - 2 - 3` is `1 - (2 - 3)`.

    def _expression(self) -> ast.Expr:
        return self._or()

    def _or(self) -> ast.Expr:
        left = self._and()
        if self._match(TokenType.OR):
            return ast.Binop(ast.Operator.OR, left, self._or())
        return left

    def _and(self) -> ast.Expr:
        left = self._equality()
        if self._match(TokenType.AND):
            return ast.Binop(ast.Operator.AND, left, self._and())
        return left

    def _equality(self) -> ast.Expr:
        left = self._relational()
        op = self._match_operator(_EQUALITY)
        if op is not None:
            return ast.Binop(op, left, self._equality())
        return left

    def _relational(self) -> ast.Expr:
        left = self._additive()
        op = self._match_operator(_RELATIONAL)
        if op is not None:
            return ast.Binop(op, left, self._relational())
        return left

    #a minus glued to a literal after an operand subtracts that primary only
    def _additive(self) -> ast.Expr:
        left = self._multiplicative()
        if self._match(TokenType.UNARY_MINUS):
            return ast.Binop(ast.Operator.SUB, left, self._primary())
        op = self._match_operator(_ADDITIVE)
        if op is not None:
            return ast.Binop(op, left, self._additive())
        return left

    def _multiplicative(self) -> ast.Expr:
        left = self._unary()
        op = self._match_operator(_MULTIPLICATIVE)
        if op is not None:
            return ast.Binop(op, left, self._multiplicative())
        return left

    #negation rewrites into `-1 * primary` without a dedicated node
    def _unary(self) -> ast.Expr:
        if self._match(TokenType.NOT):
            return ast.Not(self._unary())
        if self._match(TokenType.UNARY_MINUS, TokenType.MINUS):
            return ast.Binop(ast.Operator.MULT, ast.Int(-1), self._primary())
        return self._primary()

    #primary expressions include literals, names, calls, and parenthesized forms
    def _primary(self) -> ast.Expr:
        if self._is_at_end():
            raise ParseError("expected expression, but reached end of tokens", self._location())
        token = self._peek()
        match token.type:
            case TokenType.INTEGER:
                self._advance()
                return ast.Int(token.literal)
            case TokenType.FLOAT:
                self._advance()
                return ast.Float(token.literal)
            case TokenType.BOOL:
                self._advance()
                return ast.Bool(token.literal)
            case TokenType.STRING:
                self._advance()
                return ast.String(token.literal)
            case TokenType.IDENTIFIER:
                self._advance()
                if self._match(TokenType.LEFT_PAREN):
                    return self._finish_call(token.lexeme)
                return ast.Var(token.lexeme)
            case TokenType.LEFT_PAREN:
                self._advance()
                expr = self._expression()
                self._consume(TokenType.RIGHT_PAREN, "')'")
                return expr
        raise ParseError(f"expected expression, but got {token.describe()}", token.location)

    def _finish_call(self, name: str) -> ast.FunctionCall:
        args: List[ast.Expr] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                args.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "')' after arguments")
        return ast.FunctionCall(name, args)

    # Utilities ----------------------------------------------------------------

    def _echo(self, tokens: List[Token]) -> None:
        if self.on_tokens is not None:
            self.on_tokens(self.line_number, tokens)

    def _load(self, tokens: List[Token]) -> None:
        self._tokens = list(tokens)
        self._current = 0

    def _remaining(self) -> List[Token]:
        return self._tokens[self._current:]

    def _match_operator(self, table: dict) -> Optional[ast.Operator]:
        if not self._is_at_end() and self._peek().type in table:
            return table[self._advance().type]
        return None

    #helper for multi-type checks that consume on success
    def _match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    #consumes an expected token or names both sides of the mismatch
    def _consume(self, token_type: TokenType, expected: str) -> Token:
        if self._check(token_type):
            return self._advance()
        if self._is_at_end():
            raise ParseError(f"expected {expected}, but reached end of tokens", self._location())
        token = self._peek()
        raise ParseError(f"expected {expected}, but got {token.describe()}", token.location)

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type is token_type

    def _check_next(self, token_type: TokenType) -> bool:
        index = self._current + 1
        return index < len(self._tokens) and self._tokens[index].type is token_type

    def _advance(self) -> Token:
        token = self._tokens[self._current]
        self._current += 1
        return token

    def _is_at_end(self) -> bool:
        return self._current >= len(self._tokens)

    def _peek(self) -> Token:
        return self._tokens[self._current]

    def _location(self) -> Optional[SourceLocation]:
        if self._tokens:
            return self._tokens[-1].location
        return None


__all__ = ["LineSupplier", "Parser"]
