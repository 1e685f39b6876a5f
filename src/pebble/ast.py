"""Abstract syntax tree definitions for Pebble.

Parsed statements, parsed expressions and the values the interpreter produces
all share the same node hierarchy, so a block body can mix expressions and
statements and a binding can hold either.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


#binary operators recognised by the parser, valued by their source spelling
class Operator(Enum):
    ADD = "+"
    SUB = "-"
    MULT = "*"
    DIV = "/"
    OR = "or"
    AND = "and"
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="


#every parsed unit and every runtime value is a node
@dataclass(slots=True)
class Node:
    pass


# Expressions ------------------------------------------------------------------


@dataclass(slots=True)
class Expr(Node):
    pass


@dataclass(slots=True)
class Int(Expr):
    value: int


@dataclass(slots=True)
class Float(Expr):
    value: float


@dataclass(slots=True)
class Bool(Expr):
    value: bool


@dataclass(slots=True)
class String(Expr):
    value: str


#variable references are resolved against the shared environment
@dataclass(slots=True)
class Var(Expr):
    name: str


@dataclass(slots=True)
class Not(Expr):
    operand: Expr


@dataclass(slots=True)
class Binop(Expr):
    op: Operator
    left: Expr
    right: Expr


#also the signal a block evaluation hands upward to end the enclosing call
@dataclass(slots=True)
class Return(Expr):
    value: Expr


@dataclass(slots=True)
class FunctionCall(Expr):
    name: str
    args: List[Expr] = field(default_factory=list)


LITERALS = (Int, Float, Bool, String)


# Statements -------------------------------------------------------------------


@dataclass(slots=True)
class Stmt(Node):
    pass


@dataclass(slots=True)
class VarAssign(Stmt):
    name: str
    value: Expr


#else_body is None when no else branch was written
@dataclass(slots=True)
class If(Stmt):
    condition: Expr
    then_body: List[Node] = field(default_factory=list)
    else_body: Optional[List[Node]] = None


#the whole definition is stored under its name when evaluated
@dataclass(slots=True)
class FunctionDef(Stmt):
    name: str
    params: List[str] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


#produced by constructs with no value, e.g. an untaken `if` without `else`
@dataclass(slots=True)
class NoOp(Stmt):
    pass


__all__ = [
    "Operator",
    "Node",
    "Expr",
    "Int",
    "Float",
    "Bool",
    "String",
    "Var",
    "Not",
    "Binop",
    "Return",
    "FunctionCall",
    "LITERALS",
    "Stmt",
    "VarAssign",
    "If",
    "FunctionDef",
    "NoOp",
]
