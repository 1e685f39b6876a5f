"""Human-readable views of Pebble values, parse trees, and token lines."""
from __future__ import annotations

from typing import List

from . import ast
from .token import Token


#renders a value the way the REPL echoes it
def format_value(value: ast.Node) -> str:
    match value:
        case ast.Bool(value=flag):
            return "True" if flag else "False"
        case ast.Int(value=number) | ast.Float(value=number):
            return repr(number)
        case ast.String(value=text):
            return repr(text)
        case ast.FunctionDef(name=name, params=params):
            return f"<function {name}({', '.join(params)})>"
        case ast.Return(value=inner):
            return format_value(inner)
        case ast.NoOp():
            return ""
    return dump_tree(value)


#echo format for a tokenized line, used by `pebble tokens` and `--tokens`
def format_tokens(tokens: List[Token]) -> str:
    parts = []
    for token in tokens:
        if token.literal is not None:
            parts.append(f"{token.type.name}({token.literal!r})")
        else:
            parts.append(token.type.name)
    return ", ".join(parts)


#nice indented tree formatter used by the CLI and tests for debugging
def dump_tree(node: ast.Node) -> str:
    lines: List[str] = []
    _dump(node, 0, lines)
    return "\n".join(lines)


#handles node-specific formatting, one line per node
def _dump(node: ast.Node, depth: int, lines: List[str]) -> None:
    pad = "  " * depth
    match node:
        case ast.Int() | ast.Float() | ast.Bool() | ast.String():
            lines.append(f"{pad}{type(node).__name__} {format_value(node)}")
        case ast.Var(name=name):
            lines.append(f"{pad}Var {name}")
        case ast.Not(operand=operand):
            lines.append(f"{pad}Not")
            _dump(operand, depth + 1, lines)
        case ast.Binop(op=op, left=left, right=right):
            lines.append(f"{pad}Binop {op.name}")
            _dump(left, depth + 1, lines)
            _dump(right, depth + 1, lines)
        case ast.Return(value=value):
            lines.append(f"{pad}Return")
            _dump(value, depth + 1, lines)
        case ast.FunctionCall(name=name, args=args):
            lines.append(f"{pad}FunctionCall {name} argc={len(args)}")
            for arg in args:
                _dump(arg, depth + 1, lines)
        case ast.VarAssign(name=name, value=value):
            lines.append(f"{pad}VarAssign {name}")
            _dump(value, depth + 1, lines)
        case ast.If(condition=condition, then_body=then_body, else_body=else_body):
            lines.append(f"{pad}If")
            _dump(condition, depth + 1, lines)
            lines.append(f"{pad}then:")
            for entry in then_body:
                _dump(entry, depth + 1, lines)
            if else_body is not None:
                lines.append(f"{pad}else:")
                for entry in else_body:
                    _dump(entry, depth + 1, lines)
        case ast.FunctionDef(name=name, params=params, body=body):
            lines.append(f"{pad}FunctionDef {name}({', '.join(params)})")
            for entry in body:
                _dump(entry, depth + 1, lines)
        case _:
            lines.append(f"{pad}{type(node).__name__}")


__all__ = ["dump_tree", "format_tokens", "format_value"]
