"""Tree-walking interpreter for Pebble nodes."""
from __future__ import annotations

import operator
from typing import Callable, Dict, List, Optional

from . import ast
from .dump import format_value
from .environment import Environment
from .errors import DivisionByZeroError, InvalidTypeError, UnboundNameError

_COMPARISONS: Dict[ast.Operator, Callable] = {
    ast.Operator.EQUAL: operator.eq,
    ast.Operator.NOT_EQUAL: operator.ne,
    ast.Operator.LESS: operator.lt,
    ast.Operator.GREATER: operator.gt,
    ast.Operator.LESS_EQUAL: operator.le,
    ast.Operator.GREATER_EQUAL: operator.ge,
}

_ARITHMETIC: Dict[ast.Operator, Callable] = {
    ast.Operator.ADD: operator.add,
    ast.Operator.SUB: operator.sub,
    ast.Operator.MULT: operator.mul,
}

_NUMERIC = (ast.Int, ast.Float)


#coerces a value to a Python bool for `not`, `and` and `or`
def to_bool(value: ast.Node) -> bool:
    if isinstance(value, ast.Bool):
        return value.value
    if isinstance(value, _NUMERIC):
        return value.value != 0
    raise InvalidTypeError(f"cannot interpret {_describe(value)} as a boolean")


#evaluates parsed nodes against one shared environment
class Interpreter:
    def __init__(self, env: Optional[Environment] = None, trace: bool = False) -> None:
        self.env = env if env is not None else Environment()
        self.trace = trace

    def evaluate(self, node: ast.Node) -> ast.Node:
        if self.trace:
            self._log(f"eval {type(node).__name__}")
        match node:
            case ast.Int() | ast.Float() | ast.Bool() | ast.String() | ast.NoOp():
                return node
            case ast.Var(name=name):
                value = self.env.lookup(name)
                if value is None:
                    raise UnboundNameError(f"name '{name}' is not defined")
                return self.evaluate(value)
            case ast.Not(operand=operand):
                return ast.Bool(not to_bool(self.evaluate(operand)))
            case ast.Binop(op=op, left=left, right=right):
                left_value = self.evaluate(left)
                right_value = self.evaluate(right)
                return self._binop(op, left_value, right_value)
            case ast.Return(value=value):
                return ast.Return(self._expression_value(self.evaluate(value), "return"))
            case ast.VarAssign(name=name, value=value):
                result = self._expression_value(self.evaluate(value), "assign")
                self.env.assign(name, result)
                if self.trace:
                    self._log(f"bind {name} = {format_value(result)}")
                return result
            case ast.If(condition=condition, then_body=then_body, else_body=else_body):
                return self._if(condition, then_body, else_body)
            case ast.FunctionDef(name=name):
                self.env.assign(name, node)
                return node
            case ast.FunctionCall(name=name, args=args):
                return self._call(name, args)
        raise InvalidTypeError(f"cannot evaluate {_describe(node)}")

    # Helpers -----------------------------------------------------------------

    def _log(self, message: str) -> None:
        print(f"[trace] {message}")

    def _expression_value(self, value: ast.Node, action: str) -> ast.Expr:
        if not isinstance(value, ast.Expr):
            raise InvalidTypeError(f"cannot {action} {_describe(value)}")
        return value

    def _if(
        self,
        condition: ast.Expr,
        then_body: List[ast.Node],
        else_body: Optional[List[ast.Node]],
    ) -> ast.Node:
        test = self.evaluate(condition)
        if not isinstance(test, ast.Bool):
            raise InvalidTypeError("condition does not evaluate to boolean")
        if test.value:
            return self._run_body(then_body, ast.NoOp())
        if else_body is not None:
            return self._run_body(else_body, ast.NoOp())
        return ast.NoOp()

    #a Return produced anywhere in the body stops the body and travels upward
    def _run_body(self, body: List[ast.Node], default: ast.Node) -> ast.Node:
        result = default
        for entry in body:
            result = self.evaluate(entry)
            if isinstance(result, ast.Return):
                return result
        return result

    #arguments are evaluated first, then bound into the shared environment
    def _call(self, name: str, args: List[ast.Expr]) -> ast.Node:
        function = self.env.lookup(name)
        if function is None:
            raise UnboundNameError(f"name '{name}' is not defined")
        if not isinstance(function, ast.FunctionDef):
            raise InvalidTypeError(f"'{name}' object is not callable")
        if len(args) != len(function.params):
            raise InvalidTypeError(
                f"{name}() expected {len(function.params)} argument(s), {len(args)} given"
            )
        values = [self.evaluate(arg) for arg in args]
        for param, value in zip(function.params, values):
            self.env.assign(param, value)
        if self.trace:
            self._log(f"call {name}({', '.join(format_value(value) for value in values)})")
        for entry in function.body:
            result = self.evaluate(entry)
            if isinstance(result, ast.Return):
                if self.trace:
                    self._log(f"return from {name}")
                return result.value
        return ast.NoOp()

    def _binop(self, op: ast.Operator, left: ast.Node, right: ast.Node) -> ast.Node:
        if op is ast.Operator.OR:
            return right if not to_bool(left) else left
        if op is ast.Operator.AND:
            return ast.Bool(False) if not to_bool(left) else right
        if op is ast.Operator.DIV:
            return self._divide(left, right)
        if op in _COMPARISONS:
            return self._compare(op, left, right)

        if isinstance(left, _NUMERIC) and isinstance(right, _NUMERIC):
            result = _ARITHMETIC[op](left.value, right.value)
            if isinstance(left, ast.Float) or isinstance(right, ast.Float):
                return ast.Float(float(result))
            return ast.Int(result)
        if op is ast.Operator.ADD and isinstance(left, ast.String) and isinstance(right, ast.String):
            return ast.String(left.value + right.value)
        #only `str * int`; the mirrored `int * str` stays a type error
        if op is ast.Operator.MULT and isinstance(left, ast.String) and isinstance(right, ast.Int):
            return ast.String(left.value * right.value)
        raise InvalidTypeError(_invalid_operands(op, left, right))

    #a zero divisor is rejected before operand types are checked
    def _divide(self, left: ast.Node, right: ast.Node) -> ast.Float:
        if isinstance(right, _NUMERIC) and right.value == 0:
            raise DivisionByZeroError("division by zero")
        if isinstance(left, _NUMERIC) and isinstance(right, _NUMERIC):
            return ast.Float(left.value / right.value)
        raise InvalidTypeError(_invalid_operands(ast.Operator.DIV, left, right))

    def _compare(self, op: ast.Operator, left: ast.Node, right: ast.Node) -> ast.Bool:
        numeric = isinstance(left, _NUMERIC) and isinstance(right, _NUMERIC)
        same_kind = type(left) is type(right) and isinstance(left, (ast.Bool, ast.String))
        if not (numeric or same_kind):
            raise InvalidTypeError(_invalid_operands(op, left, right))
        #`!=` between strings answers equality; kept for compatibility
        if op is ast.Operator.NOT_EQUAL and isinstance(left, ast.String):
            return ast.Bool(left.value == right.value)
        return ast.Bool(_COMPARISONS[op](left.value, right.value))


def _describe(node: ast.Node) -> str:
    if isinstance(node, ast.FunctionDef):
        return f"function '{node.name}'"
    if isinstance(node, ast.LITERALS):
        return f"{type(node).__name__} {node.value!r}"
    return type(node).__name__


def _invalid_operands(op: ast.Operator, left: ast.Node, right: ast.Node) -> str:
    return f"invalid type(s) evaluating {_describe(left)} {op.value} {_describe(right)}"


__all__ = ["Interpreter", "to_bool"]
