"""Session control for Pebble: lex, parse and evaluate top-level statements.

A session owns one parser and one interpreter, so every statement fed to it
shares the same environment. Each top-level statement yields exactly one
``Result``: a value, a no-op, or the error that stopped it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Union

from . import ast
from .dump import format_value
from .environment import Environment
from .errors import PebbleError, RecursionDepthError
from .interpreter import Interpreter
from .parser import LineSupplier, Parser


#outcome of one top-level parse + evaluate cycle
@dataclass(slots=True)
class Result:
    value: Optional[ast.Node] = None
    error: Optional[PebbleError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    #errors render as `<Kind>: <message>`; only expression values are echoed
    def display(self) -> str:
        if self.error is not None:
            return str(self.error)
        if isinstance(self.value, ast.Expr):
            return format_value(self.value)
        return ""


#wraps source lines as a supplier; whitespace-only lines are dropped
def lines_from(source: Union[str, Iterable[str]]) -> LineSupplier:
    lines = source.splitlines() if isinstance(source, str) else source
    iterator = (line.rstrip("\n") + "\n" for line in lines if line.strip())

    def supply() -> str:
        return next(iterator, "")

    return supply


class Session:
    """Governs a Pebble session with a single shared environment."""

    def __init__(
        self,
        line_supplier: Optional[LineSupplier] = None,
        interpreter: Optional[Interpreter] = None,
        on_node: Optional[Callable[[ast.Node], None]] = None,
    ) -> None:
        self.parser = Parser(line_supplier)
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.on_node = on_node

    @property
    def env(self) -> Environment:
        return self.interpreter.env

    def feed(self, line: str) -> List[Result]:
        """Run every statement that starts on ``line``.

        Block statements pull their remaining lines from the session's line
        supplier. The line that closes a block may itself start further
        statements, which are run here as well.
        """
        results: List[Result] = []
        try:
            for node in self.parser.statements(line):
                if self.on_node is not None:
                    self.on_node(node)
                results.append(Result(value=self._evaluate(node)))
        except PebbleError as error:
            results.append(Result(error=error))
        #deep recursion in a program exhausts the host stack, not the session
        except RecursionError:
            results.append(Result(error=RecursionDepthError("maximum recursion depth exceeded")))
        return results

    #reads top-level lines from the supplier until it reports end of input
    def run(self) -> Iterator[Result]:
        supplier = self.parser.line_supplier
        if supplier is None:
            raise ValueError("run requires a line supplier")
        while True:
            line = supplier()
            if not line:
                return
            yield from self.feed(line)

    #a top-level `return` reports the value it carries
    def _evaluate(self, node: ast.Node) -> ast.Node:
        value = self.interpreter.evaluate(node)
        if isinstance(value, ast.Return):
            return value.value
        return value


#runs a whole program held in memory and collects one result per statement
def run_source(source: Union[str, Iterable[str]], interpreter: Optional[Interpreter] = None) -> List[Result]:
    return list(Session(lines_from(source), interpreter).run())


__all__ = ["Result", "Session", "lines_from", "run_source"]
