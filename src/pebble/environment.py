"""The single flat name store shared by a whole Pebble program."""
from __future__ import annotations

from typing import Dict, Iterator, Optional

from . import ast


#one mutable scope for every statement and every function call; no frames
class Environment:
    def __init__(self) -> None:
        self._bindings: Dict[str, ast.Node] = {}

    def lookup(self, name: str) -> Optional[ast.Node]:
        return self._bindings.get(name)

    #overwrites an existing binding in place, otherwise appends a new one
    def assign(self, name: str, value: ast.Node) -> None:
        self._bindings[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Environment({self._bindings!r})"


__all__ = ["Environment"]
