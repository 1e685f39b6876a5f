"""Stack of indentation depths for the blocks currently open in the parser."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


#bottom-to-top the entries hold the header depth of each enclosing open block
@dataclass(slots=True)
class IndentStack:
    levels: List[int] = field(default_factory=list)

    def push(self, depth: int) -> None:
        self.levels.append(depth)

    def pop(self) -> int:
        return self.levels.pop()

    @property
    def top(self) -> int:
        return self.levels[-1]

    def clear(self) -> None:
        self.levels.clear()

    def __len__(self) -> int:
        return len(self.levels)

    def __bool__(self) -> bool:
        return bool(self.levels)


__all__ = ["IndentStack"]
