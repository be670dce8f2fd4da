from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

Value = int
Coord = Tuple[int, int]


class Status(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


class Outcome(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Board:
    """Represents the static layout of a round: the grid size and the value under each tile."""
    size: int
    values: Tuple[Value, ...]  # row-major, length == size * size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * self.size + c

    def rc(self, index: int) -> Coord:
        """Calculates the row and column for a 1D index."""
        return index // self.size, index % self.size

    def contains(self, index: int) -> bool:
        return 0 <= index < self.cell_count

    def value_at(self, index: int) -> Value:
        return self.values[index]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def pretty(self) -> str:
        """Generates a human-readable grid with every value face up."""
        width = len(str(max(self.values))) if self.values else 1
        lines: List[str] = []
        for r in range(self.size):
            row = [str(self.values[self.index(r, c)]).rjust(width) for c in range(self.size)]
            lines.append(" ".join(row))
        return "\n".join(lines)
