from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .board import Outcome, Status, Value


@dataclass(frozen=True)
class CellView:
    index: int
    status: Status
    value: Optional[Value]  # None while the tile is hidden
    selectable: bool


@dataclass(frozen=True)
class BoardView:
    """Read-only snapshot of a round, safe to hand to a renderer."""
    grid_size: int
    cells: Tuple[CellView, ...]
    tries_remaining: int
    max_tries: int
    outcome: Outcome
    pending_first: Optional[int]
    mismatch_pending: bool

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.IN_PROGRESS

    def tries_label(self) -> str:
        return f"Tries: {self.tries_remaining}"

    def matched_count(self) -> int:
        return sum(1 for cell in self.cells if cell.status == Status.MATCHED)

    def pretty(self) -> str:
        """Renders the grid as text: '?' for hidden tiles, brackets around matched ones."""
        shown = [c.value for c in self.cells if c.value is not None]
        width = max([len(str(len(self.cells) // 2))] + [len(str(v)) for v in shown])
        lines: List[str] = []
        for r in range(self.grid_size):
            row: List[str] = []
            for c in range(self.grid_size):
                cell = self.cells[r * self.grid_size + c]
                if cell.status == Status.HIDDEN:
                    row.append(" " + "?".rjust(width) + " ")
                elif cell.status == Status.MATCHED:
                    row.append("[" + str(cell.value).rjust(width) + "]")
                else:
                    row.append(" " + str(cell.value).rjust(width) + " ")
            lines.append(" ".join(row))
        return "\n".join(lines)

    def to_json(self) -> Dict[str, Any]:
        return {
            "gridSize": int(self.grid_size),
            "cells": [
                {
                    "index": int(cell.index),
                    "status": cell.status.value,
                    "value": cell.value,
                    "selectable": bool(cell.selectable),
                }
                for cell in self.cells
            ],
            "triesRemaining": int(self.tries_remaining),
            "maxTries": int(self.max_tries),
            "outcome": self.outcome.value,
            "pendingFirst": self.pending_first,
            "mismatchPending": bool(self.mismatch_pending),
        }
