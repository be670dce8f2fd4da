from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .board import Board, Outcome, Status, Value
from .deal import check_grid_size, deal_board
from .errors import ConfigurationError, InvalidArgument
from .view import BoardView, CellView

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 4


class ResultKind(str, Enum):
    IGNORED = "ignored"
    FIRST_REVEALED = "first_revealed"
    MATCH = "match"
    MISMATCH = "mismatch"  # adapter must call resolve_mismatch() after its delay


@dataclass(frozen=True)
class SelectResult:
    """What a single tile selection did, for the adapter to render."""
    kind: ResultKind
    index: int
    value: Optional[Value]
    first_index: Optional[int]  # the other tile of the pair on a second click
    tries_remaining: int
    outcome: Outcome

    @property
    def mismatch_pending(self) -> bool:
        return self.kind == ResultKind.MISMATCH and self.outcome == Outcome.IN_PROGRESS

    def to_json(self) -> dict:
        return {
            "kind": self.kind.value,
            "index": int(self.index),
            "value": self.value,
            "firstIndex": self.first_index,
            "triesRemaining": int(self.tries_remaining),
            "outcome": self.outcome.value,
            "mismatchPending": self.mismatch_pending,
        }


def _check_pairs(board: Board) -> Board:
    check_grid_size(board.size)
    if len(board.values) != board.cell_count:
        raise ConfigurationError(f"board of size {board.size} needs {board.cell_count} values, got {len(board.values)}")
    counts = Counter(board.values)
    bad = sorted(v for v, n in counts.items() if n != 2 or v < 1)
    if bad:
        raise ConfigurationError(f"every value must be a positive integer appearing exactly twice: {bad}")
    return board


class GameState:
    """
    The memory game state machine.

    Owns the board layout and the session (tile statuses, tries, outcome, the
    pending pair). Presentation code reads it through current_view() and
    drives it through select_tile() and resolve_mismatch().
    """

    def __init__(self, grid_size: int = DEFAULT_GRID_SIZE, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self.initialize(grid_size)

    @classmethod
    def from_board(cls, board: Board) -> 'GameState':
        """Starts a round on a fixed layout instead of a shuffled one."""
        state = cls.__new__(cls)
        state._rng = random.Random()
        state._start(_check_pairs(board))
        return state

    # ---------- lifecycle ----------

    def initialize(self, grid_size: int) -> None:
        """Deals a fresh shuffled board and resets the session."""
        self._start(deal_board(grid_size, rng=self._rng))

    def restart(self, grid_size: Optional[int] = None) -> None:
        self.initialize(self.board.size if grid_size is None else grid_size)

    def _start(self, board: Board) -> None:
        self.board = board
        self.statuses: List[Status] = [Status.HIDDEN] * board.cell_count
        self.max_tries = board.cell_count - 1
        self.tries_remaining = self.max_tries
        self.outcome = Outcome.IN_PROGRESS
        self.pending_first: Optional[int] = None
        self.pending_second: Optional[int] = None
        logger.debug("new %dx%d round, %d tries", board.size, board.size, self.max_tries)

    # ---------- queries ----------

    @property
    def grid_size(self) -> int:
        return self.board.size

    @property
    def mismatch_pending(self) -> bool:
        return self.pending_second is not None

    def is_complete(self) -> bool:
        """True once every tile has been matched."""
        return all(s == Status.MATCHED for s in self.statuses)

    def can_select(self, index: int) -> bool:
        return (
            self.outcome == Outcome.IN_PROGRESS
            and self.statuses[index] == Status.HIDDEN
            and self.tries_remaining > 0
            and not self.mismatch_pending
        )

    def current_view(self) -> BoardView:
        cells = tuple(
            CellView(
                index=i,
                status=status,
                value=None if status == Status.HIDDEN else self.board.value_at(i),
                selectable=self.can_select(i),
            )
            for i, status in enumerate(self.statuses)
        )
        return BoardView(
            grid_size=self.board.size,
            cells=cells,
            tries_remaining=self.tries_remaining,
            max_tries=self.max_tries,
            outcome=self.outcome,
            pending_first=self.pending_first,
            mismatch_pending=self.mismatch_pending,
        )

    # ---------- transitions ----------

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgument(f"tile index must be an integer, got {index!r}")
        if not self.board.contains(index):
            raise InvalidArgument(f"tile index {index} out of range [0, {self.board.cell_count})")

    def _result(self, kind: ResultKind, index: int, first: Optional[int] = None) -> SelectResult:
        value = None if kind == ResultKind.IGNORED else self.board.value_at(index)
        return SelectResult(kind, index, value, first, self.tries_remaining, self.outcome)

    def select_tile(self, index: int) -> SelectResult:
        """
        Reveals a tile. The first tile of a pair is free; the second spends a
        try and is compared with the first. Selections that break the game
        rules are ignored without changing anything.
        """
        self._check_index(index)
        if not self.can_select(index):
            return self._result(ResultKind.IGNORED, index)

        self.statuses[index] = Status.REVEALED
        if self.pending_first is None:
            self.pending_first = index
            logger.debug("first tile %d shows %d", index, self.board.value_at(index))
            return self._result(ResultKind.FIRST_REVEALED, index)

        first = self.pending_first
        self.tries_remaining -= 1
        if self.board.value_at(first) == self.board.value_at(index):
            self.statuses[first] = Status.MATCHED
            self.statuses[index] = Status.MATCHED
            self.pending_first = None
            kind = ResultKind.MATCH
        else:
            self.pending_second = index
            kind = ResultKind.MISMATCH
        logger.debug("pair %d/%d: %s, %d tries left", first, index, kind.value, self.tries_remaining)

        # Running out of tries is checked before the board is checked for completion,
        # so matching the last pair with the last try still loses.
        if self.tries_remaining <= 0:
            self.outcome = Outcome.LOST
            logger.info("game lost: maximum tries reached")
        elif self.is_complete():
            self.outcome = Outcome.WON
            logger.info("game won with %d tries left", self.tries_remaining)
        return self._result(kind, index, first)

    def resolve_mismatch(self) -> bool:
        """Turns a mismatched pair face down again. Returns False when there was nothing to do."""
        if (self.outcome != Outcome.IN_PROGRESS or self.pending_first is None
                or self.pending_second is None):
            return False
        self.statuses[self.pending_first] = Status.HIDDEN
        self.statuses[self.pending_second] = Status.HIDDEN
        logger.debug("hid tiles %d and %d", self.pending_first, self.pending_second)
        self.pending_first = None
        self.pending_second = None
        return True
