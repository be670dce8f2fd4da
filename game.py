from __future__ import annotations

# Facade module that re-exports the Flip core.
# The Flask app, the tests and `python game.py` all import from here;
# single-responsibility modules live under flip_core/*.

from flip_core.board import Board, Coord, Outcome, Status, Value  # noqa: F401
from flip_core.deal import check_grid_size, deal_board, paired_values  # noqa: F401
from flip_core.errors import ConfigurationError, FlipError, InvalidArgument  # noqa: F401
from flip_core.state import (  # noqa: F401
    DEFAULT_GRID_SIZE,
    GameState,
    ResultKind,
    SelectResult,
)
from flip_core.view import BoardView, CellView  # noqa: F401


def new_game(grid_size: int = DEFAULT_GRID_SIZE, seed: int | None = None) -> GameState:
    """Deals a new round; shorthand for GameState(grid_size, seed=seed)."""
    return GameState(grid_size, seed=seed)


def main() -> None:
    # CLI driver delegated to flip_core.cli
    from flip_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
