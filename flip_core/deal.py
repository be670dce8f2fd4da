from __future__ import annotations

import random
from typing import List, Optional

from .board import Board, Value
from .errors import ConfigurationError


def check_grid_size(grid_size: int) -> int:
    """Validates that a square grid of this size can be filled with pairs."""
    if isinstance(grid_size, bool) or not isinstance(grid_size, int):
        raise ConfigurationError(f"grid size must be an integer, got {grid_size!r}")
    if grid_size < 2:
        raise ConfigurationError(f"grid size must be at least 2, got {grid_size}")
    if (grid_size * grid_size) % 2:
        raise ConfigurationError(
            f"grid size {grid_size} gives {grid_size * grid_size} tiles, which cannot be split into pairs"
        )
    return grid_size


def paired_values(grid_size: int) -> List[Value]:
    """Builds the unshuffled deck: 1..N/2, each value twice."""
    count = check_grid_size(grid_size) ** 2
    deck: List[Value] = []
    for v in range(1, count // 2 + 1):
        deck.append(v)
        deck.append(v)
    return deck


def deal_board(grid_size: int, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> Board:
    """Creates a board with every pair placed in a uniformly random permutation."""
    rng = rng if rng is not None else random.Random(seed)
    deck = paired_values(grid_size)
    # random.shuffle is Fisher-Yates, so every ordering of the deck is equally likely.
    rng.shuffle(deck)
    return Board(size=grid_size, values=tuple(deck))
