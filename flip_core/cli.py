from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional, Sequence, TextIO

from .board import Outcome
from .errors import FlipError, InvalidArgument
from .state import DEFAULT_GRID_SIZE, GameState, ResultKind, SelectResult

logger = logging.getLogger(__name__)

WELCOME = (
    "Welcome to the Memory Game!\n\n"
    "The goal is to match pairs of identical numbers.\n"
    "You have a limited number of tries.\n"
    "Pick a tile to flip it. Try to find matching pairs!\n\n"
    "Good luck!"
)
WON_MESSAGE = "Congratulations, you won!"
LOST_MESSAGE = "Game Over! Maximum tries reached."


def parse_tile(text: str, grid_size: int) -> int:
    """Parses a tile given as a flat index ('5'), or as 'r,c' / 'r:c' / 'r c'."""
    text = text.strip()
    for sep in (',', ':', ' '):
        if sep in text:
            parts = [t for t in text.split(sep) if t != '']
            if len(parts) != 2:
                raise InvalidArgument(f"could not parse tile {text!r}")
            try:
                r, c = int(parts[0]), int(parts[1])
            except ValueError:
                raise InvalidArgument(f"could not parse tile {text!r}") from None
            if not (0 <= r < grid_size and 0 <= c < grid_size):
                raise InvalidArgument(f"tile {text!r} is off the {grid_size}x{grid_size} board")
            return r * grid_size + c
    try:
        return int(text)
    except ValueError:
        raise InvalidArgument(f"could not parse tile {text!r}") from None


def parse_moves(script: str, grid_size: int) -> List[int]:
    """Parses a whitespace-separated list of tiles; 'r,c' and 'r:c' forms are allowed."""
    moves: List[int] = []
    for token in script.split():
        moves.append(parse_tile(token, grid_size))
    return moves


def _describe(result: SelectResult) -> str:
    if result.kind == ResultKind.IGNORED:
        return f"Tile {result.index} cannot be picked right now."
    if result.kind == ResultKind.FIRST_REVEALED:
        return f"Tile {result.index} shows {result.value}."
    if result.kind == ResultKind.MATCH:
        return f"Tile {result.index} shows {result.value}. Match!"
    return f"Tile {result.index} shows {result.value}. No match."


def _show(game: GameState, out: TextIO) -> None:
    view = game.current_view()
    print(view.pretty(), file=out)
    print(view.tries_label(), file=out)


def _finish_turn(game: GameState, result: SelectResult, delay: float, out: TextIO) -> bool:
    """Prints a selection, flips a mismatch back after the delay, and reports whether the game ended."""
    print(_describe(result), file=out)
    _show(game, out)
    if result.mismatch_pending:
        if delay > 0:
            time.sleep(delay)
        game.resolve_mismatch()
    if game.outcome == Outcome.WON:
        print(WON_MESSAGE, file=out)
        return True
    if game.outcome == Outcome.LOST:
        print(LOST_MESSAGE, file=out)
        return True
    return False


def run_script(game: GameState, moves: Sequence[int], delay: float = 0.0, out: Optional[TextIO] = None) -> Outcome:
    """Plays a fixed sequence of tile picks, stopping early if the game ends."""
    out = out or sys.stdout
    for index in moves:
        result = game.select_tile(index)
        if _finish_turn(game, result, delay, out):
            break
    return game.outcome


def play_interactive(game: GameState, delay: float, out: Optional[TextIO] = None, read=input) -> Outcome:
    out = out or sys.stdout
    print(WELCOME, file=out)
    print('', file=out)
    _show(game, out)
    while True:
        try:
            text = read("Pick a tile (index or r,c), 'r' to restart, 'q' to quit: ").strip().lower()
        except EOFError:
            return game.outcome
        if text in ('q', 'quit', 'exit'):
            return game.outcome
        if text in ('r', 'restart'):
            game.restart()
            print('New game.', file=out)
            _show(game, out)
            continue
        if game.outcome != Outcome.IN_PROGRESS:
            print("The game is over. Press 'r' to play again or 'q' to quit.", file=out)
            continue
        try:
            result = game.select_tile(parse_tile(text, game.grid_size))
        except InvalidArgument as e:
            print(f"{e}. Try again.", file=out)
            continue
        _finish_turn(game, result, delay, out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Flip: a tile-matching memory game')
    parser.add_argument('--size', type=int, default=DEFAULT_GRID_SIZE, help='Board size (NxN); N*N must be even')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--delay', type=float, default=0.5, help='Seconds a mismatched pair stays face up')
    parser.add_argument('--moves', default=None, help='Play a scripted list of tiles, e.g. "0 5 1,2 3:3"')
    parser.add_argument('--show-board', action='store_true', help='Print the answer key before playing')
    parser.add_argument('--verbose', action='store_true', help='Log game transitions')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        game = GameState(args.size, seed=args.seed)
        moves = parse_moves(args.moves, game.grid_size) if args.moves is not None else None
    except FlipError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.show_board:
        print('Answer key:')
        print(game.board.pretty())
        print('')

    if moves is None:
        play_interactive(game, args.delay)
        return 0

    try:
        outcome = run_script(game, moves, delay=args.delay)
    except InvalidArgument as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    logger.debug("script finished: %s", outcome.value)
    return 0


if __name__ == '__main__':
    sys.exit(main())
