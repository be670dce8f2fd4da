"""
Flip core Python package.

This package contains the data structures and pure game logic for the Flip
memory game, kept apart from any presentation code so it can be driven from
the terminal, the Flask app, or tests.
Modules:
- board.py: Board, Status, Cell helpers and text rendering
- deal.py: paired value generation and shuffling
- state.py: GameState (the game state machine), SelectResult, Outcome
- view.py: BoardView, CellView snapshots for rendering
- errors.py: FlipError, ConfigurationError, InvalidArgument
- cli.py: terminal harness
"""
