import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from flip_core.cli import (
    LOST_MESSAGE,
    WON_MESSAGE,
    main,
    parse_moves,
    parse_tile,
    play_interactive,
    run_script,
)
from game import Board, GameState, InvalidArgument, Outcome


def _fixed_game():
    return GameState.from_board(Board(size=2, values=(1, 2, 1, 2)))


class TestCliParsing(unittest.TestCase):
    def test_given_tile_forms_when_parsing_then_flat_index(self):
        self.assertEqual(parse_tile('5', 4), 5)
        self.assertEqual(parse_tile('1,2', 4), 6)
        self.assertEqual(parse_tile('3:3', 4), 15)
        self.assertEqual(parse_tile(' 1 0 ', 4), 4)
        self.assertEqual(parse_moves('0 1,1  2:0', 4), [0, 5, 8])

    def test_given_garbage_when_parsing_then_invalid_argument(self):
        for bad in ('x', '1,', '1,2,3', '4,0', 'a:b'):
            with self.assertRaises(InvalidArgument):
                parse_tile(bad, 4)


class TestCliPlay(unittest.TestCase):
    def test_given_script_when_tries_run_out_on_last_pair_then_game_over(self):
        out = io.StringIO()
        outcome = run_script(_fixed_game(), [0, 1, 0, 2, 1, 3], out=out)
        self.assertEqual(outcome, Outcome.LOST)
        text = out.getvalue()
        self.assertIn('No match.', text)
        self.assertIn('Match!', text)
        self.assertIn('Tries: 0', text)
        self.assertIn(LOST_MESSAGE, text)

    def test_given_script_when_clearing_board_then_win_and_stop(self):
        out = io.StringIO()
        game = _fixed_game()
        # trailing picks after the win are never played
        outcome = run_script(game, [0, 2, 1, 3, 0, 1], out=out)
        self.assertEqual(outcome, Outcome.WON)
        self.assertEqual(game.tries_remaining, 1)
        self.assertIn(WON_MESSAGE, out.getvalue())

    def test_given_interactive_input_when_playing_then_prompts_until_quit(self):
        answers = iter(['0', '0', 'zz', '9', '2', 'r', 'q'])
        out = io.StringIO()
        game = _fixed_game()
        play_interactive(game, delay=0, out=out, read=lambda prompt: next(answers))
        text = out.getvalue()
        self.assertIn('Welcome to the Memory Game!', text)
        self.assertIn('cannot be picked right now', text)
        self.assertIn('Try again.', text)
        self.assertIn('Match!', text)
        self.assertIn('New game.', text)
        self.assertEqual(game.tries_remaining, 3)

    def test_given_end_of_input_when_playing_then_returns(self):
        def eof(prompt):
            raise EOFError
        out = io.StringIO()
        self.assertEqual(play_interactive(_fixed_game(), 0, out=out, read=eof), Outcome.IN_PROGRESS)

    def test_given_main_with_moves_when_run_then_exit_zero(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(['--size', '2', '--seed', '1', '--delay', '0', '--moves', '0 1', '--show-board'])
        self.assertEqual(code, 0)
        self.assertIn('Answer key:', out.getvalue())
        self.assertIn('Tries: 2', out.getvalue())

    def test_given_bad_size_when_run_then_exit_two(self):
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(['--size', '3', '--moves', '0'])
        self.assertEqual(code, 2)
        self.assertIn('error:', err.getvalue())

    def test_given_out_of_range_move_when_run_then_exit_two(self):
        err = io.StringIO()
        with redirect_stdout(io.StringIO()), redirect_stderr(err):
            code = main(['--size', '2', '--delay', '0', '--moves', '0 7'])
        self.assertEqual(code, 2)
        self.assertIn('out of range', err.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
