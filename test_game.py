import unittest

from game import (
    Board,
    GameState,
    Outcome,
    ResultKind,
    Status,
)


def make_board(rows):
    size = len(rows)
    flat = []
    for r in rows:
        assert len(r) == size
        flat.extend(r)
    return Board(size=size, values=tuple(flat))


class TestFlipScenarios(unittest.TestCase):
    def test_last_pair_on_last_try_is_a_loss(self):
        # 2x2 board laid out as [1,2,1,2]: 3 tries for 2 pairs
        state = GameState.from_board(make_board([[1, 2], [1, 2]]))
        self.assertEqual(state.max_tries, 3)

        r = state.select_tile(0)
        self.assertEqual(r.kind, ResultKind.FIRST_REVEALED)
        self.assertEqual(r.value, 1)
        self.assertEqual(state.pending_first, 0)
        self.assertEqual(state.tries_remaining, 3)

        r = state.select_tile(1)
        self.assertEqual(r.kind, ResultKind.MISMATCH)
        self.assertEqual(r.value, 2)
        self.assertTrue(r.mismatch_pending)
        self.assertEqual(state.tries_remaining, 2)

        self.assertTrue(state.resolve_mismatch())
        self.assertEqual(state.statuses[0], Status.HIDDEN)
        self.assertEqual(state.statuses[1], Status.HIDDEN)
        self.assertIsNone(state.pending_first)

        state.select_tile(0)
        r = state.select_tile(2)
        self.assertEqual(r.kind, ResultKind.MATCH)
        self.assertEqual(state.statuses[0], Status.MATCHED)
        self.assertEqual(state.statuses[2], Status.MATCHED)
        self.assertEqual(state.tries_remaining, 1)
        self.assertEqual(state.outcome, Outcome.IN_PROGRESS)

        state.select_tile(1)
        r = state.select_tile(3)
        self.assertEqual(r.kind, ResultKind.MATCH)
        self.assertEqual(state.tries_remaining, 0)
        self.assertTrue(state.is_complete())
        # Tries ran out on the same move that cleared the board: loss wins the tie.
        self.assertEqual(state.outcome, Outcome.LOST)
        self.assertEqual(r.outcome, Outcome.LOST)

    def test_clearing_board_with_tries_left_is_a_win(self):
        state = GameState.from_board(make_board([[1, 2], [1, 2]]))
        state.select_tile(0)
        state.select_tile(2)
        state.select_tile(1)
        r = state.select_tile(3)
        self.assertEqual(r.kind, ResultKind.MATCH)
        self.assertEqual(state.tries_remaining, 1)
        self.assertEqual(state.outcome, Outcome.WON)

    def test_no_moves_after_game_over(self):
        state = GameState.from_board(make_board([[1, 2], [1, 2]]))
        state.select_tile(0)
        state.select_tile(2)
        state.select_tile(1)
        state.select_tile(3)
        self.assertEqual(state.outcome, Outcome.WON)
        before = state.current_view()
        r = state.select_tile(0)
        self.assertEqual(r.kind, ResultKind.IGNORED)
        self.assertEqual(state.current_view(), before)

    def test_random_deal_plays_to_a_finish(self):
        # Perfect memory: always pair up equal values, never miss
        state = GameState(4, seed=3)
        seen = {}
        for i, v in enumerate(state.board.values):
            seen.setdefault(v, []).append(i)
        for a, b in seen.values():
            state.select_tile(a)
            state.select_tile(b)
        self.assertEqual(state.outcome, Outcome.WON)
        self.assertEqual(state.tries_remaining, 15 - 8)


if __name__ == '__main__':
    unittest.main()
