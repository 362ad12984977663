import unittest

from nim_core.ai import ai_pick_move, choose_first_player
from nim_core.errors import InvalidMove, ScriptExhausted
from nim_core.evaluator import Evaluator, TieBreak
from nim_core.play import Ply, game_winner, simulate_game
from nim_core.state import GameState, Player

C = Player.COMPUTER
H = Player.HUMAN


def trace(record):
    return [(p.player, p.move, p.remaining) for p in record.plies]


class TestScriptedGames(unittest.TestCase):
    def setUp(self):
        self.low = Evaluator()
        self.high = Evaluator(tie_break=TieBreak.LARGEST)

    def test_given_nine_and_1_1_1_when_computer_answers_then_computer_wins(self):
        for ev in (self.low, self.high):
            rec = simulate_game(9, [1, 1, 1], ev)
            self.assertIs(rec.winner, C)
            self.assertEqual(trace(rec), [(H, 1, 8), (C, 1, 7), (H, 1, 6), (C, 4, 2), (H, 1, 1), (C, 1, 0)])
            self.assertEqual(rec.final, GameState(H, 0))

    def test_given_ten_and_1_3_1_when_lost_computer_takes_largest_then_human_wins(self):
        rec = simulate_game(10, [1, 3, 1], self.high)
        self.assertIs(rec.winner, H)
        self.assertEqual(trace(rec), [(H, 1, 9), (C, 4, 5), (H, 3, 2), (C, 1, 1), (H, 1, 0)])
        self.assertEqual(rec.final, GameState(C, 0))

    def test_given_ten_and_1_3_1_when_lost_computer_takes_smallest_then_human_blunder_punished(self):
        rec = simulate_game(10, [1, 3, 1], self.low)
        # taking 3 from 8 hands the computer a won pile of 5
        self.assertEqual(trace(rec), [(H, 1, 9), (C, 1, 8), (H, 3, 5), (C, 3, 2), (H, 1, 1), (C, 1, 0)])
        self.assertIs(rec.winner, C)

    def test_given_six_and_4_1_when_played_then_human_wins(self):
        for ev in (self.low, self.high):
            rec = simulate_game(6, [4, 1], ev)
            self.assertIs(rec.winner, H)
            self.assertEqual(trace(rec), [(H, 4, 2), (C, 1, 1), (H, 1, 0)])

    def test_given_two_and_1_when_played_then_computer_wins(self):
        rec = simulate_game(2, [1], self.low)
        self.assertIs(rec.winner, C)
        self.assertEqual(rec.plies, [Ply(H, 1, 1), Ply(C, 1, 0)])

    def test_given_twenty_and_4_3_3_1_when_played_then_result_depends_on_tie_break(self):
        high = simulate_game(20, [4, 3, 3, 1], self.high)
        self.assertIs(high.winner, H)
        self.assertEqual(trace(high), [(H, 4, 16), (C, 4, 12), (H, 3, 9), (C, 4, 5), (H, 3, 2), (C, 1, 1), (H, 1, 0)])

        low = simulate_game(20, [4, 3, 3, 1], self.low)
        self.assertIs(low.winner, C)
        self.assertEqual(
            trace(low),
            [(H, 4, 16), (C, 1, 15), (H, 3, 12), (C, 3, 9), (H, 3, 6), (C, 4, 2), (H, 1, 1), (C, 1, 0)],
        )

    def test_given_computer_first_when_it_can_win_outright_then_no_human_moves_needed(self):
        rec = simulate_game(4, [], self.low, first=C)
        self.assertIs(rec.winner, C)
        self.assertEqual(trace(rec), [(C, 4, 0)])

    def test_given_short_script_when_game_not_over_then_script_exhausted(self):
        with self.assertRaises(ScriptExhausted):
            simulate_game(10, [1], self.low)

    def test_given_illegal_scripted_move_when_played_then_invalid_move(self):
        with self.assertRaises(InvalidMove):
            simulate_game(3, [4], self.low)
        with self.assertRaises(InvalidMove):
            simulate_game(10, [2], self.low)

    def test_given_no_evaluator_when_simulating_then_default_move_set_used(self):
        self.assertIs(simulate_game(9, [1, 1, 1]).winner, C)

    def test_given_empty_pile_when_simulating_then_starting_side_lost(self):
        rec = simulate_game(0, [], self.low)
        self.assertIs(rec.winner, C)
        self.assertEqual(rec.plies, [])


class TestHelpers(unittest.TestCase):
    def test_given_states_when_checking_winner_then_only_finished_games_report(self):
        self.assertIs(game_winner(GameState(H, 0)), C)
        self.assertIs(game_winner(GameState(C, 0)), H)
        self.assertIsNone(game_winner(GameState(H, 3)))
        self.assertIs(game_winner(GameState(H, 1), (2, 5)), C)

    def test_given_positions_when_ai_picks_then_best_move_or_none(self):
        ev = Evaluator()
        self.assertEqual(ai_pick_move(GameState(C, 5), ev), 3)
        self.assertIsNone(ai_pick_move(GameState(C, 0), ev))

    def test_given_pile_when_choosing_first_player_then_computer_takes_winning_side(self):
        ev = Evaluator()
        self.assertIs(choose_first_player(8, ev), C)
        self.assertIs(choose_first_player(7, ev), H)
        self.assertIs(choose_first_player(9, ev), H)


if __name__ == "__main__":
    unittest.main(verbosity=2)
