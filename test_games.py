#!/usr/bin/env python
"""
Tests for the example games, the match runner and the command-line entry point.
"""
import contextlib
import io
import unittest

from mcrave_ai.core.constants import GameResult
from mcrave_ai.games import GAMES, RandomAgent, play_match, play_series
from mcrave_ai.games.nim import NimAction, NimForwardModel
from mcrave_ai.games.tictactoe import TicTacToeForwardModel, find_winner
from mcrave_ai.mcts.agent import MCRaveAgent
from mcrave_ai.mcts.config import MCRaveConfig
from mcrave_ai.play import parse_args, run


class TestTicTacToe(unittest.TestCase):
    """Test case for the Tic-Tac-Toe forward model."""
    
    def setUp(self):
        self.model = TicTacToeForwardModel()
        self.state = self.model.initial_state()
    
    def test_initial_state(self):
        self.assertEqual(self.model.legal_actions(self.state), list(range(9)))
        self.assertEqual(self.model.current_seat(self.state), 0)
        self.assertFalse(self.model.is_terminal(self.state))
        self.assertEqual(self.model.num_seats(self.state), 2)
    
    def test_turns_alternate(self):
        self.model.apply_action(self.state, 4)
        self.assertEqual(self.model.current_seat(self.state), 1)
        self.assertNotIn(4, self.model.legal_actions(self.state))
        self.assertEqual(self.state.turn_count, 1)
    
    def test_row_win(self):
        for move in (0, 3, 1, 4, 2):
            self.model.apply_action(self.state, move)
        self.assertTrue(self.model.is_terminal(self.state))
        self.assertEqual(self.state.winner, 0)
        self.assertEqual(self.model.legal_actions(self.state), [])
        self.assertEqual(self.model.game_score(self.state, 0), 1.0)
        self.assertEqual(self.model.game_score(self.state, 1), -1.0)
        self.assertEqual(self.model.seat_result(self.state, 1), GameResult.LOSE)
    
    def test_draw(self):
        for move in (0, 1, 2, 4, 3, 5, 7, 6, 8):
            self.model.apply_action(self.state, move)
        self.assertTrue(self.model.is_terminal(self.state))
        self.assertIsNone(self.state.winner)
        self.assertEqual(self.model.seat_result(self.state, 0), GameResult.DRAW)
    
    def test_illegal_moves(self):
        self.model.apply_action(self.state, 0)
        with self.assertRaises(ValueError):
            self.model.apply_action(self.state, 0)
        with self.assertRaises(ValueError):
            self.model.apply_action(self.state, 9)
    
    def test_copy_is_independent(self):
        copy = self.model.copy_state(self.state)
        self.model.apply_action(copy, 0)
        self.assertIsNone(self.state.board[0])
        self.assertEqual(self.state.current_player, 0)
    
    def test_find_winner_diagonal(self):
        board = [1, None, 0, None, 1, 0, None, None, 1]
        self.assertEqual(find_winner(board), 1)
        self.assertIsNone(find_winner([None] * 9))
    
    def test_render(self):
        self.model.apply_action(self.state, 4)
        rendered = self.model.render(self.state)
        self.assertIn("X", rendered)
        self.assertEqual(rendered.count("\n"), 4)


class TestNim(unittest.TestCase):
    """Test case for the Nim forward model."""
    
    def test_legal_actions(self):
        model = NimForwardModel(heaps=(1, 2))
        actions = model.legal_actions(model.initial_state())
        self.assertEqual(actions, [NimAction(0, 1), NimAction(1, 1), NimAction(1, 2)])
        
        capped = NimForwardModel(heaps=(5,), max_take=2)
        self.assertEqual(len(capped.legal_actions(capped.initial_state())), 2)
    
    def test_last_taker_wins(self):
        model = NimForwardModel(heaps=(1, 1), num_players=3)
        state = model.initial_state()
        model.apply_action(state, NimAction(0, 1))
        self.assertEqual(model.current_seat(state), 1)
        model.apply_action(state, NimAction(1, 1))
        
        self.assertTrue(model.is_terminal(state))
        self.assertEqual(state.winner, 1)
        self.assertEqual(model.seat_result(state, 1), GameResult.WIN)
        self.assertEqual(model.seat_result(state, 0), GameResult.LOSE)
        self.assertEqual(model.seat_result(state, 2), GameResult.LOSE)
        self.assertEqual(model.num_seats(state), 3)
    
    def test_invalid_moves(self):
        model = NimForwardModel(heaps=(2,), max_take=1)
        state = model.initial_state()
        for action in (NimAction(1, 1), NimAction(0, 3), NimAction(0, 2), NimAction(0, 0)):
            with self.assertRaises(ValueError):
                model.apply_action(state, action)
    
    def test_invalid_setup(self):
        with self.assertRaises(ValueError):
            NimForwardModel(num_players=1)
        with self.assertRaises(ValueError):
            NimForwardModel(heaps=())
        with self.assertRaises(ValueError):
            NimForwardModel(max_take=0)
        with self.assertRaises(ValueError):
            NimForwardModel(heaps=(0, 0))
        
        # Empty heaps are fine as long as one object remains
        model = NimForwardModel(heaps=(0, 2))
        self.assertEqual(len(model.legal_actions(model.initial_state())), 2)
    
    def test_actions_equal_across_states(self):
        model = NimForwardModel()
        first = model.legal_actions(model.initial_state())
        second = model.legal_actions(model.copy_state(model.initial_state()))
        self.assertEqual(first, second)
        self.assertEqual(len({hash(a) for a in first}), len(first))


class TestMatches(unittest.TestCase):
    """Test case for match and series play."""
    
    def test_random_match_finishes(self):
        model = TicTacToeForwardModel()
        agents = [RandomAgent(model, seed=1), RandomAgent(model, seed=2)]
        match = play_match(model, agents)
        self.assertTrue(match.finished)
        self.assertEqual(match.turns, len(match.actions))
        self.assertLessEqual(len(match.winners), 1)
    
    def test_turn_limit(self):
        model = NimForwardModel(heaps=(10, 10))
        agents = [RandomAgent(model, seed=3), RandomAgent(model, seed=4)]
        with self.assertLogs("mcrave_ai.games.match", level="WARNING"):
            match = play_match(model, agents, max_turns=1)
        self.assertFalse(match.finished)
        self.assertEqual(match.winners, [])
    
    def test_series_tally(self):
        model = NimForwardModel(heaps=(2, 3))
        agents = [
            MCRaveAgent(model, config=MCRaveConfig(budget=50, seed=5), name="MCRave"),
            RandomAgent(model, name="Random", seed=6),
        ]
        summary = play_series(model, agents, num_games=4, show_progress=False)
        
        self.assertEqual(summary["games"], 4)
        self.assertEqual(set(summary["results"]), {"MCRave", "Random"})
        for tally in summary["results"].values():
            self.assertEqual(sum(tally.values()), 4)
            self.assertEqual(tally["draws"], 0)
        self.assertGreater(summary["average_turns"], 0)
    
    def test_takes_whole_heap_to_win(self):
        """From a won Nim position the searching seat takes the whole single heap."""
        model = NimForwardModel(heaps=(4,))
        agent = MCRaveAgent(model, config=MCRaveConfig(budget=300, seed=7))
        self.assertEqual(agent.select_action(model.initial_state(), 0), NimAction(0, 4))


class TestCommandLine(unittest.TestCase):
    """Test case for the mcrave-play entry point."""
    
    def test_run_series(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            summary = run(parse_args(["--game", "tictactoe", "--games", "2", "--budget", "20",
                                  "--no-progress", "--seed", "1"]))
        self.assertEqual(summary["games"], 2)
        self.assertIn('"games": 2', output.getvalue())
    
    def test_log_level_choices(self):
        self.assertEqual(parse_args(["--log-level", "debug"]).log_level, "DEBUG")
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parse_args(["--log-level", "chatty"])
    
    def test_known_games(self):
        self.assertEqual(set(GAMES), {"tictactoe", "nim"})


if __name__ == "__main__":
    unittest.main()
