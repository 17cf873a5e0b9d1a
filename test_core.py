#!/usr/bin/env python
"""
Tests for configuration, collaborator interfaces and heuristics.
"""
import math
import unittest

from mcrave_ai.core.constants import ActionSpace, BudgetType, GameResult
from mcrave_ai.core.heuristics import ScoreHeuristic, WinLossHeuristic
from mcrave_ai.core.interfaces import ForwardModel, FunctionHeuristic, StateHeuristic, as_heuristic
from mcrave_ai.games.nim import NimAction, NimForwardModel
from mcrave_ai.games.tictactoe import TicTacToeForwardModel
from mcrave_ai.mcts.config import MCRaveConfig, RaveScope, RaveUpdate


def play(model, moves):
    state = model.initial_state()
    for move in moves:
        state = model.apply_action(state, move)
    return state


class TestConfig(unittest.TestCase):
    """Test case for MCRaveConfig validation and conversion."""
    
    def test_defaults(self):
        config = MCRaveConfig()
        self.assertAlmostEqual(config.exploration_weight, math.sqrt(2))
        self.assertEqual(config.rave_weight, 0.5)
        self.assertEqual(config.rave_update, RaveUpdate.SIMPLE_MEAN)
        self.assertEqual(config.rollout_length, 10)
        self.assertEqual(config.max_tree_depth, 100)
        self.assertEqual(config.budget_type, BudgetType.ITERATIONS)
        self.assertEqual(config.rave_scope, RaveScope.SEARCH)
    
    def test_invalid_values(self):
        invalid = [
            {"exploration_weight": -0.1},
            {"rave_weight": 1.5},
            {"rave_weight": -0.1},
            {"epsilon": 0.0},
            {"rollout_length": -1},
            {"max_tree_depth": 0},
            {"delay_threshold": -5},
            {"budget": 0},
            {"break_ms": -1},
            {"budget_type": "forever"},
            {"rave_update": 3},
        ]
        for overrides in invalid:
            with self.subTest(**{k: str(v) for k, v in overrides.items()}):
                with self.assertRaises(ValueError):
                    MCRaveConfig(**overrides)
    
    def test_enum_names_accepted(self):
        config = MCRaveConfig(budget_type="fm_calls", rave_update="Decayed_Mean",
                              rave_scope="agent", action_space="flat")
        self.assertEqual(config.budget_type, BudgetType.FM_CALLS)
        self.assertEqual(config.rave_update, RaveUpdate.DECAYED_MEAN)
        self.assertEqual(config.rave_scope, RaveScope.AGENT)
        self.assertEqual(config.action_space, ActionSpace.FLAT)
    
    def test_presets(self):
        self.assertLess(MCRaveConfig.fast().budget, MCRaveConfig.default().budget)
        self.assertGreater(MCRaveConfig.deep().budget, MCRaveConfig.default().budget)
        
        timed = MCRaveConfig.timed(250, break_ms=20)
        self.assertEqual(timed.budget_type, BudgetType.TIME)
        self.assertEqual(timed.budget, 250)
        self.assertEqual(timed.break_ms, 20)
    
    def test_dict_conversion(self):
        config = MCRaveConfig(rave_update=RaveUpdate.DECAYED_MEAN, budget=42, seed=9)
        data = config.to_dict()
        self.assertEqual(data["rave_update"], "DECAYED_MEAN")
        self.assertEqual(data["budget_type"], "ITERATIONS")
        
        data["not_a_field"] = True
        self.assertEqual(MCRaveConfig.from_dict(data), config)
        self.assertIn("budget=42", str(config))


class TestInterfaces(unittest.TestCase):
    """Test case for heuristic adapters."""
    
    def test_function_heuristic(self):
        heuristic = as_heuristic(lambda state, seat: state * 2 + seat)
        self.assertIsInstance(heuristic, StateHeuristic)
        self.assertEqual(heuristic.evaluate_state(3, 1), 7)
        self.assertEqual(heuristic(3, 0), 6)
        self.assertEqual(heuristic.min_value, float("-inf"))
    
    def test_existing_heuristic_passes_through(self):
        heuristic = FunctionHeuristic(lambda state, seat: 0.0, min_value=-1.0, max_value=1.0)
        self.assertIs(as_heuristic(heuristic), heuristic)
        self.assertEqual((heuristic.min_value, heuristic.max_value), (-1.0, 1.0))
    
    def test_rejects_non_callable(self):
        with self.assertRaises(TypeError):
            as_heuristic(42)
    
    def test_optional_forward_model_methods(self):
        class CounterModel(ForwardModel):
            def copy_state(self, state):
                return state
            
            def legal_actions(self, state, action_space=ActionSpace.DEFAULT):
                return [1]
            
            def apply_action(self, state, action):
                return state + action
            
            def current_seat(self, state):
                return 0
            
            def is_terminal(self, state):
                return state >= 3
        
        model = CounterModel()
        for method in (model.initial_state, lambda: model.game_score(0, 0),
                       lambda: model.seat_result(0, 0), lambda: model.num_seats(0)):
            with self.assertRaises(NotImplementedError):
                method()
        
        action = ["mutable"]
        copied = model.copy_action(action)
        self.assertEqual(copied, action)
        self.assertIsNot(copied, action)


class TestHeuristics(unittest.TestCase):
    """Test case for the game-independent heuristics."""
    
    def setUp(self):
        self.model = TicTacToeForwardModel()
        self.x_wins = play(self.model, [0, 3, 1, 4, 2])
        self.draw = play(self.model, [0, 1, 2, 4, 3, 5, 7, 6, 8])
    
    def test_score_heuristic(self):
        heuristic = ScoreHeuristic(self.model)
        self.assertEqual(heuristic(self.x_wins, 0), 1.5)
        self.assertEqual(heuristic(self.x_wins, 1), -0.5)
        self.assertEqual(heuristic(self.draw, 0), 0.0)
        self.assertEqual(heuristic(self.model.initial_state(), 1), 0.0)
    
    def test_score_heuristic_nim(self):
        nim = NimForwardModel(heaps=(2,), num_players=3)
        state = nim.apply_action(nim.initial_state(), NimAction(0, 2))
        heuristic = ScoreHeuristic(nim)
        self.assertEqual(heuristic(state, 0), 1.5)
        self.assertEqual(heuristic(state, 2), 0.0)
    
    def test_win_loss_heuristic(self):
        heuristic = WinLossHeuristic(self.model)
        self.assertEqual(heuristic(self.x_wins, 0), 1.0)
        self.assertEqual(heuristic(self.x_wins, 1), 0.0)
        self.assertEqual(heuristic(self.draw, 1), 0.5)
        self.assertEqual(heuristic(self.model.initial_state(), 0), 0.5)
        self.assertEqual((heuristic.min_value, heuristic.max_value), (0.0, 1.0))
    
    def test_seat_results(self):
        self.assertEqual(self.model.seat_result(self.x_wins, 0), GameResult.WIN)
        self.assertEqual(self.model.seat_result(self.draw, 0), GameResult.DRAW)
        self.assertEqual(self.model.seat_result(self.model.initial_state(), 0), GameResult.ONGOING)


if __name__ == "__main__":
    unittest.main()
