"""
Game-independent state heuristics.

Both heuristics read the game through the ForwardModel, so they work for
any game whose forward model reports scores and per-seat results.
"""
from typing import Any

from mcrave_ai.core.constants import GameResult, WIN_SCORE_MULTIPLIER, LOSE_SCORE_MULTIPLIER
from mcrave_ai.core.interfaces import ForwardModel, StateHeuristic


class ScoreHeuristic(StateHeuristic):
    """
    Raw game score, treating a win as a 50% bonus and a loss as halving it.
    """
    
    def __init__(self, forward_model: ForwardModel):
        self.forward_model = forward_model
    
    def evaluate_state(self, state: Any, seat: int) -> float:
        score = float(self.forward_model.game_score(state, seat))
        result = self.forward_model.seat_result(state, seat)
        if result == GameResult.WIN:
            return score * WIN_SCORE_MULTIPLIER
        if result == GameResult.LOSE:
            return score * LOSE_SCORE_MULTIPLIER
        return score


class WinLossHeuristic(StateHeuristic):
    """1 for a win, 0 for a loss, 0.5 for a draw or an unfinished game."""
    
    def __init__(self, forward_model: ForwardModel):
        self.forward_model = forward_model
    
    def evaluate_state(self, state: Any, seat: int) -> float:
        result = self.forward_model.seat_result(state, seat)
        if result == GameResult.WIN:
            return 1.0
        if result == GameResult.LOSE:
            return 0.0
        return 0.5
    
    @property
    def min_value(self) -> float:
        return 0.0
    
    @property
    def max_value(self) -> float:
        return 1.0
