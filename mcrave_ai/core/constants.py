"""
Constants shared by the search engine and the forward models.

This module defines the budget kinds that bound a search, the action-space
modes a forward model may be asked for, and per-seat game results.
"""
from enum import Enum, auto
from typing import Final


class BudgetType(Enum):
    """Enum representing the resource that bounds one search invocation."""
    TIME = auto()        # Milliseconds of wall-clock time
    ITERATIONS = auto()  # Selection/rollout/backpropagation cycles
    FM_CALLS = auto()    # Calls to ForwardModel.apply_action


class ActionSpace(Enum):
    """Enum representing how a forward model should structure its actions."""
    DEFAULT = auto()
    FLAT = auto()
    DEEP = auto()


class GameResult(Enum):
    """Enum representing the result of a game from one seat's point of view."""
    ONGOING = auto()
    WIN = auto()
    LOSE = auto()
    DRAW = auto()


# Numerical floor used in every division of the search statistics
DEFAULT_EPSILON: Final[float] = 1e-6

# Remaining milliseconds below which a time-budgeted search stops
DEFAULT_BREAK_MS: Final[int] = 10

# Completed iterations before rollouts switch from random to RAVE-biased play
DEFAULT_DELAY_THRESHOLD: Final[int] = 200

# Multipliers applied to the raw game score by ScoreHeuristic
WIN_SCORE_MULTIPLIER: Final[float] = 1.5
LOSE_SCORE_MULTIPLIER: Final[float] = 0.5
