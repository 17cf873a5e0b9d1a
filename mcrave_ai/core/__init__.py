"""
MCRave AI Core Package

This package contains the game-facing side of the engine:
- Forward model and state heuristic interfaces
- Generic heuristics built on those interfaces
- Error taxonomy
- Constants and enums

All core components can be imported directly from this package.
"""

# Interfaces
from mcrave_ai.core.interfaces import (
    ForwardModel, StateHeuristic, FunctionHeuristic, as_heuristic
)

# Heuristics
from mcrave_ai.core.heuristics import ScoreHeuristic, WinLossHeuristic

# Errors
from mcrave_ai.core.errors import (
    SearchError, ContractViolationError, EvaluatorContractError
)

# Constants
from mcrave_ai.core.constants import (
    BudgetType, ActionSpace, GameResult,
    DEFAULT_EPSILON, DEFAULT_BREAK_MS, DEFAULT_DELAY_THRESHOLD
)

__all__ = [
    # Interfaces
    'ForwardModel', 'StateHeuristic', 'FunctionHeuristic', 'as_heuristic',
    
    # Heuristics
    'ScoreHeuristic', 'WinLossHeuristic',
    
    # Errors
    'SearchError', 'ContractViolationError', 'EvaluatorContractError',
    
    # Constants
    'BudgetType', 'ActionSpace', 'GameResult',
    'DEFAULT_EPSILON', 'DEFAULT_BREAK_MS', 'DEFAULT_DELAY_THRESHOLD',
]
