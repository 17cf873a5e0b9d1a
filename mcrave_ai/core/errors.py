"""
Exceptions raised by the search engine.

Every error here is fatal for the search invocation that raised it: the
engine never retries, and the exception propagates to whoever called
``mcrave_search`` or ``MCRaveAgent.select_action``.
"""
from typing import Any, Optional


class SearchError(RuntimeError):
    """Base class for all search failures."""


class ContractViolationError(SearchError):
    """
    The tree or a collaborator is in a state the engine cannot continue from.
    
    Raised for a missing child behind an expanded action, an empty action
    set at a live node, an expansion with nothing left to expand, or a root
    without expanded children when the best action is requested.
    """
    
    def __init__(self, message: str, action: Any = None, state: Any = None):
        super().__init__(message)
        self.action = action
        self.state = state


class EvaluatorContractError(SearchError):
    """The state heuristic returned a value that is not a finite number."""
    
    def __init__(self, value: float, seat: int, state: Optional[Any] = None):
        super().__init__(f"Illegal heuristic value {value!r} for seat {seat}: must be a finite number")
        self.value = value
        self.seat = seat
        self.state = state
