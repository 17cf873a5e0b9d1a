"""
Collaborator interfaces consumed by the search engine.

The engine never inspects concrete game types. A game plugs in through a
ForwardModel (copying states, enumerating and applying actions) and a
StateHeuristic (scoring a terminal or truncated state for one seat).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Callable, Hashable, List, Union

from mcrave_ai.core.constants import ActionSpace, GameResult


class ForwardModel(ABC):
    """
    Rules engine for one game.
    
    States are opaque to the engine. Actions must be hashable, since they key
    both node children and the RAVE table, and equal actions must compare
    equal across different states for RAVE statistics to be shared.
    """
    
    @abstractmethod
    def copy_state(self, state: Any) -> Any:
        """Return a deep copy of ``state`` that shares nothing mutable with it."""
    
    @abstractmethod
    def legal_actions(self, state: Any, action_space: ActionSpace = ActionSpace.DEFAULT) -> List[Hashable]:
        """
        Enumerate the legal actions in ``state``.
        
        The result must be deterministic for a fixed state and action space;
        search reproducibility under a fixed seed depends on it.
        """
    
    @abstractmethod
    def apply_action(self, state: Any, action: Hashable) -> Any:
        """Advance ``state`` in place by ``action`` and return it."""
    
    @abstractmethod
    def current_seat(self, state: Any) -> int:
        """Return the seat that acts next in ``state``."""
    
    @abstractmethod
    def is_terminal(self, state: Any) -> bool:
        """Return True if the game in ``state`` is over."""
    
    def initial_state(self) -> Any:
        """Return the starting state of a new game."""
        raise NotImplementedError(f"{type(self).__name__} does not create initial states")
    
    def copy_action(self, action: Hashable) -> Hashable:
        """Return a copy of ``action`` safe to hand to ``apply_action``."""
        return deepcopy(action)
    
    def num_seats(self, state: Any) -> int:
        """Return the number of seats taking part in ``state``."""
        raise NotImplementedError(f"{type(self).__name__} does not report its number of seats")
    
    def game_score(self, state: Any, seat: int) -> float:
        """Return the raw game score of ``seat`` in ``state``."""
        raise NotImplementedError(f"{type(self).__name__} does not report game scores")
    
    def seat_result(self, state: Any, seat: int) -> GameResult:
        """Return the result of the game for ``seat`` (ONGOING while it is running)."""
        raise NotImplementedError(f"{type(self).__name__} does not report seat results")


class StateHeuristic(ABC):
    """Maps a state to a real-valued score from one seat's point of view."""
    
    @abstractmethod
    def evaluate_state(self, state: Any, seat: int) -> float:
        """Score ``state`` for ``seat``. Must return a finite number."""
    
    @property
    def min_value(self) -> float:
        return float('-inf')
    
    @property
    def max_value(self) -> float:
        return float('inf')
    
    def __call__(self, state: Any, seat: int) -> float:
        return self.evaluate_state(state, seat)


class FunctionHeuristic(StateHeuristic):
    """Adapter turning a plain ``(state, seat) -> float`` callable into a StateHeuristic."""
    
    def __init__(
        self,
        function: Callable[[Any, int], float],
        min_value: float = float('-inf'),
        max_value: float = float('inf'),
    ):
        self.function = function
        self._min_value = min_value
        self._max_value = max_value
    
    def evaluate_state(self, state: Any, seat: int) -> float:
        return self.function(state, seat)
    
    @property
    def min_value(self) -> float:
        return self._min_value
    
    @property
    def max_value(self) -> float:
        return self._max_value


HeuristicLike = Union[StateHeuristic, Callable[[Any, int], float]]


def as_heuristic(heuristic: HeuristicLike) -> StateHeuristic:
    """
    Normalize a heuristic argument.
    
    Args:
        heuristic: A StateHeuristic or a ``(state, seat) -> float`` callable
    
    Returns:
        A StateHeuristic
    """
    if isinstance(heuristic, StateHeuristic):
        return heuristic
    if callable(heuristic):
        return FunctionHeuristic(heuristic)
    raise TypeError(f"Expected a StateHeuristic or callable, got {type(heuristic).__name__}")
