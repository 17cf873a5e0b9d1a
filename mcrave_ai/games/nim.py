"""
Multi-seat Nim forward model.

Seats take turns removing one or more objects from a single heap. Under
normal play the seat that takes the last object wins and every other seat
loses. An optional ``max_take`` caps how many objects one move may remove.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from mcrave_ai.core.constants import ActionSpace, GameResult
from mcrave_ai.core.interfaces import ForwardModel


@dataclass(frozen=True)
class NimAction:
    """Remove ``count`` objects from heap ``heap``."""
    heap: int
    count: int
    
    def __str__(self) -> str:
        return f"take {self.count} from heap {self.heap}"


@dataclass
class NimState:
    heaps: List[int] = field(default_factory=list)
    num_players: int = 2
    current_player: int = 0
    winner: Optional[int] = None


class NimForwardModel(ForwardModel):
    """Rules of normal-play Nim for two or more seats."""
    
    def __init__(self, heaps: Sequence[int] = (3, 4, 5), num_players: int = 2, max_take: Optional[int] = None):
        if num_players < 2:
            raise ValueError("Nim needs at least two players")
        if not heaps or any(h < 0 for h in heaps):
            raise ValueError("heaps must be a non-empty sequence of non-negative sizes")
        if sum(heaps) == 0:
            raise ValueError("heaps must hold at least one object")
        if max_take is not None and max_take <= 0:
            raise ValueError("max_take must be positive or None")
        
        self.heaps = tuple(heaps)
        self.num_players = num_players
        self.max_take = max_take
    
    def initial_state(self) -> NimState:
        return NimState(heaps=list(self.heaps), num_players=self.num_players)
    
    def copy_state(self, state: NimState) -> NimState:
        return NimState(
            heaps=list(state.heaps),
            num_players=state.num_players,
            current_player=state.current_player,
            winner=state.winner,
        )
    
    def legal_actions(self, state: NimState, action_space: ActionSpace = ActionSpace.DEFAULT) -> List[NimAction]:
        if state.winner is not None:
            return []
        actions = []
        for heap, size in enumerate(state.heaps):
            limit = size if self.max_take is None else min(size, self.max_take)
            for count in range(1, limit + 1):
                actions.append(NimAction(heap, count))
        return actions
    
    def apply_action(self, state: NimState, action: NimAction) -> NimState:
        if state.winner is not None:
            raise ValueError("Game is already over")
        if not 0 <= action.heap < len(state.heaps):
            raise ValueError(f"No heap {action.heap}")
        if action.count <= 0 or action.count > state.heaps[action.heap]:
            raise ValueError(f"Cannot {action} (heap holds {state.heaps[action.heap]})")
        if self.max_take is not None and action.count > self.max_take:
            raise ValueError(f"Cannot take more than {self.max_take} objects")
        
        state.heaps[action.heap] -= action.count
        if sum(state.heaps) == 0:
            state.winner = state.current_player
        else:
            state.current_player = (state.current_player + 1) % state.num_players
        return state
    
    def current_seat(self, state: NimState) -> int:
        return state.current_player
    
    def is_terminal(self, state: NimState) -> bool:
        return state.winner is not None
    
    def copy_action(self, action: NimAction) -> NimAction:
        # Frozen dataclass
        return action
    
    def num_seats(self, state: NimState) -> int:
        return state.num_players
    
    def game_score(self, state: NimState, seat: int) -> float:
        return 1.0 if state.winner == seat else 0.0
    
    def seat_result(self, state: NimState, seat: int) -> GameResult:
        if state.winner is None:
            return GameResult.ONGOING
        return GameResult.WIN if state.winner == seat else GameResult.LOSE
