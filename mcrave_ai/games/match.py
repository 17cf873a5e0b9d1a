"""
Running games between agents.

An agent is anything with ``select_action(state, player_id)``. Matches are
driven entirely through the ForwardModel, so any game plugs in.
"""
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple
import logging
import random

from tqdm import tqdm

from mcrave_ai.core.constants import GameResult
from mcrave_ai.core.interfaces import ForwardModel

logger = logging.getLogger(__name__)


class RandomAgent:
    """
    Agent that selects actions randomly.
    
    This agent serves as a baseline for comparison with search agents.
    """
    
    def __init__(self, forward_model: ForwardModel, name: str = "Random Agent", seed: Optional[int] = None):
        self.forward_model = forward_model
        self.name = name
        self.rng = random.Random(seed)
    
    def select_action(self, state: Any, player_id: int) -> Hashable:
        valid_actions = self.forward_model.legal_actions(state)
        if not valid_actions:
            raise ValueError(f"No valid actions for player {player_id}")
        return self.rng.choice(valid_actions)
    
    def __str__(self) -> str:
        return self.name


@dataclass
class MatchResult:
    """Outcome of one game."""
    results: Dict[int, GameResult]
    turns: int
    actions: List[Tuple[int, Hashable]] = field(default_factory=list)
    finished: bool = True
    
    @property
    def winners(self) -> List[int]:
        return [seat for seat, result in self.results.items() if result == GameResult.WIN]


def play_match(
    forward_model: ForwardModel,
    agents: Sequence[Any],
    state: Optional[Any] = None,
    max_turns: int = 500,
) -> MatchResult:
    """
    Play one game, agent ``i`` taking seat ``i``.
    
    Args:
        forward_model: Rules of the game
        agents: One agent per seat
        state: Starting state (a fresh initial state when None)
        max_turns: Turn limit after which the game is abandoned
    
    Returns:
        MatchResult with each seat's result
    """
    if state is None:
        state = forward_model.initial_state()
    
    actions: List[Tuple[int, Hashable]] = []
    turns = 0
    while not forward_model.is_terminal(state) and turns < max_turns:
        seat = forward_model.current_seat(state)
        action = agents[seat].select_action(state, seat)
        actions.append((seat, action))
        state = forward_model.apply_action(state, action)
        turns += 1
    
    finished = forward_model.is_terminal(state)
    if not finished:
        logger.warning("Match abandoned after %d turns", turns)
    
    results = {seat: forward_model.seat_result(state, seat) for seat in range(len(agents))}
    return MatchResult(results=results, turns=turns, actions=actions, finished=finished)


def play_series(
    forward_model: ForwardModel,
    agents: Sequence[Any],
    num_games: int = 10,
    rotate_seats: bool = True,
    show_progress: bool = True,
    max_turns: int = 500,
) -> Dict[str, Any]:
    """
    Play several games and tally results per agent.
    
    Args:
        forward_model: Rules of the game
        agents: Agents taking part, one per seat
        num_games: Number of games to play
        rotate_seats: Shift seat assignment by one each game
        show_progress: Whether to display a progress bar
        max_turns: Turn limit per game
    
    Returns:
        Dictionary with per-agent wins, losses and draws, and the average game length
    """
    tally: Dict[str, Dict[str, int]] = defaultdict(lambda: {"wins": 0, "losses": 0, "draws": 0})
    total_turns = 0
    
    pbar = tqdm(total=num_games, desc="Playing", disable=not show_progress)
    for game_index in range(num_games):
        shift = game_index % len(agents) if rotate_seats else 0
        seated = list(agents[shift:]) + list(agents[:shift])
        
        match = play_match(forward_model, seated, max_turns=max_turns)
        total_turns += match.turns
        
        for seat, agent in enumerate(seated):
            result = match.results[seat]
            key = str(getattr(agent, "name", agent))
            if result == GameResult.WIN:
                tally[key]["wins"] += 1
            elif result == GameResult.LOSE:
                tally[key]["losses"] += 1
            else:
                tally[key]["draws"] += 1
        
        pbar.update(1)
    pbar.close()
    
    return {
        "games": num_games,
        "results": dict(tally),
        "average_turns": total_turns / max(1, num_games),
    }
