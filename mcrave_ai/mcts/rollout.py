"""
Simulation phase of Monte Carlo RAVE search.

Rollouts play uniformly random actions until the search has completed
``delay_threshold`` iterations, then sample actions in proportion to their
RAVE values. Every action played is recorded so backpropagation can credit
it in the RAVE table.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Hashable, List, Sequence
import math

import numpy as np

from mcrave_ai.core.errors import ContractViolationError, EvaluatorContractError
from mcrave_ai.mcts.node import RaveNode, SearchContext


@dataclass
class RolloutResult:
    """Outcome of one simulation."""
    value: float
    actions: List[Hashable] = field(default_factory=list)
    steps: int = 0


def weighted_random_select(actions: Sequence[Hashable], weights: Sequence[float], random_value: float) -> Hashable:
    """
    Pick an action by a cumulative-probability draw.
    
    Weights are normalized to sum to one; negative or non-finite weights count
    as zero, and an all-zero vector falls back to a uniform distribution.
    
    Args:
        actions: Candidate actions
        weights: Unnormalized weight per action
        random_value: Uniform draw in [0, 1)
    
    Returns:
        The first action whose cumulative probability reaches ``random_value``
    """
    if not actions:
        raise ValueError("Cannot select from an empty action list")
    
    w = np.asarray(weights, dtype=float)
    w = np.where(np.isfinite(w), np.clip(w, 0.0, None), 0.0)
    total = w.sum()
    if total > 0.0:
        probabilities = w / total
    else:
        probabilities = np.full(len(actions), 1.0 / len(actions))
    
    cumulative = np.cumsum(probabilities)
    index = int(np.searchsorted(cumulative, random_value, side='left'))
    # Rounding can leave the last cumulative value just under 1
    return actions[min(index, len(actions) - 1)]


class RolloutPolicy:
    """Chooses rollout actions and evaluates the state a rollout ends in."""
    
    def __init__(self, context: SearchContext):
        self.context = context
    
    def _legal_actions(self, state: Any) -> List[Hashable]:
        actions = self.context.forward_model.legal_actions(state, self.context.config.action_space)
        if not actions:
            raise ContractViolationError("No legal actions in a non-terminal rollout state", state=state)
        return actions
    
    def random_action(self, state: Any) -> Hashable:
        return self.context.rng.choice(self._legal_actions(state))
    
    def biased_action(self, state: Any) -> Hashable:
        """
        Sample an action with probability proportional to its RAVE blend.
        
        Actions without a RAVE entry default to a value and count of 1.
        """
        actions = self._legal_actions(state)
        rave = self.context.rave
        epsilon = self.context.config.epsilon
        weights = [rave.blend(action, epsilon, default=1.0) for action in actions]
        return weighted_random_select(actions, weights, self.context.rng.random())
    
    def finished(self, state: Any, depth: int) -> bool:
        if depth >= self.context.config.rollout_length:
            return True
        return self.context.forward_model.is_terminal(state)
    
    def simulate(self, node: RaveNode, iteration: int) -> RolloutResult:
        """
        Run a rollout from a copy of ``node``'s state.
        
        Args:
            node: Node selected by the tree policy
            iteration: Number of search iterations completed so far
        
        Returns:
            Rollout value and the actions played
        """
        config = self.context.config
        state = self.context.forward_model.copy_state(node.state)
        actions: List[Hashable] = []
        depth = 0
        
        if config.rollout_length > 0:
            while not self.finished(state, depth):
                if iteration < config.delay_threshold:
                    action = self.random_action(state)
                else:
                    action = self.biased_action(state)
                actions.append(action)
                state = node.advance(state, action)
                depth += 1
        
        return RolloutResult(value=self.evaluate(state), actions=actions, steps=depth)
    
    def evaluate(self, state: Any) -> float:
        """
        Score ``state`` for the searching agent.
        
        Raises:
            EvaluatorContractError: If the heuristic returns a non-finite value
        """
        seat = self.context.player_id
        value = self.context.heuristic.evaluate_state(state, seat)
        if not math.isfinite(value):
            raise EvaluatorContractError(value, seat, state)
        return float(value)
