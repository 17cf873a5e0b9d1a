"""
RAVE / AMAF statistics shared by every node of one search tree.

The table maps each action to a running value estimate and the number of
backpropagation events that contributed to it, regardless of where in the
tree or rollout the action was played (All-Moves-As-First).
"""
from __future__ import annotations
from typing import Dict, Hashable, Iterable

from mcrave_ai.mcts.config import RaveUpdate


class RaveTable:
    """
    Two co-indexed mappings, action -> value and action -> count.
    
    The update rule is fixed at construction so one search never mixes
    the simple and decayed formulas.
    """
    
    def __init__(self, update_rule: RaveUpdate = RaveUpdate.SIMPLE_MEAN):
        self.update_rule = update_rule
        self.values: Dict[Hashable, float] = {}
        self.counts: Dict[Hashable, int] = {}
        # Count an action had when selection first preferred it (decayed rule only)
        self.promoted: Dict[Hashable, int] = {}
    
    def value(self, action: Hashable, default: float = 0.0) -> float:
        return self.values.get(action, default)
    
    def count(self, action: Hashable, default: float = 0.0) -> float:
        return self.counts.get(action, default)
    
    def blend(self, action: Hashable, epsilon: float, default: float = 0.0) -> float:
        """
        RAVE term used by selection and biased rollouts.
        
        Args:
            action: Action to look up
            epsilon: Numerical floor added to the count
            default: Value and count assumed for an action with no entry
        
        Returns:
            raveValue / (raveCount + epsilon)
        """
        return self.value(action, default) / (self.count(action, default) + epsilon)
    
    def promote(self, action: Hashable) -> None:
        """Record the current count of ``action`` as its effective count."""
        if action in self.counts:
            self.promoted[action] = self.counts[action]
    
    def credit(self, action: Hashable, result: float, node_visits: int) -> None:
        """
        Fold one rollout result into the statistics of ``action``.
        
        Args:
            action: Action played during the rollout
            result: Value returned by the rollout
            node_visits: Visit count of the tree node being backed up
        """
        old_value = self.values.get(action)
        old_count = self.counts.get(action, 0)
        new_count = old_count + 1
        self.counts[action] = new_count
        
        if self.update_rule == RaveUpdate.SIMPLE_MEAN:
            old_value = 0.0 if old_value is None else old_value
            self.values[action] = (old_value * old_count + result) / new_count
        else:
            old_value = 1.0 if old_value is None else old_value
            effective_count = self.promoted.get(action, new_count)
            decay = max(0.0, (effective_count - node_visits) / effective_count)
            self.values[action] = (old_value + (result - old_value) / effective_count) * decay
    
    def credit_all(self, actions: Iterable[Hashable], result: float, node_visits: int) -> int:
        """
        Credit every action of one rollout.
        
        Returns:
            Number of actions credited
        """
        credited = 0
        for action in actions:
            self.credit(action, result, node_visits)
            credited += 1
        return credited
    
    def reset(self) -> None:
        """Forget all statistics."""
        self.values.clear()
        self.counts.clear()
        self.promoted.clear()
    
    def __len__(self) -> int:
        return len(self.counts)
    
    def __contains__(self, action: Hashable) -> bool:
        return action in self.counts
    
    def __str__(self) -> str:
        return f"RaveTable(rule={self.update_rule.name}, actions={len(self)}, promoted={len(self.promoted)})"
