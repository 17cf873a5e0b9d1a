"""
Search tree node for Monte Carlo RAVE search.

This module defines the RaveNode class which represents a node in the search
tree, and the SearchContext shared by every node of one tree. Each node owns
its own copy of a game state (closed loop), its visit statistics, and one
child slot per legal action of that state.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional
import math
import random

from mcrave_ai.core.errors import ContractViolationError
from mcrave_ai.core.interfaces import ForwardModel, StateHeuristic
from mcrave_ai.mcts.config import MCRaveConfig
from mcrave_ai.mcts.rave import RaveTable


def noise(value: float, epsilon: float, random_value: float) -> float:
    """Perturb ``value`` by a relative amount of order ``epsilon`` to break ties."""
    return (value + epsilon) * (1.0 + epsilon * (random_value - 0.5))


@dataclass
class SearchContext:
    """Collaborators and shared state of one search invocation."""
    forward_model: ForwardModel
    heuristic: StateHeuristic
    config: MCRaveConfig
    rave: RaveTable
    rng: random.Random
    player_id: int


class RaveNode:
    """
    A node in the Monte Carlo RAVE search tree.
    
    ``children`` is keyed by the legal actions of ``state`` computed once at
    construction; a slot holds None until that action has been expanded.
    """
    
    def __init__(
        self,
        state: Any,
        context: SearchContext,
        parent: Optional['RaveNode'] = None,
        action: Optional[Hashable] = None,
    ):
        """
        Initialize a node.
        
        The node takes ownership of ``state``; callers hand over a copy.
        
        Args:
            state: The game state this node represents
            context: Search context shared by the whole tree
            parent: The parent node (None for root)
            action: The action that led to this state (None for root)
        """
        self.state = state
        self.context = context
        self.parent = parent
        self.action = action
        self.root: RaveNode = self if parent is None else parent.root
        self.depth = 0 if parent is None else parent.depth + 1
        
        # Node statistics
        self.visits = 0
        self.total_value = 0.0
        
        # Forward model calls made during the search, only counted on the root
        self.fm_calls = 0
        
        self.children: Dict[Hashable, Optional[RaveNode]] = {}
        forward_model = context.forward_model
        if not forward_model.is_terminal(state):
            for legal_action in forward_model.legal_actions(state, context.config.action_space):
                self.children[legal_action] = None
    
    @classmethod
    def create_root(cls, state: Any, context: SearchContext) -> 'RaveNode':
        """Create a root node from a copy of ``state``."""
        return cls(context.forward_model.copy_state(state), context)
    
    def unexpanded_actions(self) -> List[Hashable]:
        return [action for action, child in self.children.items() if child is None]
    
    def expanded_children(self) -> Dict[Hashable, 'RaveNode']:
        return {action: child for action, child in self.children.items() if child is not None}
    
    def has_unexpanded_actions(self) -> bool:
        return any(child is None for child in self.children.values())
    
    def is_terminal(self) -> bool:
        return self.context.forward_model.is_terminal(self.state)
    
    def is_fully_expanded(self) -> bool:
        return not self.has_unexpanded_actions()
    
    def is_agent_turn(self) -> bool:
        """True if the searching agent acts in this node's state."""
        return self.context.forward_model.current_seat(self.state) == self.context.player_id
    
    def advance(self, state: Any, action: Hashable) -> Any:
        """
        Apply ``action`` to ``state`` and count the forward model call on the root.
        
        Returns:
            The advanced state
        """
        advanced = self.context.forward_model.apply_action(state, action)
        self.root.fm_calls += 1
        return state if advanced is None else advanced
    
    def expand(self) -> 'RaveNode':
        """
        Expand the tree by adding one new child node.
        
        An unexpanded action is picked uniformly at random with the search's
        generator, applied to a copy of this node's state, and the resulting
        child is registered under that action.
        
        Returns:
            The new child node
        
        Raises:
            ContractViolationError: If every action is already expanded
        """
        candidates = self.unexpanded_actions()
        if not candidates:
            raise ContractViolationError("expand() called on a node without unexpanded actions",
                                         state=self.state)
        
        chosen = self.context.rng.choice(candidates)
        
        # The stored action key must not pick up changes made while applying it
        forward_model = self.context.forward_model
        next_state = forward_model.copy_state(self.state)
        next_state = self.advance(next_state, forward_model.copy_action(chosen))
        
        child = RaveNode(next_state, self.context, parent=self, action=chosen)
        self.children[chosen] = child
        return child
    
    def ucb_score(self, action: Hashable, child: 'RaveNode') -> float:
        """
        Calculate the RAVE-blended UCB score of one child, without tie-break noise.
        
        score = +/-((1 - alpha) * childValue + alpha * raveBlend)
                + K * sqrt(ln(N + 1) / (n + eps))
        
        The blended value is negated when another seat acts here, since
        opponents are assumed to minimise the searching agent's value.
        
        Args:
            action: Action leading to ``child``
            child: Expanded child node
        
        Returns:
            Selection score
        """
        config = self.context.config
        epsilon = config.epsilon
        alpha = config.rave_weight
        
        child_value = child.total_value / (child.visits + epsilon)
        rave_value = self.context.rave.blend(action, epsilon)
        combined = (1 - alpha) * child_value + alpha * rave_value
        
        exploration = config.exploration_weight * math.sqrt(
            math.log(self.visits + 1) / (child.visits + epsilon)
        )
        
        signed = combined if self.is_agent_turn() else -combined
        return signed + exploration
    
    def select_action(self) -> Hashable:
        """
        Select the action of the child with the highest noisy UCB score.
        
        Returns:
            Selected action
        
        Raises:
            ContractViolationError: If the node has no children, or a child is unexpanded
        """
        if not self.children:
            raise ContractViolationError("No legal actions at a non-terminal node", state=self.state)
        
        epsilon = self.context.config.epsilon
        rng = self.context.rng
        best_action = None
        best_value = -math.inf
        
        for action, child in self.children.items():
            if child is None:
                raise ContractViolationError("Selection reached an unexpanded child",
                                             action=action, state=self.state)
            value = noise(self.ucb_score(action, child), epsilon, rng.random())
            if best_action is None or value > best_value:
                best_action = action
                best_value = value
        
        self.context.rave.promote(best_action)
        return best_action
    
    def select_child(self) -> 'RaveNode':
        return self.children[self.select_action()]
    
    def tree_policy(self) -> 'RaveNode':
        """
        Execute the tree policy to select a node for simulation.
        
        Descends by UCB until a node with an unexpanded action is found and
        expands it, or until a terminal or depth-capped node is reached.
        At most one node is created per call.
        
        Returns:
            Selected node
        """
        current = self
        max_depth = self.context.config.max_tree_depth
        
        while not current.is_terminal() and current.depth < max_depth:
            if current.has_unexpanded_actions():
                return current.expand()
            current = current.select_child()
        
        return current
    
    def update(self, result: float) -> None:
        """Add one rollout result to this node's statistics."""
        self.visits += 1
        self.total_value += result
    
    def mean_value(self) -> float:
        return self.total_value / max(1, self.visits)
    
    def best_action(self) -> Hashable:
        """
        Get the most visited expanded action, breaking ties with noise.
        
        Returns:
            The best action
        
        Raises:
            ContractViolationError: If no child has been expanded
        """
        epsilon = self.context.config.epsilon
        rng = self.context.rng
        best_action = None
        best_value = -math.inf
        
        for action, child in self.children.items():
            if child is None:
                continue
            value = noise(child.visits, epsilon, rng.random())
            if best_action is None or value > best_value:
                best_action = action
                best_value = value
        
        if best_action is None:
            raise ContractViolationError("No expanded root child to choose from", state=self.state)
        
        return best_action
    
    def __str__(self) -> str:
        expanded = len(self.expanded_children())
        return (f"RaveNode(depth={self.depth}, "
                f"visits={self.visits}, "
                f"value={self.total_value:.2f}, "
                f"children={expanded}/{len(self.children)})")
