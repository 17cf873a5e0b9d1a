"""
Monte Carlo RAVE search algorithm.

This module implements the search loop with the four standard phases:
1. Selection: Descend the tree by RAVE-blended UCB scores
2. Expansion: Create one new child node
3. Simulation: Run a random or RAVE-biased rollout and evaluate it
4. Backpropagation: Update node statistics and the shared RAVE table

The loop repeats until the configured budget (time, iterations or forward
model calls) is exhausted; the most visited root action is then returned.
"""
from __future__ import annotations
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple
import logging
import random
import time

from mcrave_ai.core.interfaces import ForwardModel, HeuristicLike, as_heuristic
from mcrave_ai.mcts.budget import SearchBudget
from mcrave_ai.mcts.config import MCRaveConfig
from mcrave_ai.mcts.node import RaveNode, SearchContext
from mcrave_ai.mcts.rave import RaveTable
from mcrave_ai.mcts.rollout import RolloutPolicy, RolloutResult

logger = logging.getLogger(__name__)


def mcrave_search(
    state: Any,
    player_id: int,
    forward_model: ForwardModel,
    heuristic: HeuristicLike,
    config: Optional[MCRaveConfig] = None,
    rng: Optional[random.Random] = None,
    rave_table: Optional[RaveTable] = None,
) -> Tuple[Hashable, Dict[str, Any]]:
    """
    Run Monte Carlo RAVE search to find the best action.
    
    Args:
        state: Current game state (copied, never mutated)
        player_id: Seat of the player making the decision
        forward_model: Rules of the game
        heuristic: Evaluator for rollout end states
        config: Search configuration parameters
        rng: Random generator used for every draw of the search
        rave_table: RAVE table to use (a fresh one when None)
    
    Returns:
        Tuple of (best action, search statistics)
    """
    root, stats = build_tree(state, player_id, forward_model, heuristic, config, rng, rave_table)
    return root.best_action(), stats


def build_tree(
    state: Any,
    player_id: int,
    forward_model: ForwardModel,
    heuristic: HeuristicLike,
    config: Optional[MCRaveConfig] = None,
    rng: Optional[random.Random] = None,
    rave_table: Optional[RaveTable] = None,
    budget: Optional[SearchBudget] = None,
) -> Tuple[RaveNode, Dict[str, Any]]:
    """
    Grow a search tree until the budget is exhausted.
    
    At least one iteration always runs before the budget is first checked.
    
    Args:
        state: Current game state
        player_id: Seat of the player making the decision
        forward_model: Rules of the game
        heuristic: Evaluator for rollout end states
        config: Search configuration parameters
        rng: Random generator (seeded from ``config.seed`` when None)
        rave_table: RAVE table to use (a fresh one when None)
        budget: Budget tracker (built from ``config`` when None)
    
    Returns:
        Tuple of (root node, search statistics)
    
    Raises:
        ValueError: If ``rave_table`` uses a different update rule than ``config``
    """
    if config is None:
        config = MCRaveConfig()
    
    if rng is None:
        rng = random.Random(config.seed)
    
    if rave_table is None:
        rave_table = RaveTable(config.rave_update)
    elif rave_table.update_rule != config.rave_update:
        raise ValueError(f"RAVE table uses {rave_table.update_rule.name} "
                         f"but the search is configured for {config.rave_update.name}")
    
    context = SearchContext(
        forward_model=forward_model,
        heuristic=as_heuristic(heuristic),
        config=config,
        rave=rave_table,
        rng=rng,
        player_id=player_id,
    )
    root = RaveNode.create_root(state, context)
    rollout_policy = RolloutPolicy(context)
    
    if budget is None:
        budget = SearchBudget.from_config(config)
    
    # Track statistics
    stats: Dict[str, Any] = {
        "iterations": 0,
        "tree_depth": 0,
        "total_rollout_steps": 0,
        "empty_rollouts": 0,
        "action_visits": {},
        "action_values": {},
    }
    
    start_time = time.time()
    budget.start()
    
    while budget.running:
        budget.begin_iteration()
        
        # 1. Selection & Expansion: Find a node to simulate from
        selected = select_node(root)
        
        # 2. Simulation: Run a rollout from the selected node
        rollout = simulate_game(selected, rollout_policy, budget.iterations)
        
        # 3. Backpropagation: Update statistics up the tree
        if not backpropagate(selected, rollout.value, rollout.actions):
            stats["empty_rollouts"] += 1
        
        stats["total_rollout_steps"] += rollout.steps
        stats["tree_depth"] = max(stats["tree_depth"], selected.depth)
        
        budget.end_iteration(root.fm_calls)
    
    # Record statistics about each root action
    for action, child in root.expanded_children().items():
        stats["action_visits"][str(action)] = child.visits
        stats["action_values"][str(action)] = child.mean_value()
    
    stats["iterations"] = budget.iterations
    stats["stop_reason"] = budget.stop_reason
    stats["fm_calls"] = root.fm_calls
    stats["node_count"] = count_nodes(root)
    stats["rave_size"] = len(rave_table)
    stats["time_elapsed"] = time.time() - start_time
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])
    stats["average_rollout_steps"] = stats["total_rollout_steps"] / max(1, stats["iterations"])
    
    logger.debug("Search finished after %d iterations (%s): %d nodes, %d FM calls, %d RAVE entries",
                 stats["iterations"], stats["stop_reason"], stats["node_count"],
                 stats["fm_calls"], stats["rave_size"])
    
    return root, stats


def select_node(root: RaveNode) -> RaveNode:
    """
    Select a node for simulation.
    
    This function implements the selection and expansion phases: it
    descends the tree by UCB until it expands one new node or reaches a
    terminal or depth-capped node.
    
    Args:
        root: Root node of the search tree
    
    Returns:
        Node selected for simulation
    """
    return root.tree_policy()


def simulate_game(node: RaveNode, policy: RolloutPolicy, iteration: int) -> RolloutResult:
    """
    Run a simulation from a node to estimate its value.
    
    Args:
        node: Node to simulate from
        policy: Rollout policy of the current search
        iteration: Number of iterations completed so far
    
    Returns:
        Rollout result (value, actions played, steps)
    """
    return policy.simulate(node, iteration)


def backpropagate(node: RaveNode, result: float, rollout_actions: Sequence[Hashable]) -> int:
    """
    Update statistics up the tree.
    
    Every node from ``node`` to the root gets one more visit and ``result``
    added to its value. At each of those nodes every action played during
    the rollout is credited in the shared RAVE table.
    
    Args:
        node: Node the rollout started from
        result: Rollout value
        rollout_actions: Actions played during the rollout
    
    Returns:
        Number of RAVE credits made (0 when the rollout played no action)
    """
    rave = node.context.rave
    credited = 0
    
    current = node
    while current is not None:
        current.update(result)
        if rollout_actions:
            credited += rave.credit_all(rollout_actions, result, current.visits)
        current = current.parent
    
    if not rollout_actions:
        logger.debug("Rollout from depth %d recorded no actions; RAVE update skipped", node.depth)
    
    return credited


def count_nodes(node: RaveNode) -> int:
    """
    Count the total number of nodes in the tree.
    
    Args:
        node: Root node of the tree
    
    Returns:
        Total number of nodes
    """
    count = 0
    pending = [node]
    while pending:
        current = pending.pop()
        count += 1
        pending.extend(current.expanded_children().values())
    return count


def get_principal_variation(root: RaveNode, max_depth: int = 10) -> List[Tuple[Hashable, float]]:
    """
    Get the principal variation (most visited path) from the root.
    
    This is useful for analysis and debugging.
    
    Args:
        root: Root node of the search tree
        max_depth: Maximum depth to explore
    
    Returns:
        List of (action, value) pairs representing the principal variation
    """
    result = []
    current = root
    
    while len(result) < max_depth:
        children = current.expanded_children()
        if not children:
            break
        action, best_child = max(children.items(), key=lambda item: item[1].visits)
        result.append((action, best_child.mean_value()))
        current = best_child
    
    return result


def get_action_statistics(root: RaveNode) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all expanded actions from the root.
    
    Args:
        root: Root node of the search tree
    
    Returns:
        Dictionary mapping action strings to statistics
    """
    rave = root.context.rave
    epsilon = root.context.config.epsilon
    result = {}
    
    for action, child in root.expanded_children().items():
        result[str(action)] = {
            "visits": child.visits,
            "reward": child.total_value,
            "value": child.mean_value(),
            "rave_value": rave.value(action),
            "rave_count": rave.count(action),
            "rave_blend": rave.blend(action, epsilon),
            "score": root.ucb_score(action, child),
        }
    
    return result


def action_visit_counts(root: RaveNode) -> Dict[Hashable, int]:
    """Visit count per expanded root action, keyed by the action itself."""
    return {action: child.visits for action, child in root.expanded_children().items()}
