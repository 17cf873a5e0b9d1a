"""
Monte Carlo Tree Search with RAVE for turn-based games.

The search works by repeating four phases until its budget is spent:

1. Selection: Starting from the root, descend by a UCB score that blends each
   child's mean value with the RAVE value of the action leading to it.
2. Expansion: Create one new child for a previously untried action.
3. Simulation: Play a rollout, uniformly random for the first iterations and
   biased towards high RAVE values afterwards, then evaluate its end state.
4. Backpropagation: Update visit counts and values up to the root, and credit
   every action of the rollout in the shared RAVE (All-Moves-As-First) table.

The most visited root action is returned.
"""

from mcrave_ai.mcts.config import MCRaveConfig, RaveUpdate, RaveScope
from mcrave_ai.mcts.rave import RaveTable
from mcrave_ai.mcts.node import RaveNode, SearchContext, noise
from mcrave_ai.mcts.rollout import RolloutPolicy, RolloutResult, weighted_random_select
from mcrave_ai.mcts.budget import SearchBudget, BudgetState
from mcrave_ai.mcts.search import (
    mcrave_search,
    build_tree,
    select_node,
    simulate_game,
    backpropagate,
    count_nodes,
    get_principal_variation,
    get_action_statistics,
    action_visit_counts,
)
from mcrave_ai.mcts.agent import MCRaveAgent, MCRaveAgentFactory

# Default configuration
DEFAULT_CONFIG = MCRaveConfig.default()

__all__ = [
    'MCRaveAgent',
    'MCRaveAgentFactory',
    'MCRaveConfig',
    'RaveUpdate',
    'RaveScope',
    'RaveTable',
    'RaveNode',
    'SearchContext',
    'noise',
    'RolloutPolicy',
    'RolloutResult',
    'weighted_random_select',
    'SearchBudget',
    'BudgetState',
    'mcrave_search',
    'build_tree',
    'select_node',
    'simulate_game',
    'backpropagate',
    'count_nodes',
    'get_principal_variation',
    'get_action_statistics',
    'action_visit_counts',
    'DEFAULT_CONFIG',
]
