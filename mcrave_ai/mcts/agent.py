"""
Monte Carlo RAVE Agent.

This module provides the MCRaveAgent class, a ready-to-use player that
selects actions with Monte Carlo RAVE search for any game exposed through a
ForwardModel. The agent owns the random generator used by its searches and,
when configured with agent scope, the RAVE table.
"""
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple
import json
import random
import time

from mcrave_ai.core.heuristics import ScoreHeuristic
from mcrave_ai.core.interfaces import ForwardModel, HeuristicLike, StateHeuristic, as_heuristic
from mcrave_ai.mcts.config import MCRaveConfig, RaveScope
from mcrave_ai.mcts.node import RaveNode
from mcrave_ai.mcts.rave import RaveTable
from mcrave_ai.mcts.search import (
    build_tree, get_action_statistics, get_principal_variation
)


class MCRaveAgent:
    """
    Monte Carlo RAVE search agent.
    
    The heuristic defaults to ScoreHeuristic, which needs a forward model
    that reports game scores and seat results.
    """
    
    def __init__(
        self,
        forward_model: ForwardModel,
        heuristic: Optional[HeuristicLike] = None,
        config: Optional[MCRaveConfig] = None,
        name: str = "MCRave Agent",
        verbose: bool = False
    ):
        """
        Initialize an MCRave agent.
        
        Args:
            forward_model: Rules of the game being played
            heuristic: Evaluator for rollout end states
            config: Search configuration parameters
            name: Name of the agent
            verbose: Whether to print a search report after each decision
        """
        self.forward_model = forward_model
        self.heuristic: StateHeuristic = (
            as_heuristic(heuristic) if heuristic is not None else ScoreHeuristic(forward_model)
        )
        self.config = config or MCRaveConfig()
        self.name = name
        self.verbose = verbose
        
        # One generator for every random draw of every search
        self.rng = random.Random(self.config.seed)
        
        # Agent-owned RAVE table, only with agent scope
        self.rave_table: Optional[RaveTable] = None
        if self.config.rave_scope == RaveScope.AGENT:
            self.rave_table = RaveTable(self.config.rave_update)
        
        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}
        
        # History of all actions and their statistics
        self.action_history: List[Tuple[Hashable, Dict[str, Any]]] = []
        
        # Root node of the last search, kept for inspection only
        self.last_root: Optional[RaveNode] = None
    
    def select_action(self, state: Any, player_id: int) -> Hashable:
        """
        Select an action using Monte Carlo RAVE search.
        
        Args:
            state: Current game state
            player_id: Seat of the player making the decision
        
        Returns:
            Selected action
        """
        if self.forward_model.current_seat(state) != player_id:
            raise ValueError(f"Not player {player_id}'s turn")
        
        valid_actions = self.forward_model.legal_actions(state, self.config.action_space)
        if not valid_actions:
            raise ValueError(f"No valid actions for player {player_id}")
        
        # If there's only one valid action, no need to search
        if len(valid_actions) == 1:
            action = valid_actions[0]
            self.last_stats = {"iterations": 0, "forced_move": True}
            self.last_root = None
            return action
        
        if self.rave_table is not None and self.config.reset_rave_between_decisions:
            self.reset_rave_data()
        
        start_time = time.time()
        root, stats = build_tree(
            state, player_id, self.forward_model, self.heuristic,
            config=self.config, rng=self.rng, rave_table=self.rave_table
        )
        action = root.best_action()
        stats["total_time"] = time.time() - start_time
        
        self.last_stats = stats
        self.last_root = root
        self.action_history.append((action, stats))
        
        if self.verbose:
            self._print_search_info(action, stats)
        
        return action
    
    def _print_search_info(self, action: Hashable, stats: Dict[str, Any]) -> None:
        """
        Print information about the search.
        
        Args:
            action: Selected action
            stats: Search statistics
        """
        print(f"\n{self.name} selected: {action}")
        print(f"Iterations: {stats['iterations']} (stopped on {stats['stop_reason']})")
        print(f"Time: {stats['time_elapsed']:.3f}s ({stats['iterations_per_second']:.1f} it/s)")
        print(f"Nodes: {stats['node_count']}, FM calls: {stats['fm_calls']}, RAVE entries: {stats['rave_size']}")
        print(f"Tree depth: {stats['tree_depth']}")
        
        print("\nTop actions:")
        actions_by_visits = sorted(
            stats['action_visits'].items(),
            key=lambda x: x[1],
            reverse=True
        )
        for i, (action_str, visits) in enumerate(actions_by_visits[:5]):
            value = stats['action_values'].get(action_str, 0.0)
            print(f"{i+1}. {action_str} - {visits} visits, {value:.3f} value")
    
    def get_action_callback(self) -> Callable[[Any, int], Hashable]:
        """
        Get a callback function for selecting actions.
        
        Returns:
            Callback function that takes a game state and player ID and returns an action
        """
        return lambda state, player_id: self.select_action(state, player_id)
    
    def reset_rave_data(self) -> None:
        """Clear the agent-owned RAVE table (no-op with search scope)."""
        if self.rave_table is not None:
            self.rave_table.reset()
    
    def get_last_statistics(self) -> Dict[str, Any]:
        return self.last_stats
    
    def get_principal_variation(self) -> List[Tuple[Hashable, float]]:
        """
        Get the principal variation (most visited path) from the last search.
        
        Returns:
            List of (action, value) pairs representing the principal variation
        """
        if self.last_root is None:
            return []
        
        return get_principal_variation(self.last_root)
    
    def get_action_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Get statistics for all root actions from the last search.
        
        Returns:
            Dictionary mapping action strings to statistics
        """
        if self.last_root is None:
            return {}
        
        return get_action_statistics(self.last_root)
    
    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.action_history = []
        self.last_root = None
    
    def save_statistics(self, filename: str) -> None:
        """
        Save statistics to a JSON file.
        
        Args:
            filename: Name of the file to save to
        """
        history = []
        for action, stats in self.action_history:
            history.append({
                "action": str(action),
                "stats": {k: v for k, v in stats.items() if not isinstance(v, dict)}
            })
        
        data = {
            "agent_name": self.name,
            "config": self.config.to_dict(),
            "history": history,
            "total_actions": len(self.action_history)
        }
        
        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)
    
    def __str__(self) -> str:
        return f"{self.name} (MCRave, {self.config.budget_type.name.lower()} budget {self.config.budget})"


class MCRaveAgentFactory:
    """
    Factory for creating MCRave agents with different configurations.
    """
    
    @staticmethod
    def create_fast(forward_model: ForwardModel, heuristic: Optional[HeuristicLike] = None) -> MCRaveAgent:
        return MCRaveAgent(forward_model, heuristic, config=MCRaveConfig.fast(), name="Fast MCRave")
    
    @staticmethod
    def create_standard(forward_model: ForwardModel, heuristic: Optional[HeuristicLike] = None) -> MCRaveAgent:
        return MCRaveAgent(forward_model, heuristic, config=MCRaveConfig.default(), name="Standard MCRave")
    
    @staticmethod
    def create_strong(forward_model: ForwardModel, heuristic: Optional[HeuristicLike] = None) -> MCRaveAgent:
        return MCRaveAgent(forward_model, heuristic, config=MCRaveConfig.deep(), name="Strong MCRave")
    
    @staticmethod
    def create_custom(
        forward_model: ForwardModel,
        heuristic: Optional[HeuristicLike] = None,
        budget: int = 1000,
        rave_weight: float = 0.5,
        exploration_weight: float = 1.41,
        seed: Optional[int] = None,
        name: str = "Custom MCRave",
        **overrides: Any
    ) -> MCRaveAgent:
        """
        Create a custom MCRave agent.
        
        Args:
            forward_model: Rules of the game being played
            heuristic: Evaluator for rollout end states
            budget: Budget per decision, in units of the budget type
            rave_weight: RAVE blend weight alpha
            exploration_weight: UCB exploration constant K
            seed: Seed for the agent's random generator
            name: Name of the agent
            **overrides: Any other MCRaveConfig field
        
        Returns:
            MCRaveAgent
        """
        config = MCRaveConfig(
            budget=budget,
            rave_weight=rave_weight,
            exploration_weight=exploration_weight,
            seed=seed,
            **overrides
        )
        return MCRaveAgent(forward_model, heuristic, config=config, name=name)
