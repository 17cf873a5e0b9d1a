"""
Configuration for Monte Carlo RAVE search.

This module defines the configuration parameters for the search, including
the UCB exploration constant, the RAVE blend weight and update rule, rollout
and tree limits, and the budget that bounds one decision.
"""
from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, Dict, Optional
import math

from mcrave_ai.core.constants import (
    ActionSpace, BudgetType,
    DEFAULT_BREAK_MS, DEFAULT_DELAY_THRESHOLD, DEFAULT_EPSILON
)


class RaveUpdate(Enum):
    """How a RAVE value absorbs a new rollout result."""
    SIMPLE_MEAN = auto()   # Plain incremental mean
    DECAYED_MEAN = auto()  # Incremental step scaled down as node visits catch up


class RaveScope(Enum):
    """Who owns the RAVE table."""
    SEARCH = auto()  # Fresh table for every decision, discarded afterwards
    AGENT = auto()   # Table held by the agent, reset explicitly


_ENUM_FIELDS = {
    'rave_update': RaveUpdate,
    'rave_scope': RaveScope,
    'budget_type': BudgetType,
    'action_space': ActionSpace,
}


@dataclass
class MCRaveConfig:
    """
    Configuration parameters for Monte Carlo RAVE search.
    
    This class defines all tunable parameters of the search, with
    validation and sensible defaults.
    """
    # Selection parameters
    exploration_weight: float = math.sqrt(2)
    """UCB exploration constant K"""
    
    rave_weight: float = 0.5
    """Blend weight alpha between node value (0) and RAVE value (1)"""
    
    rave_update: RaveUpdate = RaveUpdate.SIMPLE_MEAN
    """Update rule applied to the RAVE table during backpropagation"""
    
    epsilon: float = DEFAULT_EPSILON
    """Numerical floor added to every count used as a divisor"""
    
    # Tree and rollout limits
    rollout_length: int = 10
    """Maximum number of actions in one rollout (0 = evaluate the node directly)"""
    
    max_tree_depth: int = 100
    """Maximum depth the tree may grow to"""
    
    delay_threshold: int = DEFAULT_DELAY_THRESHOLD
    """Completed iterations before rollouts become RAVE-biased"""
    
    # Budget
    budget_type: BudgetType = BudgetType.ITERATIONS
    """Which resource bounds the search"""
    
    budget: int = 1000
    """Milliseconds, iterations or forward model calls, depending on budget_type"""
    
    break_ms: int = DEFAULT_BREAK_MS
    """Safety margin in milliseconds for time budgets"""
    
    # Collaborators
    action_space: ActionSpace = ActionSpace.DEFAULT
    """Action space requested from the forward model"""
    
    rave_scope: RaveScope = RaveScope.SEARCH
    """Whether the RAVE table lives for one search or for the agent's lifetime"""
    
    reset_rave_between_decisions: bool = True
    """With agent scope, clear the agent's table before each decision"""
    
    seed: Optional[int] = None
    """Seed for the agent's random generator (None = unseeded)"""
    
    def __post_init__(self):
        """Validate configuration parameters."""
        for name, enum_type in _ENUM_FIELDS.items():
            value = getattr(self, name)
            if isinstance(value, str):
                try:
                    setattr(self, name, enum_type[value.upper()])
                except KeyError:
                    raise ValueError(f"{name} must be one of {[m.name for m in enum_type]}") from None
            elif not isinstance(value, enum_type):
                raise ValueError(f"{name} must be a {enum_type.__name__}")
        
        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")
        
        if not 0.0 <= self.rave_weight <= 1.0:
            raise ValueError("rave_weight must be between 0 and 1")
        
        if self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        
        if self.rollout_length < 0:
            raise ValueError("rollout_length must be non-negative")
        
        if self.max_tree_depth <= 0:
            raise ValueError("max_tree_depth must be positive")
        
        if self.delay_threshold < 0:
            raise ValueError("delay_threshold must be non-negative")
        
        if self.budget <= 0:
            raise ValueError("budget must be positive")
        
        if self.break_ms < 0:
            raise ValueError("break_ms must be non-negative")
    
    @classmethod
    def default(cls) -> 'MCRaveConfig':
        """
        Get the default configuration.
        
        Returns:
            Default MCRaveConfig object
        """
        return cls()
    
    @classmethod
    def fast(cls) -> 'MCRaveConfig':
        """
        Get a configuration optimized for speed (fewer iterations).
        
        Returns:
            Fast MCRaveConfig object
        """
        return cls(
            budget=100,
            rollout_length=5,
            delay_threshold=50,
        )
    
    @classmethod
    def deep(cls) -> 'MCRaveConfig':
        """
        Get a configuration optimized for deep search.
        
        Returns:
            Deep MCRaveConfig object
        """
        return cls(
            budget=5000,
            exploration_weight=1.2,  # Slightly less exploration
            rollout_length=30,
            delay_threshold=350,
        )
    
    @classmethod
    def timed(cls, milliseconds: int, break_ms: int = DEFAULT_BREAK_MS) -> 'MCRaveConfig':
        """
        Get a configuration bounded by wall-clock time.
        
        Args:
            milliseconds: Time budget per decision
            break_ms: Safety margin before the deadline
        
        Returns:
            Time-budgeted MCRaveConfig object
        """
        return cls(budget_type=BudgetType.TIME, budget=milliseconds, break_ms=break_ms)
    
    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MCRaveConfig':
        """
        Create a configuration from a dictionary.
        
        Enum fields may be given as member names.
        
        Args:
            config_dict: Dictionary of configuration parameters
        
        Returns:
            MCRaveConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a dictionary.
        
        Enum fields are written as member names so the result is JSON-safe.
        
        Returns:
            Dictionary of configuration parameters
        """
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result
    
    def __str__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in self.to_dict().items())
        return f"MCRaveConfig({params})"
