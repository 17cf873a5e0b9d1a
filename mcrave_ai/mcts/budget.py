"""
Budget tracking for one search invocation.

The search loop runs one iteration, then checks the budget:
RUNNING -> CHECK_BUDGET -> RUNNING or STOPPED. Exactly one kind of budget
is active: elapsed time, completed iterations, or forward model calls.
"""
from enum import Enum, auto
from typing import Callable, Optional
import time

from mcrave_ai.core.constants import BudgetType, DEFAULT_BREAK_MS
from mcrave_ai.mcts.config import MCRaveConfig


class BudgetState(Enum):
    RUNNING = auto()
    CHECK_BUDGET = auto()
    STOPPED = auto()


class SearchBudget:
    """
    Stopping predicate for the search loop.
    
    For time budgets the search stops early once the remaining time drops to
    twice the average iteration time or to the ``break_ms`` safety margin.
    """
    
    def __init__(
        self,
        budget_type: BudgetType,
        budget: int,
        break_ms: int = DEFAULT_BREAK_MS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            budget_type: Which resource bounds the search
            budget: Milliseconds, iterations or forward model calls
            break_ms: Safety margin in milliseconds for time budgets
            clock: Source of the current time in seconds
        """
        self.budget_type = budget_type
        self.budget = budget
        self.break_ms = break_ms
        self.clock = clock
        
        self.state = BudgetState.RUNNING
        self.iterations = 0
        self.stop_reason: Optional[str] = None
        self._start_time = 0.0
        self._iteration_start = 0.0
        self._accumulated_ms = 0.0
    
    @classmethod
    def from_config(cls, config: MCRaveConfig, clock: Callable[[], float] = time.time) -> 'SearchBudget':
        return cls(config.budget_type, config.budget, config.break_ms, clock)
    
    def start(self) -> None:
        """Reset the counters and start the clock."""
        self.state = BudgetState.RUNNING
        self.iterations = 0
        self.stop_reason = None
        self._accumulated_ms = 0.0
        self._start_time = self.clock()
    
    @property
    def running(self) -> bool:
        return self.state != BudgetState.STOPPED
    
    @property
    def elapsed_ms(self) -> float:
        return (self.clock() - self._start_time) * 1000.0
    
    @property
    def remaining_ms(self) -> float:
        return self.budget - self.elapsed_ms
    
    @property
    def average_iteration_ms(self) -> float:
        return self._accumulated_ms / max(1, self.iterations)
    
    def begin_iteration(self) -> None:
        self._iteration_start = self.clock()
    
    def end_iteration(self, fm_calls: int = 0) -> bool:
        """
        Record a completed iteration and check the budget.
        
        Args:
            fm_calls: Forward model calls made so far in this search
        
        Returns:
            True if the search should keep running
        """
        self.state = BudgetState.CHECK_BUDGET
        self.iterations += 1
        self._accumulated_ms += (self.clock() - self._iteration_start) * 1000.0
        
        if self.budget_type == BudgetType.TIME:
            remaining = self.remaining_ms
            if remaining <= self.break_ms:
                self.stop_reason = "time_limit"
            elif remaining <= 2 * self.average_iteration_ms:
                self.stop_reason = "time_estimate"
        elif self.budget_type == BudgetType.ITERATIONS:
            if self.iterations >= self.budget:
                self.stop_reason = "iterations"
        elif self.budget_type == BudgetType.FM_CALLS:
            if fm_calls >= self.budget:
                self.stop_reason = "fm_calls"
        
        self.state = BudgetState.RUNNING if self.stop_reason is None else BudgetState.STOPPED
        return self.running
    
    def __str__(self) -> str:
        return (f"SearchBudget({self.budget_type.name}={self.budget}, "
                f"iterations={self.iterations}, state={self.state.name})")
