"""
Solution Module - Outcome of a solve attempt.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from .move import Step


class SolveOutcome(Enum):
    """How a solve attempt ended."""
    SOLVED = auto()
    UNSOLVABLE = auto()     # Search space exhausted
    TIMEOUT = auto()        # Gave up, board may still be solvable


@dataclass
class SolutionMetrics:
    """
    Performance metrics for a solve attempt.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of steps committed during the search
        backtracks: Number of steps undone
        max_depth: Deepest point the search reached
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    backtracks: int = 0
    max_depth: int = 0


@dataclass
class SolveResult:
    """
    Result of a solve attempt.

    Attributes:
        outcome: Solved, unsolvable or timed out
        steps: Ordered steps that empty the board (only when solved)
        metrics: Performance statistics
    """
    outcome: SolveOutcome
    steps: List[Step] = field(default_factory=list)
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def is_solved(self) -> bool:
        return self.outcome is SolveOutcome.SOLVED

    @property
    def is_unsolvable(self) -> bool:
        return self.outcome is SolveOutcome.UNSOLVABLE

    @property
    def is_timeout(self) -> bool:
        return self.outcome is SolveOutcome.TIMEOUT

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def __str__(self) -> str:
        return (f"{self.outcome.name.lower()} in {self.metrics.computation_time_ms:.1f}ms "
                f"({self.step_count} steps, {self.metrics.states_explored} states, "
                f"{self.metrics.backtracks} backtracks)")
