"""
Solution Context Module - Inputs and clock for a single solve attempt.
"""

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .search import InitialBoard


@dataclass
class SolutionContext:
    """
    Context passed to the solver.

    Attributes:
        initial: Validated board to solve
        timeout_sec: Maximum computation time in seconds
        start_time: When computation started (perf_counter clock)
    """
    initial: 'InitialBoard'
    timeout_sec: float = 5.0
    start_time: float = field(default_factory=time.perf_counter)

    def is_timed_out(self) -> bool:
        return self.elapsed_time() >= self.timeout_sec

    def elapsed_time(self) -> float:
        """
        Get seconds elapsed since computation started.

        Returns:
            Elapsed time in seconds
        """
        return time.perf_counter() - self.start_time

    def remaining_time(self) -> float:
        """
        Get seconds remaining before timeout.

        Returns:
            Remaining time in seconds (may be negative if exceeded)
        """
        return self.timeout_sec - self.elapsed_time()
