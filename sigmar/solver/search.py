"""
Search Module - Validated starting boards and the backtracking solver.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from .board import Board, Cell
from .context import SolutionContext
from .element import Element
from .move import Step
from .solution import SolutionMetrics, SolveOutcome, SolveResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitialBoard:
    """
    A board known to hold exactly the composition of a fresh deal.

    Build it with try_from(), which checks the composition. Constructing
    it directly skips that check. Immutable and hashable, so it can be
    compared between consecutive screen scans.

    Attributes:
        bits: Packed cell codes, same layout as Board
    """
    bits: bytes

    @classmethod
    def try_from(cls, board: Board) -> Optional['InitialBoard']:
        """
        Validate a board as a starting position.

        Args:
            board: Board to check

        Returns:
            InitialBoard, or None if the tile composition is wrong
        """
        if not board.is_valid_initial_state():
            return None
        return cls(board.to_bytes())

    def to_board(self) -> Board:
        """Fresh mutable copy of this board."""
        return Board(self.bits)

    def get(self, cell: Cell) -> Optional[Element]:
        return self.to_board().get(cell)

    def solve(self, timeout_sec: float) -> SolveResult:
        """
        Search for a sequence of steps that empties the board.

        Args:
            timeout_sec: Wall clock budget in seconds

        Returns:
            SolveResult with outcome SOLVED, UNSOLVABLE or TIMEOUT
        """
        context = SolutionContext(initial=self, timeout_sec=timeout_sec)
        return BacktrackingSolver().solve(context)

    def __str__(self) -> str:
        return self.to_board().to_text()


class BacktrackingSolver:
    """
    Depth-first search with an explicit stack.

    Each depth keeps a frontier of untried steps, consumed from the end.
    Backtracking restores the two cells of the last step from the
    starting board, which is valid because tiles are only ever removed.
    """
    name = "backtracking"
    description = "Depth-first search over all legal steps"

    def solve(self, context: SolutionContext) -> SolveResult:
        """
        Run the search.

        The timeout is only checked after entering a new depth, so an
        exhausted search always reports UNSOLVABLE, never TIMEOUT.

        Args:
            context: Solution context with the starting board and timeout

        Returns:
            SolveResult with the committed path when solved
        """
        start_time = time.perf_counter()
        initial = context.initial
        original = initial.to_board()
        board = original.copy()
        metrics = SolutionMetrics()

        frontiers: List[List[Step]] = [board.valid_steps()]
        path: List[Step] = []

        while True:
            frontier = frontiers[-1]
            if not frontier:
                frontiers.pop()
                if not frontiers:
                    return self._finish(SolveOutcome.UNSOLVABLE, [], metrics, start_time)
                undone = path.pop()
                for cell in undone.cells:
                    board.set(cell, original.get(cell))
                metrics.backtracks += 1
                continue

            step = frontier.pop()
            path.append(step)
            board.apply(step)
            metrics.states_explored += 1

            if board.is_solved():
                return self._finish(SolveOutcome.SOLVED, list(path), metrics, start_time)

            frontiers.append(board.valid_steps())
            metrics.max_depth = max(metrics.max_depth, len(path))

            if context.is_timed_out():
                return self._finish(SolveOutcome.TIMEOUT, [], metrics, start_time)

    def _finish(
        self,
        outcome: SolveOutcome,
        steps: List[Step],
        metrics: SolutionMetrics,
        start_time: float
    ) -> SolveResult:
        metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
        result = SolveResult(outcome=outcome, steps=steps, metrics=metrics)
        logger.debug(f"Search finished: {result} (max depth {metrics.max_depth})")
        return result
