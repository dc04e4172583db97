"""
Bot Module - Polling state machine that plays game after game.

State Flow:
    SEARCHING -> VALIDATING -> READY -> SOLVING -> SEARCHING
        ^            |           |
        |            |           +-> (timeout) new game -> SEARCHING
        |            |           +-> UNSOLVABLE (wait for the board to change)
        +------------+

A board is only solved after two scans, validate_delay_sec apart, agree;
tiles fade in when a game is dealt and a half-drawn board must not be
mistaken for a real one.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from .settings import DEFAULT_SETTINGS
from .solver import InitialBoard, Step

logger = logging.getLogger(__name__)


__all__ = [
    "BotState",
    "BotStats",
    "SigmarBot",
]


class BotState(Enum):
    """
    State machine states.

    States:
        SEARCHING: Looking for a fresh deal on screen
        VALIDATING: Found one, checking it is stable
        READY: Stable board, about to solve
        SOLVING: Solution found, clicking it out
        UNSOLVABLE: No solution exists, waiting for the board to change
    """
    SEARCHING = auto()
    VALIDATING = auto()
    READY = auto()
    SOLVING = auto()
    UNSOLVABLE = auto()


@dataclass
class BotStats:
    """Counters over the lifetime of a bot."""
    solved: int = 0
    skipped: int = 0
    unsolvable: int = 0


class SigmarBot:
    """
    Drives capture, scanner, solver and executor.

    Collaborators are duck-typed so tests can pass fakes:
        capture: is_target_running() and grab_frame()
        scanner: scan_initial(image) -> Optional[InitialBoard]
        executor: execute(steps) and click_new_game()
    """

    def __init__(
        self,
        capture,
        scanner,
        executor,
        settings: Optional[Dict[str, Any]] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the bot.

        Args:
            capture: Screen capture
            scanner: Board scanner
            executor: Mouse executor
            settings: Settings dictionary (defaults used for missing keys)
            sleep: Sleep function, replaceable for tests
        """
        self.capture = capture
        self.scanner = scanner
        self.executor = executor

        merged = dict(DEFAULT_SETTINGS)
        merged.update(settings or {})
        self.timeout_sec = float(merged["timeout_sec"])
        self.search_interval_sec = float(merged["search_interval_sec"])
        self.validate_delay_sec = float(merged["validate_delay_sec"])
        self.unsolvable_interval_sec = float(merged["unsolvable_interval_sec"])

        self._sleep = sleep
        self._state = BotState.SEARCHING
        self._candidate: Optional[InitialBoard] = None
        self._solution: List[Step] = []
        self.stats = BotStats()

    @property
    def state(self) -> BotState:
        """Get current state machine state."""
        return self._state

    @property
    def candidate(self) -> Optional[InitialBoard]:
        """Board being validated, solved or waited on."""
        return self._candidate

    def _set_state(self, state: BotState) -> None:
        if state != self._state:
            logger.debug(f"State: {self._state.name} -> {state.name}")
        self._state = state

    def _scan(self) -> Optional[InitialBoard]:
        frame = self.capture.grab_frame()
        if frame is None:
            return None
        return self.scanner.scan_initial(frame)

    def step(self) -> BotState:
        """
        Perform one state transition, including the wait that follows it.

        Returns:
            The new state
        """
        handlers = {
            BotState.SEARCHING: self._search,
            BotState.VALIDATING: self._validate,
            BotState.READY: self._solve,
            BotState.SOLVING: self._execute,
            BotState.UNSOLVABLE: self._wait_unsolvable,
        }
        handlers[self._state]()
        return self._state

    def run(self, max_iterations: Optional[int] = None) -> None:
        """
        Run the state machine.

        Args:
            max_iterations: Stop after this many transitions, None runs forever
        """
        logger.info("Bot started")
        iterations = 0
        while max_iterations is None or iterations < max_iterations:
            self.step()
            iterations += 1
        logger.info(
            f"Bot stopped: {self.stats.solved} solved, {self.stats.skipped} skipped, "
            f"{self.stats.unsolvable} unsolvable"
        )

    def _search(self) -> None:
        if not self.capture.is_target_running():
            logger.debug("Game not running")
            self._sleep(self.search_interval_sec)
            return

        board = self._scan()
        if board is None:
            self._sleep(self.search_interval_sec)
            return

        logger.info("State[SEARCHING]: Found a valid board")
        self._candidate = board
        self._set_state(BotState.VALIDATING)
        self._sleep(self.validate_delay_sec)

    def _validate(self) -> None:
        board = self._scan()
        if board is None:
            logger.info("State[VALIDATING]: Board lost")
            self._candidate = None
            self._set_state(BotState.SEARCHING)
            self._sleep(self.search_interval_sec)
        elif board == self._candidate:
            logger.info("State[VALIDATING]: Board stable")
            self._set_state(BotState.READY)
        else:
            logger.info("State[VALIDATING]: Board changed, checking again")
            self._candidate = board
            self._sleep(self.validate_delay_sec)

    def _solve(self) -> None:
        logger.debug(f"Solving board:\n{self._candidate}")
        result = self._candidate.solve(self.timeout_sec)
        logger.info(f"State[READY]: {result}")

        if result.is_solved:
            self._solution = result.steps
            self._set_state(BotState.SOLVING)
        elif result.is_timeout:
            logger.info("State[READY]: Timeout, skipping to next game")
            self.stats.skipped += 1
            self.executor.click_new_game()
            self._candidate = None
            self._set_state(BotState.SEARCHING)
            self._sleep(self.search_interval_sec)
        else:
            self.stats.unsolvable += 1
            self._set_state(BotState.UNSOLVABLE)
            self._sleep(self.unsolvable_interval_sec)

    def _execute(self) -> None:
        logger.info(f"State[SOLVING]: Applying {len(self._solution)} steps")
        self.executor.execute(self._solution)
        self.executor.click_new_game()
        self.stats.solved += 1
        self._solution = []
        self._candidate = None
        self._set_state(BotState.SEARCHING)
        self._sleep(self.search_interval_sec)

    def _wait_unsolvable(self) -> None:
        board = self._scan()
        if board is None:
            self._candidate = None
            self._set_state(BotState.SEARCHING)
            self._sleep(self.search_interval_sec)
        elif board == self._candidate:
            self._sleep(self.unsolvable_interval_sec)
        else:
            logger.info("State[UNSOLVABLE]: Found a valid board")
            self._candidate = board
            self._set_state(BotState.VALIDATING)
            self._sleep(self.validate_delay_sec)
