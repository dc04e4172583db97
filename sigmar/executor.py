"""
Mouse Executor Module for Sigmar's Garden Solver

Clicks a solution out on screen with pyautogui.
"""

import logging
import time
from typing import Callable, Iterable, Sequence, Tuple

import pyautogui

from .screen import BoardGeometry
from .solver.move import Step

logger = logging.getLogger(__name__)

pyautogui.FAILSAFE = True  # Move to a corner to abort
pyautogui.PAUSE = 0

# Delay between move, press and release; the game drops faster clicks
DEFAULT_CLICK_DELAY = 0.042

NEW_GAME_BUTTON: Tuple[int, int] = (870, 886)


class MouseExecutor:
    """
    Executes steps by clicking tiles.

    Attributes:
        geometry: Board placement on screen
        click_delay_sec: Pause between move, press and release
        new_game_button: Screen position of the "New Game" button
    """

    def __init__(
        self,
        geometry: BoardGeometry,
        click_delay_sec: float = DEFAULT_CLICK_DELAY,
        new_game_button: Sequence[int] = NEW_GAME_BUTTON,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.geometry = geometry
        self.click_delay_sec = click_delay_sec
        self.new_game_button = (int(new_game_button[0]), int(new_game_button[1]))
        self._sleep = sleep

    def click_at(self, x: int, y: int) -> None:
        pyautogui.moveTo(x, y)
        self._sleep(self.click_delay_sec)
        pyautogui.mouseDown(button="left")
        self._sleep(self.click_delay_sec)
        pyautogui.mouseUp(button="left")

    def click_cell(self, index: int) -> None:
        x, y = self.geometry.index_to_screen(index)
        self.click_at(x, y)

    def execute(self, steps: Iterable[Step]) -> int:
        """
        Click every step in order.

        Gold is removed with a single click; pairs need both tiles.

        Args:
            steps: Steps to play

        Returns:
            Number of steps executed
        """
        count = 0
        for step in steps:
            self.click_cell(step.first)
            if not step.is_single:
                self.click_cell(step.second)
            count += 1
        logger.info(f"Executed {count} steps")
        return count

    def click_new_game(self) -> None:
        logger.debug("Clicking new game")
        self.click_at(*self.new_game_button)
