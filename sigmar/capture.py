"""
Screen Capture Module for Sigmar's Garden Solver

Grabs the monitor the game runs on with mss, and checks that the game
process is alive with psutil.
"""

import logging
from typing import Optional

import mss
import psutil
from mss.exception import ScreenShotError
from PIL import Image

logger = logging.getLogger(__name__)


def is_process_running(process_name: str) -> bool:
    """
    Check if the target process is currently running.

    Args:
        process_name: Name of the process to find (case-insensitive)

    Returns:
        True if process is running, False otherwise
    """
    process_name_lower = process_name.lower()
    for proc in psutil.process_iter(['name']):
        try:
            name = proc.info['name']
            if name and name.lower() == process_name_lower:
                return True
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue
    return False


def capture_monitor(monitor: int = 1) -> Optional[Image.Image]:
    """
    Capture a whole monitor.

    Args:
        monitor: mss monitor number (1 is the primary monitor, 0 all of them)

    Returns:
        PIL Image or None if failed
    """
    try:
        with mss.mss() as sct:
            if not 0 <= monitor < len(sct.monitors):
                logger.warning(f"Monitor {monitor} not found ({len(sct.monitors) - 1} available)")
                return None
            screenshot = sct.grab(sct.monitors[monitor])
            return Image.frombytes(
                "RGB",
                (screenshot.width, screenshot.height),
                screenshot.rgb
            )
    except ScreenShotError as e:
        logger.warning(f"Screen capture failed: {e}")
        return None


class ScreenCapture:
    """
    Captures frames of the game screen.

    Example:
        >>> capture = ScreenCapture(monitor=1, process_name="Lightning.exe")
        >>> if capture.is_target_running():
        ...     frame = capture.grab_frame()
    """

    def __init__(self, monitor: int = 1, process_name: Optional[str] = None):
        """
        Args:
            monitor: mss monitor number to capture
            process_name: Game executable to wait for, None to skip the check
        """
        self.monitor = monitor
        self.process_name = process_name

    def is_target_running(self) -> bool:
        if not self.process_name:
            return True
        return is_process_running(self.process_name)

    def grab_frame(self) -> Optional[Image.Image]:
        """
        Capture the current frame.

        Returns:
            PIL Image or None if capture failed
        """
        return capture_monitor(self.monitor)

    def get_status_string(self) -> str:
        target = self.process_name or "any"
        return f"monitor {self.monitor}, process {target}"
