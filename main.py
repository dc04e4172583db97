"""
Sigmar's Garden Solver - Entry Point

Watches the screen for a new game, solves it and clicks the solution out.
With --image, solves a saved screenshot once and prints the steps instead.

Example:
    python main.py
    python main.py --process Lightning.exe --timeout 10
    python main.py --image screenshot.png --debug
"""

import sys
import logging
import argparse
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image

from sigmar.bot import SigmarBot
from sigmar.capture import ScreenCapture
from sigmar.scanner import TemplateScanner, save_debug_image, DEBUG_DIR
from sigmar.screen import geometry_from_settings
from sigmar.settings import load_settings, SETTINGS_FILE
from sigmar.solver import InitialBoard


# Configure logging - output to both console and file
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),  # Console output
        logging.FileHandler("sigmar.log", mode='w', encoding='utf-8')  # File output
    ]
)
logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller.

    Builds the scanner from the settings and runs either the bot loop or a
    one-off solve of a screenshot.
    """

    def __init__(self, config_path: Path, debug_mode: bool = False,
                 timeout_sec: Optional[float] = None, process_name: Optional[str] = None):
        """
        Initialize the application.

        Args:
            config_path: Settings file
            debug_mode: Enable debug mode via CLI (overrides saved setting)
            timeout_sec: Solve timeout override
            process_name: Game process override
        """
        # Load persistent settings
        self.settings = load_settings(config_path)

        if timeout_sec is not None:
            self.settings["timeout_sec"] = timeout_sec
        if process_name is not None:
            self.settings["process_name"] = process_name

        # Effective debug mode: CLI flag overrides saved setting
        self.debug_mode = debug_mode or bool(self.settings.get("debug_enabled", False))
        if self.debug_mode:
            logging.getLogger().setLevel(logging.DEBUG)

        self.geometry = geometry_from_settings(self.settings)
        self.scanner = TemplateScanner(self.settings["template_dir"], self.geometry)

    def solve_image(self, image_path: Path) -> int:
        """
        Scan a screenshot, solve it and print the steps.

        Returns:
            Exit code: 0 when a solution was found
        """
        image = Image.open(image_path)
        result = self.scanner.scan(image)

        if self.debug_mode:
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            save_debug_image(image, result, self.geometry, DEBUG_DIR / f"debug_{stamp}.png")

        print(result.board.to_text())
        print()

        initial = InitialBoard.try_from(result.board)
        if initial is None:
            counts = {e.name.lower(): n for e, n in result.board.element_counts().items()}
            logger.error(f"Not a fresh deal: {counts}")
            return 1

        solution = initial.solve(float(self.settings["timeout_sec"]))
        logger.info(f"Result: {solution}")
        if not solution.is_solved:
            return 1

        for number, step in enumerate(solution.steps, 1):
            x1, y1 = self.geometry.index_to_screen(step.first)
            print(f"{number:2d}. {step}  @ ({x1}, {y1})")
        return 0

    def run(self) -> int:
        """
        Run the bot until interrupted.

        Returns:
            Exit code
        """
        # Needs a display, so only imported when clicking for real
        from sigmar.executor import MouseExecutor

        capture = ScreenCapture(
            monitor=int(self.settings["monitor"]),
            process_name=self.settings.get("process_name"),
        )
        executor = MouseExecutor(
            self.geometry,
            click_delay_sec=float(self.settings["click_delay_sec"]),
            new_game_button=self.settings["new_game_button"],
        )
        self.scanner.load()

        bot = SigmarBot(capture, self.scanner, executor, self.settings)
        logger.info(f"Bot initialized, watching {capture.get_status_string()}")
        try:
            bot.run()
        except KeyboardInterrupt:
            logger.info(
                f"Interrupted: {bot.stats.solved} solved, {bot.stats.skipped} skipped, "
                f"{bot.stats.unsolvable} unsolvable"
            )
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sigmar's Garden Solver - Plays Opus Magnum's solitaire"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=SETTINGS_FILE,
        help="Settings file (default: config.json)"
    )
    parser.add_argument(
        "--process", "-p",
        default=None,
        help="Process name to wait for (default: from settings)"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Seconds to search before skipping a game (default: from settings)"
    )
    parser.add_argument(
        "--image", "-i",
        type=Path,
        default=None,
        help="Solve a saved screenshot and print the steps instead of playing"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging and save annotated scan images"
    )
    return parser.parse_args()


def main():
    """Initialize and run the Sigmar's Garden solver."""
    args = parse_args()

    application = Application(
        config_path=args.config,
        debug_mode=args.debug,
        timeout_sec=args.timeout,
        process_name=args.process,
    )

    if args.image is not None:
        sys.exit(application.solve_image(args.image))
    sys.exit(application.run())


if __name__ == "__main__":
    main()
