"""
Settings Module for Sigmar's Garden Solver

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the project root.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "timeout_sec": 30.0,
    "search_interval_sec": 1.0,
    "validate_delay_sec": 2.0,
    "unsolvable_interval_sec": 1.0,
    "click_delay_sec": 0.042,
    "process_name": None,
    "monitor": 1,
    "template_dir": "assets/elements",
    "new_game_button": [870, 886],
    "geometry": {
        "center_x": 1216,
        "center_y": 504,
        "tile_width": 66,
        "tile_height": 57,
    },
}

PathLike = Union[str, Path]


def _defaults() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def load_settings(path: Optional[PathLike] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file, config.json by default

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return _defaults()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return _defaults()

    if not isinstance(settings, dict):
        logger.warning(f"Settings file {settings_file} is not a JSON object, using defaults")
        return _defaults()

    # Merge with defaults to handle missing keys
    result = _defaults()
    geometry = settings.pop("geometry", None)
    result.update(settings)
    if isinstance(geometry, dict):
        result["geometry"].update(geometry)
    logger.debug(f"Settings loaded: {result}")
    return result


def save_settings(settings: Dict[str, Any], path: Optional[PathLike] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file, config.json by default
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
