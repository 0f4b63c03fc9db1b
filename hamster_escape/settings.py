"""
Settings Module for Hamster Escape

Persistent user preferences stored as JSON in config.json (working dir).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "grid_size": 6,
    "exit_row": 2,
    "hint_strategy": "greedy",
    "debug_enabled": False,
    "seed": None,
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from disk.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Defaults updated with the file's values. Defaults alone if the file
        is missing or unreadable.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")
    except (json.JSONDecodeError, ValueError, OSError) as e:
        logger.warning(f"Failed to load settings from {path}: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    result = DEFAULT_SETTINGS.copy()
    result.update(settings)
    logger.debug(f"Settings loaded: {result}")
    return result


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to disk. Write errors are logged, not raised.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    path = path or SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except OSError as e:
        logger.error(f"Failed to save settings to {path}: {e}")
