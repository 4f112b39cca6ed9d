"""
Settings Module for the Sokoban Solver

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory.

Keys read by main.py:
    strategy_name: Strategy name or alias used when --strategy is omitted
    timeout_sec: Time budget per solve (--timeout overrides)
    max_nodes: Node expansion budget (--max-nodes overrides)
    max_rounds: Round cap, passed to the deepening strategy only
    debug_enabled: Always save a debug image of the solved state

--save-settings writes the first four back after flags are applied.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "strategy_name": "deepening",
    "timeout_sec": 20.0,
    "max_nodes": 500_000,
    "max_rounds": 50,
}


def load_settings() -> Dict[str, Any]:
    """
    Load settings from config.json.

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    if not SETTINGS_FILE.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(SETTINGS_FILE, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any]) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
    """
    try:
        with open(SETTINGS_FILE, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
