"""
Helper utilities for the QuickGrid launcher.

Provides common functions used by the app host and the panel:
- App launching
- Settings loading
- Logging setup
- Data file locations
"""

import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

CONFIG_DIR = Path.home() / ".config" / "quickgrid"
DATA_DIR = Path.home() / ".local" / "share" / "quickgrid"
SETTINGS_PATH = CONFIG_DIR / "settings.toml"
HISTORY_DB_PATH = DATA_DIR / "history.db"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "launcher": {
        "close_delay_ms": 300,
        "log_level": "INFO",
    },
    "grid": {
        "columns": 8,
    },
    "history": {
        "recent_capacity": 8,
        "frequent_limit": 10,
        "show_frequent": False,
    },
    "scan": {
        "roots": ["/Applications", "/System/Applications", "~/Applications"],
        "languages": [],
    },
    "panel": {
        "width": 800,
        "height": 600,
    },
}


def launch_app(identifier: str) -> None:
    """
    Ask macOS to open an application bundle.

    Fire-and-forget: the launcher does not wait for the app to start.

    Args:
        identifier: Path to the .app bundle

    Example:
        launch_app("/Applications/Safari.app")
    """
    try:
        subprocess.Popen(
            ["open", identifier],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        logger.exception(f"Failed to launch {identifier}")


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load launcher settings from TOML file.

    Args:
        settings_path: File to read, defaults to ~/.config/quickgrid/settings.toml

    Returns:
        Dictionary containing settings with defaults applied
    """
    if settings_path is None:
        settings_path = SETTINGS_PATH

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError):
        logger.exception(f"Could not load settings from {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    return _deep_merge(DEFAULT_SETTINGS, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = {
        key: _deep_merge(value, {}) if isinstance(value, dict) else value
        for key, value in base.items()
    }

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with one at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
