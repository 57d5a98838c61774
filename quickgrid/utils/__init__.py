# QuickGrid Utilities Package
"""
Shared utility functions and helpers for the QuickGrid launcher.
"""

from .helpers import configure_logging, launch_app, load_settings

__all__ = ["configure_logging", "launch_app", "load_settings"]
