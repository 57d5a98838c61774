# QuickGrid Panels Package
"""
GTK front end for the launcher.

The panel is a thin shim: it forwards input to LauncherController and
redraws from LauncherState.
"""

from .grid import GridPanel

__all__ = ["GridPanel"]
