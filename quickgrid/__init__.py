# QuickGrid Launcher Package
"""
Grid application launcher for macOS.

Layers:
  - services: directory scan, launch history, persistence
  - search: pinyin-aware query filtering
  - view: sections, grid navigation and the launcher state machine
  - panels: the GTK window shim
"""

__version__ = "0.1.0-dev"
