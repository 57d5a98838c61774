# QuickGrid Services Package
"""
Backend services for the QuickGrid launcher.

Services handle directory scanning, launch history and persistence.
"""

from .catalog import CatalogService
from .history import HistoryStore
from .scanner import scan_applications
from .storage import KeyValueStore

__all__ = ["CatalogService", "HistoryStore", "KeyValueStore", "scan_applications"]
