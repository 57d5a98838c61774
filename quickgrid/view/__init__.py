"""
View package - Sections, grid navigation and the launcher state machine.

Everything here is toolkit-free so it can be driven from tests.
"""

from .navigator import SEARCH, Direction, GridNavigator, NavigationState
from .sections import compose, flatten
from .state import (
    Activate,
    CatalogReplaced,
    HistoryChanged,
    LauncherState,
    Move,
    QueryChanged,
    reduce,
)

__all__ = [
    "SEARCH",
    "Activate",
    "CatalogReplaced",
    "Direction",
    "GridNavigator",
    "HistoryChanged",
    "LauncherState",
    "Move",
    "NavigationState",
    "QueryChanged",
    "compose",
    "flatten",
    "reduce",
]
