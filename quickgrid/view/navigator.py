"""
Grid Navigator - Arrow-key movement over a sectioned grid.

Focus is either the search entry (selected is None) or one index into the
flattened item sequence. Each section starts on a new row of the grid, so
vertical movement is computed per section:

  - DOWN within a section moves one row; past its last row it jumps to the
    same column of the first row of the next non-empty section.
  - UP mirrors DOWN, landing on the last row of the previous section, and
    hands focus back to the search entry from the first section.
  - LEFT/RIGHT step through the flattened sequence and ignore sections.

All movement saturates at the ends; nothing wraps around.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

DEFAULT_COLUMNS = 8


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class NavigationState:
    """Focus target: None means the search entry."""
    selected: Optional[int] = None

    @property
    def in_search(self) -> bool:
        return self.selected is None

    def clamped(self, length: int) -> "NavigationState":
        """Reset to the search entry if the index no longer fits."""
        if self.selected is not None and not 0 <= self.selected < length:
            return SEARCH
        return self


SEARCH = NavigationState()


def _locate(index: int, sizes: Sequence[int]) -> tuple[int, int, int]:
    """Return (section, offset within section, section start) for index."""
    start = 0
    for section, size in enumerate(sizes):
        if index < start + size:
            return section, index - start, start
        start += size
    raise IndexError(index)


def _starts(sizes: Sequence[int]) -> list[int]:
    starts, total = [], 0
    for size in sizes:
        starts.append(total)
        total += size
    return starts


class GridNavigator:
    """
    Pure transition function for grid focus.

    Args:
        columns: Number of grid columns
    """

    def __init__(self, columns: int = DEFAULT_COLUMNS):
        self.columns = max(1, columns)

    def intercepts(self, state: NavigationState, direction: Direction) -> bool:
        """LEFT/RIGHT in the search entry belong to the text caret."""
        return not (state.in_search and direction in (Direction.LEFT, Direction.RIGHT))

    def move(
        self,
        state: NavigationState,
        direction: Direction,
        sizes: Sequence[int],
    ) -> NavigationState:
        """
        Compute the focus after one arrow key.

        Args:
            state: Current focus
            direction: Arrow pressed
            sizes: Item count of each section, in display order

        Returns:
            The new focus. Unchanged when the move is not possible.
        """
        length = sum(sizes)
        if length == 0:
            return state

        if state.in_search:
            return NavigationState(0) if direction is Direction.DOWN else state

        index = state.selected
        if not 0 <= index < length:
            return state

        if direction is Direction.LEFT:
            return NavigationState(index - 1) if index > 0 else state
        if direction is Direction.RIGHT:
            return NavigationState(index + 1) if index < length - 1 else state
        if direction is Direction.DOWN:
            return self._down(state, sizes)
        return self._up(state, sizes)

    def _down(self, state: NavigationState, sizes: Sequence[int]) -> NavigationState:
        columns = self.columns
        section, offset, _start = _locate(state.selected, sizes)

        if offset + columns < sizes[section]:
            return NavigationState(state.selected + columns)

        starts = _starts(sizes)
        for target in range(section + 1, len(sizes)):
            if sizes[target] > 0:
                local = min(offset % columns, sizes[target] - 1)
                return NavigationState(starts[target] + local)

        return state

    def _up(self, state: NavigationState, sizes: Sequence[int]) -> NavigationState:
        columns = self.columns
        section, offset, _start = _locate(state.selected, sizes)

        if offset - columns >= 0:
            return NavigationState(state.selected - columns)

        starts = _starts(sizes)
        for target in range(section - 1, -1, -1):
            size = sizes[target]
            if size > 0:
                last_row_start = (size - 1) // columns * columns
                local = min(last_row_start + offset % columns, size - 1)
                return NavigationState(starts[target] + local)

        return SEARCH
