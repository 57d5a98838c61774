"""
Launcher State - The whole UI state and its transition function.

Every input the panel receives is turned into one of the event types below
and fed to reduce(), which returns the next state without touching the
toolkit. Launching is returned as an effect for the controller to carry out.
"""

from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional, Union

from quickgrid.models import EMPTY_CATALOG, Catalog, Item, Section
from quickgrid.services.history import FREQUENT_LIMIT, HistoryStore
from quickgrid.view.navigator import SEARCH, Direction, GridNavigator, NavigationState
from quickgrid.view.sections import compose, flatten, section_sizes


@dataclass(frozen=True)
class LauncherState:
    catalog: Catalog = EMPTY_CATALOG
    query: str = ""
    sections: tuple[Section, ...] = ()
    focus: NavigationState = SEARCH
    items: tuple[Item, ...] = field(default=(), compare=False)

    @property
    def selected_item(self) -> Optional[Item]:
        if self.focus.in_search:
            return None
        return self.items[self.focus.selected]


# Events

@dataclass(frozen=True)
class QueryChanged:
    text: str


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class Activate:
    """Launch the item at index, or the focused item when index is None."""
    index: Optional[int] = None


@dataclass(frozen=True)
class CatalogReplaced:
    catalog: Catalog


@dataclass(frozen=True)
class HistoryChanged:
    pass


Event = Union[QueryChanged, Move, Activate, CatalogReplaced, HistoryChanged]


class Transition(NamedTuple):
    state: LauncherState
    launch: Optional[Item] = None
    handled: bool = True


def recompose(
    state: LauncherState,
    history: HistoryStore,
    include_frequent: bool = False,
    frequent_limit: int = FREQUENT_LIMIT,
    **changes,
) -> LauncherState:
    """Rebuild sections after catalog/query/history changes."""
    state = replace(state, **changes)
    sections = compose(state.catalog, history, state.query, include_frequent, frequent_limit)
    items = flatten(sections)
    return replace(
        state,
        sections=sections,
        items=items,
        focus=state.focus.clamped(len(items)),
    )


def reduce(
    state: LauncherState,
    event: Event,
    history: HistoryStore,
    navigator: GridNavigator,
    include_frequent: bool = False,
    frequent_limit: int = FREQUENT_LIMIT,
) -> Transition:
    """
    Apply one event.

    Args:
        state: Current state
        event: Input event
        history: Launch history used to build sections
        navigator: Grid navigator for arrow keys
        include_frequent: Whether the "Frequent" section is shown

    Returns:
        Transition of (new state, item to launch or None, handled flag)
    """
    options = {"include_frequent": include_frequent, "frequent_limit": frequent_limit}

    if isinstance(event, QueryChanged):
        # Selection never survives re-filtering
        return Transition(recompose(state, history, query=event.text, focus=SEARCH, **options))

    if isinstance(event, Move):
        if not navigator.intercepts(state.focus, event.direction):
            return Transition(state, handled=False)
        focus = navigator.move(state.focus, event.direction, section_sizes(state.sections))
        return Transition(replace(state, focus=focus))

    if isinstance(event, Activate):
        index = event.index if event.index is not None else state.focus.selected
        if index is None or not 0 <= index < len(state.items):
            return Transition(state, handled=False)
        return Transition(state, launch=state.items[index])

    if isinstance(event, CatalogReplaced):
        return Transition(recompose(state, history, catalog=event.catalog, **options))

    if isinstance(event, HistoryChanged):
        return Transition(recompose(state, history, **options))

    raise TypeError(f"Unknown event: {event!r}")
