"""
Launcher Controller - Owns the launcher state and carries out launches.

The panel forwards every input as an event to dispatch(). The controller
runs it through reduce(), executes the launch effect (open the app, record
it in history, persist, clear the query) and notifies listeners so the
panel can redraw.
"""

from typing import Callable, Optional

from loguru import logger

from quickgrid.models import EMPTY_CATALOG, Catalog, Item
from quickgrid.services.history import FREQUENT_LIMIT, HistoryStore
from quickgrid.view.navigator import DEFAULT_COLUMNS, GridNavigator
from quickgrid.view.state import (
    CatalogReplaced,
    Event,
    HistoryChanged,
    LauncherState,
    QueryChanged,
    recompose,
    reduce,
)


class LauncherController:
    """
    Single owner of LauncherState.

    Args:
        history: Launch history
        storage: KeyValueStore the history is saved to after each launch
        launch: Callable opening an app by identifier
        columns: Grid column count
        include_frequent: Show the "Frequent" section
        frequent_limit: Maximum apps in the "Frequent" section
    """

    def __init__(
        self,
        history: HistoryStore,
        storage,
        launch: Callable[[str], None],
        columns: int = DEFAULT_COLUMNS,
        include_frequent: bool = False,
        frequent_limit: int = FREQUENT_LIMIT,
        catalog: Catalog = EMPTY_CATALOG,
    ):
        self.history = history
        self.storage = storage
        self.launch = launch
        self.navigator = GridNavigator(columns)
        self.include_frequent = include_frequent
        self.frequent_limit = frequent_limit

        self._listeners: list[Callable[[LauncherState], None]] = []
        self._state = recompose(
            LauncherState(catalog=catalog),
            history,
            include_frequent,
            frequent_limit,
        )

    @property
    def state(self) -> LauncherState:
        return self._state

    def connect(self, callback: Callable[[LauncherState], None]) -> None:
        """Call callback(state) after every state change."""
        self._listeners.append(callback)

    def _set_state(self, state: LauncherState) -> None:
        if state == self._state and state.items == self._state.items:
            return
        self._state = state
        for callback in self._listeners:
            callback(state)

    def dispatch(self, event: Event) -> bool:
        """
        Apply an input event.

        Returns:
            True if the event was consumed (the toolkit should not handle it)
        """
        transition = reduce(
            self._state,
            event,
            self.history,
            self.navigator,
            self.include_frequent,
            self.frequent_limit,
        )
        self._set_state(transition.state)

        if transition.launch is not None:
            self._launch(transition.launch)

        return transition.handled

    def _launch(self, item: Item) -> None:
        logger.info(f"Launching {item.display_name} ({item.identifier})")
        self.launch(item.identifier)

        self.history.record(item.identifier)
        self.history.save(self.storage)

        # Back to an empty query with fresh recent items
        self.dispatch(QueryChanged(""))

    def replace_catalog(self, catalog: Catalog) -> None:
        """Swap in a freshly scanned catalog."""
        logger.debug(f"Catalog replaced: {len(catalog)} apps")
        self.dispatch(CatalogReplaced(catalog))

    def refresh(self) -> None:
        """Rebuild sections after history was changed outside a launch."""
        self.dispatch(HistoryChanged())

    def clear_query(self) -> None:
        self.dispatch(QueryChanged(""))
