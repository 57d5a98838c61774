"""
Sectioned View - Arrange the catalog into labelled sections.

With a query, the grid shows a single "Search Results" section. Without
one it shows "Recent" (when there is history), optionally "Frequent", and
always "All Applications".

Sections are derived values: compose() is called again whenever the
catalog, the history or the query changes.
"""

from typing import Sequence

from quickgrid.models import Catalog, Item, Section
from quickgrid.search.index import filter_items
from quickgrid.services.history import FREQUENT_LIMIT, HistoryStore

SEARCH_RESULTS = "Search Results"
RECENT = "Recent"
FREQUENT = "Frequent"
ALL_ITEMS = "All Applications"


def compose(
    catalog: Catalog,
    history: HistoryStore,
    query: str = "",
    include_frequent: bool = False,
    frequent_limit: int = FREQUENT_LIMIT,
) -> tuple[Section, ...]:
    """
    Build the ordered sections for the current state.

    Args:
        catalog: Current catalog snapshot
        history: Launch history
        query: Search entry text
        include_frequent: Show the "Frequent" section between recent and all
        frequent_limit: Maximum apps in the "Frequent" section

    Returns:
        Tuple of sections in display order
    """
    if query.strip():
        return (Section(SEARCH_RESULTS, tuple(filter_items(catalog.items, query))),)

    sections = []

    recent = history.recent_items(catalog)
    if recent:
        sections.append(Section(RECENT, tuple(recent)))

    if include_frequent:
        frequent = history.frequent_items(catalog, frequent_limit)
        if frequent:
            sections.append(Section(FREQUENT, tuple(frequent)))

    sections.append(Section(ALL_ITEMS, catalog.items))
    return tuple(sections)


def flatten(sections: Sequence[Section]) -> tuple[Item, ...]:
    """Concatenate section items in display order."""
    return tuple(item for section in sections for item in section.items)


def section_sizes(sections: Sequence[Section]) -> tuple[int, ...]:
    return tuple(len(section.items) for section in sections)
