"""
Search Index - Live filtering of the catalog.

Matches are a case-insensitive substring test against the display name,
the pinyin form and the initials form of each item. The filter is stable:
results keep catalog order, they are never re-ranked.
"""

from typing import Iterable, Sequence

from quickgrid.models import Item


def matches(item: Item, needle: str) -> bool:
    """True if the casefolded needle occurs in any search key of item."""
    return any(needle in key.casefold() for key in item.search_keys if key)


def filter_items(items: Iterable[Item], query: str) -> list[Item]:
    """
    Filter items by query, preserving input order.

    Args:
        items: Items in display order
        query: Raw text from the search entry

    Returns:
        Matching items. A blank query returns every item.
    """
    needle = query.strip().casefold()
    if not needle:
        return list(items)
    return [item for item in items if matches(item, needle)]


class SearchIndex:
    """Holds one catalog's items for repeated filtering."""

    def __init__(self, items: Sequence[Item]):
        self.items = tuple(items)

    def filter(self, query: str) -> list[Item]:
        return filter_items(self.items, query)
