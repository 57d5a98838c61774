"""
Core data types shared by every layer of the launcher.

Item and Section are immutable; a Catalog is a snapshot that gets replaced
wholesale after every scan, never edited in place.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional


@dataclass(frozen=True)
class Item:
    """A launchable application. Equal (and hashed) by identifier only."""
    identifier: str  # .app bundle path
    display_name: str = field(compare=False)
    transliterated: str = field(default="", compare=False)
    initials: str = field(default="", compare=False)

    @property
    def search_keys(self) -> tuple[str, str, str]:
        return (self.display_name, self.transliterated, self.initials)


@dataclass(frozen=True)
class Section:
    """A labelled run of items in display order."""
    label: str
    items: tuple[Item, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


_DIGITS = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple:
    """
    Sort key approximating Finder ordering.

    Case-insensitive, with runs of digits compared by value so that
    "App 2" sorts before "App 10".
    """
    parts = _DIGITS.split(name.casefold())
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in parts if p)


class Catalog:
    """
    Immutable snapshot of the scanned applications.

    Items are kept in natural display-name order. Duplicate identifiers keep
    their first occurrence.
    """

    __slots__ = ("_items", "_by_id")

    def __init__(self, items: Iterable[Item] = (), *, presorted: bool = False):
        by_id: dict[str, Item] = {}
        for item in items:
            by_id.setdefault(item.identifier, item)

        ordered = list(by_id.values())
        if not presorted:
            ordered.sort(key=lambda item: natural_key(item.display_name))

        self._items = tuple(ordered)
        self._by_id = by_id

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    def get(self, identifier: str) -> Optional[Item]:
        return self._by_id.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._by_id

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Catalog({len(self._items)} items)"


EMPTY_CATALOG = Catalog()
