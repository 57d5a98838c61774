"""
History Service - Track launches and rank apps by recency and frequency.

Two structures are kept per user:
  - launch counts: identifier -> number of launches (only ever grows)
  - recency list: distinct identifiers, most recent first, capped

Recording a launch bumps the count and moves the identifier to the front
of the recency list. Both are written through a KeyValueStore after every
launch and read back verbatim at startup.
"""

from typing import Iterable, Optional

from loguru import logger

from quickgrid.models import Catalog, Item

RECENT_CAPACITY = 8
FREQUENT_LIMIT = 10

COUNTS_KEY = "launch_counts"
RECENT_KEY = "recent_items"


class HistoryStore:
    """
    In-memory launch history.

    Methods:
        record(identifier): Record a launch
        recent_items(catalog): Recently launched apps still installed
        frequent_items(catalog, limit): Apps ranked by launch count
    """

    def __init__(
        self,
        counts: Optional[dict[str, int]] = None,
        recent: Iterable[str] = (),
        capacity: int = RECENT_CAPACITY,
    ):
        self.capacity = max(1, capacity)
        self._counts: dict[str, int] = dict(counts or {})
        self._recent: list[str] = []
        for identifier in recent:
            if identifier not in self._recent:
                self._recent.append(identifier)
        del self._recent[self.capacity:]

    def record(self, identifier: str) -> None:
        """
        Record a launch of identifier.

        Args:
            identifier: Bundle path of the launched app
        """
        self._counts[identifier] = self._counts.get(identifier, 0) + 1

        if identifier in self._recent:
            self._recent.remove(identifier)
        self._recent.insert(0, identifier)
        del self._recent[self.capacity:]

        logger.debug(f"Recorded launch for {identifier}")

    def launch_count(self, identifier: str) -> int:
        return self._counts.get(identifier, 0)

    @property
    def recent_identifiers(self) -> tuple[str, ...]:
        return tuple(self._recent)

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def recent_items(self, catalog: Catalog) -> list[Item]:
        """
        Map the recency list through the catalog.

        Apps that are no longer installed are skipped; order is kept.
        """
        return [
            catalog.get(identifier)
            for identifier in self._recent
            if identifier in catalog
        ]

    def frequent_items(self, catalog: Catalog, limit: int = FREQUENT_LIMIT) -> list[Item]:
        """
        Get installed apps ranked by launch count, highest first.

        Args:
            catalog: Current catalog snapshot
            limit: Maximum number of apps to return

        Returns:
            Up to limit items. Order between equal counts is unspecified.
        """
        ranked = sorted(self._counts.items(), key=lambda kv: kv[1], reverse=True)
        items = [catalog.get(identifier) for identifier, _count in ranked if identifier in catalog]
        return items[:limit]

    def clear(self, identifier: Optional[str] = None) -> None:
        """
        Clear usage history.

        Args:
            identifier: If provided, forget only this app. If None, forget all.
        """
        if identifier is None:
            self._counts.clear()
            self._recent.clear()
            return

        self._counts.pop(identifier, None)
        if identifier in self._recent:
            self._recent.remove(identifier)

    @classmethod
    def load(cls, storage, capacity: int = RECENT_CAPACITY) -> "HistoryStore":
        """
        Read history back from storage.

        Missing or malformed values are replaced with empty defaults.
        """
        raw_counts = storage.get(COUNTS_KEY, {})
        raw_recent = storage.get(RECENT_KEY, [])

        counts: dict[str, int] = {}
        if isinstance(raw_counts, dict):
            for identifier, count in raw_counts.items():
                if isinstance(count, int) and not isinstance(count, bool) and count > 0:
                    counts[str(identifier)] = count
        else:
            logger.warning(f"Discarding malformed {COUNTS_KEY}: {raw_counts!r}")

        recent: list[str] = []
        if isinstance(raw_recent, list):
            recent = [identifier for identifier in raw_recent if isinstance(identifier, str)]
        else:
            logger.warning(f"Discarding malformed {RECENT_KEY}: {raw_recent!r}")

        store = cls(counts, recent, capacity)
        logger.debug(f"Loaded history: {len(counts)} counted, {len(store._recent)} recent")
        return store

    def save(self, storage) -> None:
        """Write counts and the recency list to storage in one transaction."""
        storage.set_many({COUNTS_KEY: self._counts, RECENT_KEY: self._recent})
