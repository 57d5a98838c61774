"""
Catalog Service - Run directory scans and publish catalog snapshots.

Scanning touches the filesystem, so scan_async() runs it on a worker
thread. The finished Catalog is handed to the publish callback in one piece;
the host wraps that callback so it lands on the UI main loop. A partial
catalog is never published, and results from a scan that was superseded by
a newer one are dropped.
"""

import threading
from typing import Callable, Iterable, Optional

from loguru import logger

from quickgrid.models import EMPTY_CATALOG, Catalog
from quickgrid.services.scanner import DEFAULT_ROOTS, scan_applications


class CatalogService:
    """
    Owns the current catalog snapshot.

    Methods:
        scan(): Scan synchronously and publish
        scan_async(): Scan on a worker thread and publish when done
    """

    def __init__(
        self,
        roots: Iterable[str] = DEFAULT_ROOTS,
        languages: Optional[Iterable[str]] = None,
        publish: Optional[Callable[[Catalog], None]] = None,
    ):
        self.roots = list(roots)
        self.languages = list(languages) if languages else None
        self.publish = publish
        self.catalog = EMPTY_CATALOG

        self._lock = threading.RLock()
        self._generation = 0

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _run(self, generation: int) -> Optional[Catalog]:
        catalog = Catalog(scan_applications(self.roots, self.languages), presorted=True)

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropping stale scan #{generation}")
                return None
            # Snapshot swap is a single assignment
            self.catalog = catalog

            # Publish under the lock so a superseded scan cannot publish after us
            if self.publish is not None:
                self.publish(catalog)
        return catalog

    def scan(self) -> Catalog:
        """Scan now and return the new catalog."""
        result = self._run(self._next_generation())
        return result if result is not None else self.catalog

    def scan_async(self) -> threading.Thread:
        """Start a background scan. Returns the worker thread."""
        generation = self._next_generation()
        worker = threading.Thread(
            target=self._run,
            args=(generation,),
            name=f"catalog-scan-{generation}",
            daemon=True,
        )
        worker.start()
        return worker
