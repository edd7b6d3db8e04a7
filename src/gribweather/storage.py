"""Local storage for downloaded GRIB files, keyed by source URL."""

from __future__ import annotations

from concurrent.futures import Future
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator
import logging
import threading
import time

from gribweather.config import get_cache_ttl

LOGGER = logging.getLogger("gribweather.storage")

Fetcher = Callable[[], Path]


@dataclass(frozen=True)
class CacheEntry:
    path: Path
    created_at: float


class FileCache:
    """
    Thread-safe URL -> file mapping with single-flight population.

    Only one fetch per key runs at a time; concurrent callers for the same key
    block on it and receive the same path, or the same exception.

    Callers that read the file use :meth:`lease`. An entry that expires or is
    cleared while leased leaves the mapping at once, but its file is only
    deleted when the last lease on it is released.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = get_cache_ttl() if ttl_seconds is None else max(0.0, ttl_seconds)
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._inflight: dict[str, Future] = {}
        self._waiting_holders: dict[str, int] = {}
        self._leases: dict[Path, int] = {}
        self._retired: set[Path] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def _is_fresh(self, entry: CacheEntry) -> bool:
        if not entry.path.exists():
            return False
        if self.ttl_seconds <= 0:
            return True
        return self.clock() - entry.created_at < self.ttl_seconds

    @contextmanager
    def lease(self, key: str, fetch: Fetcher) -> Iterator[Path]:
        """
        Yield the cached file for ``key``, running ``fetch`` once on a miss.

        The file stays on disk until the block exits, even if the entry
        expires or the cache is cleared meanwhile.
        """

        path = self._acquire(key, fetch)
        try:
            yield path
        finally:
            self._release(path)

    def _acquire(self, key: str, fetch: Fetcher) -> Path:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if self._is_fresh(entry):
                    LOGGER.debug("Cache hit for %s", key)
                    self._hold(entry.path, 1)
                    return entry.path
                self._drop(key)
            flight = self._inflight.get(key)
            leader = flight is None
            if leader:
                flight = Future()
                self._inflight[key] = flight
            else:
                self._waiting_holders[key] = self._waiting_holders.get(key, 0) + 1

        if not leader:
            LOGGER.debug("Waiting on in-flight download for %s", key)
            return flight.result()

        try:
            path = fetch()
        except BaseException as exc:
            with self._lock:
                self._inflight.pop(key, None)
                self._waiting_holders.pop(key, None)
            flight.set_exception(exc)
            raise

        with self._lock:
            self._entries[key] = CacheEntry(path=path, created_at=self.clock())
            self._inflight.pop(key, None)
            self._hold(path, self._waiting_holders.pop(key, 0) + 1)
        flight.set_result(path)
        return path

    def _hold(self, path: Path, count: int) -> None:
        self._leases[path] = self._leases.get(path, 0) + count

    def _release(self, path: Path) -> None:
        with self._lock:
            remaining = self._leases.get(path, 0) - 1
            if remaining > 0:
                self._leases[path] = remaining
                return
            self._leases.pop(path, None)
            if path in self._retired:
                self._retired.discard(path)
                self._unlink(path)

    def evict_expired(self) -> int:
        """Drop every stale entry; leased files are deleted once released."""

        with self._lock:
            stale = [key for key, entry in self._entries.items() if not self._is_fresh(entry)]
            for key in stale:
                self._drop(key)
        return len(stale)

    def clear(self) -> None:
        """Delete every cached file; called on application shutdown."""

        with self._lock:
            for key in list(self._entries):
                self._drop(key)
        LOGGER.info("Cleared GRIB file cache")

    def _drop(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        if self._leases.get(entry.path):
            LOGGER.debug("Evicted %s; %s stays until its readers finish", key, entry.path)
            self._retired.add(entry.path)
        else:
            self._unlink(entry.path)
            LOGGER.debug("Evicted %s (%s)", key, entry.path)
        return True

    def _unlink(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.warning("Could not delete cached file %s: %s", path, exc)
