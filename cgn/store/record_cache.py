"""In-memory record cache for Campus Gaming Network.

Keeps the last known display record per id so repeated page loads can skip a
read. It is not authoritative storage: writes are last-write-wins and nothing
is refreshed automatically. When `max_entries` is set, records live in a
cachetools LRUCache and the least recently used one is evicted first.
"""

import logging
import threading
from typing import Callable, Generic, Iterator, MutableMapping, Optional, TypeVar

from cachetools import LRUCache

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class _EvictionLoggingLRUCache(LRUCache):
    def __init__(self, maxsize: int, name: str):
        super().__init__(maxsize=maxsize)
        self.name = name

    def popitem(self):
        record_id, record = super().popitem()
        logger.debug(f"{self.name} cache: evicted {record_id}")
        return record_id, record


class RecordCache(Generic[RecordT]):
    """Id to record cache, safe to share between threads."""

    def __init__(self, max_entries: Optional[int] = None, name: str = "records"):
        """
        Args:
            max_entries: Upper bound on cached records (None for no bound)
            name: Label used in log messages
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1 or None")
        self.max_entries = max_entries
        self.name = name
        self._records: MutableMapping[str, RecordT]
        if max_entries is None:
            self._records = {}
        else:
            self._records = _EvictionLoggingLRUCache(max_entries, name)
        self._lock = threading.Lock()

    def get(self, record_id: str) -> Optional[RecordT]:
        with self._lock:
            return self._records.get(record_id)

    def set(self, record_id: str, record: RecordT) -> None:
        """Store a record, replacing any previous one for the id."""
        with self._lock:
            self._records[record_id] = record

    def get_or_load(self, record_id: str, loader: Callable[[str], Optional[RecordT]]) -> Optional[RecordT]:
        """Return the cached record, or load, cache and return it.

        A loader result of None is returned but not cached. The loader runs
        outside the lock, so concurrent misses may load twice; the last
        write wins.
        """
        record = self.get(record_id)
        if record is not None:
            return record
        record = loader(record_id)
        if record is not None:
            self.set(record_id, record)
        return record

    def has(self, record_id: str) -> bool:
        with self._lock:
            return record_id in self._records

    def invalidate(self, record_id: str) -> bool:
        """Drop one record. Returns True if it was cached."""
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def ids(self) -> list:
        with self._lock:
            return list(self._records)

    def __contains__(self, record_id: object) -> bool:
        return self.has(record_id)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())
