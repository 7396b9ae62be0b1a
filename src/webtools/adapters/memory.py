"""In-memory storage adapter."""

import threading
from collections import OrderedDict

from webtools.tags import serialize_tag
from webtools.types import CacheEntry, Tag


class MemoryAdapter:
    """In-memory storage adapter with optional LRU eviction."""

    def __init__(self, max_items: int | None = None) -> None:
        self._cache: OrderedDict[str, CacheEntry[object]] = OrderedDict()
        self._invalidations: dict[str, int] = {}
        self._max_items = max_items
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry[object] | None:
        """Get a cache entry by key."""
        with self._lock:
            entry = self._cache.get(key)
            if entry:
                self._cache.move_to_end(key)  # LRU touch
            return entry

    def set(self, key: str, entry: CacheEntry[object]) -> None:
        """Store a cache entry."""
        with self._lock:
            self._cache[key] = entry
            self._cache.move_to_end(key)
            if self._max_items and len(self._cache) > self._max_items:
                self._cache.popitem(last=False)

    def delete(self, key: str) -> None:
        """Delete a cache entry."""
        with self._lock:
            self._cache.pop(key, None)

    def get_tag_invalidation_time(self, tag: Tag) -> int | None:
        """Get the invalidation timestamp for a tag."""
        key = serialize_tag(tag)
        with self._lock:
            return self._invalidations.get(key)

    def set_tag_invalidation_time(self, tag: Tag, timestamp: int) -> None:
        """Set the invalidation timestamp for a tag."""
        key = serialize_tag(tag)
        with self._lock:
            self._invalidations[key] = timestamp

    def clear(self) -> None:
        """Clear all cached entries and tag invalidation times.

        Unlike the Redis adapter, nothing outlives a clear here: the whole
        store is process memory and entries written afterwards are fresh.
        """
        with self._lock:
            self._cache.clear()
            self._invalidations.clear()

    def disconnect(self) -> None:
        """Disconnect from the storage backend (no-op for memory)."""
        pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
