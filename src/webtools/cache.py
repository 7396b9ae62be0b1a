"""Tag-invalidated cache built on a storage adapter.

Entries are stored with a list of tags. An entry becomes stale as soon as
any of its tags, or any prefix of one of its tags, is invalidated at or
after the moment the entry was written. Entries written without a TTL are
permanent and rely purely on tag invalidation.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

from webtools.adapters.base import StorageAdapter
from webtools.duration import parse_optional_duration
from webtools.types import CacheEntry, Duration, Tag

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class TaggedCache:
    """A cache bin whose entries are invalidated by tag."""

    def __init__(
        self,
        adapter: StorageAdapter,
        *,
        prefix: str = "webtools",
        default_ttl: Duration | None = None,
    ) -> None:
        self._adapter = adapter
        self._prefix = prefix
        self._default_ttl = parse_optional_duration(default_ttl)

    @property
    def adapter(self) -> StorageAdapter:
        return self._adapter

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def get(self, key: str) -> CacheEntry[Any] | None:
        """Return the live entry for ``key``, or None if absent, expired or stale."""
        entry = self._adapter.get(self._full_key(key))
        if entry is None:
            return None
        if self._is_expired(entry) or self._is_stale(entry):
            logger.debug("Discarding outdated cache entry for %s", key)
            return None
        return entry

    def set(
        self,
        key: str,
        value: Any,
        *,
        tags: Iterable[Tag],
        ttl: Duration | None = None,
    ) -> None:
        """Store ``value`` under ``key``. Without a TTL the entry is permanent."""
        now = _now_ms()
        ttl_ms = parse_optional_duration(ttl) if ttl is not None else self._default_ttl
        entry: CacheEntry[object] = CacheEntry(
            value=value,
            tags=[Tag(tuple(t)) for t in tags],
            created_at=now,
            expires_at=now + ttl_ms if ttl_ms is not None else None,
        )
        self._adapter.set(self._full_key(key), entry)

    def delete(self, key: str) -> None:
        """Remove a single entry."""
        self._adapter.delete(self._full_key(key))

    def invalidate(self, tags: Iterable[Tag]) -> None:
        """Invalidate cache entries by tags.

        Invalidating a tag also invalidates all entries with more specific
        tags (children).
        """
        now = _now_ms()
        for tag in tags:
            logger.debug("Invalidating cache tag %s", tag)
            self._adapter.set_tag_invalidation_time(Tag(tuple(tag)), now)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._adapter.clear()

    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        self._adapter.disconnect()

    def _is_stale(self, entry: CacheEntry[Any]) -> bool:
        """Check if any tag has been invalidated since entry creation."""
        for tag in entry.tags:
            # Check exact invalidation
            inv_time = self._adapter.get_tag_invalidation_time(tag)
            if inv_time is not None and inv_time >= entry.created_at:
                return True
            # Check prefix invalidations (all parent tags)
            for i in range(1, len(tag)):
                parent = Tag(tag[:i])
                inv_time = self._adapter.get_tag_invalidation_time(parent)
                if inv_time is not None and inv_time >= entry.created_at:
                    return True
        return False

    def _is_expired(self, entry: CacheEntry[Any]) -> bool:
        """Check if entry has exceeded its TTL."""
        if entry.expires_at is None:
            return False
        return _now_ms() > entry.expires_at
