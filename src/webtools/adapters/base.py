"""Base adapter protocol for cache storage backends."""

from typing import Protocol, runtime_checkable

from webtools.types import CacheEntry, Tag


@runtime_checkable
class StorageAdapter(Protocol):
    """Cache storage adapter interface."""

    def get(self, key: str) -> CacheEntry[object] | None:
        """Get a cache entry by key."""
        ...

    def set(self, key: str, entry: CacheEntry[object]) -> None:
        """Store a cache entry."""
        ...

    def delete(self, key: str) -> None:
        """Delete a cache entry."""
        ...

    def get_tag_invalidation_time(self, tag: Tag) -> int | None:
        """Get the invalidation timestamp for a tag."""
        ...

    def set_tag_invalidation_time(self, tag: Tag, timestamp: int) -> None:
        """Set the invalidation timestamp for a tag."""
        ...

    def clear(self) -> None:
        """Clear all cached entries."""
        ...

    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        ...
