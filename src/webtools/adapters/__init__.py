"""Cache storage adapters for webtools integrations."""

from contextlib import suppress

from webtools.adapters.base import StorageAdapter
from webtools.adapters.memory import MemoryAdapter

# Optional adapters - only available when dependencies are installed
with suppress(ImportError):
    from webtools.adapters.redis import RedisAdapter

__all__ = [
    "MemoryAdapter",
    "RedisAdapter",
    "StorageAdapter",
]
