"""
Storage abstractions.

Integration points:
- ContentStore → relational database
- CacheStorage → Redis
- CostLedger → append-only cost table
"""

from articlelingo.storage.base import (
    CacheStorage,
    ContentStore,
    CostLedger,
    StorageProvider,
)
from articlelingo.storage.local import (
    InMemoryCacheStorage,
    InMemoryContentStore,
    InMemoryCostLedger,
    create_local_storage,
)

__all__ = [
    "CacheStorage",
    "ContentStore",
    "CostLedger",
    "StorageProvider",
    "InMemoryCacheStorage",
    "InMemoryContentStore",
    "InMemoryCostLedger",
    "create_local_storage",
]
