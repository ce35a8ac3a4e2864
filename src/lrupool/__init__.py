"""Fixed-size LRU cache backed by a recycled node pool."""

from lrupool.errors import HandleError, LRUPoolError, ValidationError
from lrupool.evictions import EvictCallback, EvictionQueue
from lrupool.lru import LRU, new_lru, new_lru_from_config, new_lru_with_expire

__all__ = [
    "LRU",
    "EvictCallback",
    "EvictionQueue",
    "HandleError",
    "LRUPoolError",
    "ValidationError",
    "new_lru",
    "new_lru_from_config",
    "new_lru_with_expire",
]
