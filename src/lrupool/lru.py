"""Fixed-size LRU cache with optional per-entry expiry.

Entries live in nodes drawn from a pool that is filled once with `size`
blank nodes. Adding and evicting only move handles between the pool and
the eviction list, so a cache at steady state allocates nothing.

Expired entries are detected on access and reported as misses; they keep
their slot until removed or pushed out by capacity. Not thread safe.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

from lrupool import config
from lrupool.arena import Node, NodeArena
from lrupool.errors import ValidationError
from lrupool.evictions import EvictCallback
from lrupool.linked_list import LinkedList

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _check_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValidationError(f"Must provide a positive size, got {size!r}")
    return size


class LRU(Generic[K, V]):
    """Non thread safe fixed size LRU cache.

    Expiry instants are time.monotonic() readings, as returned by
    ``peek_with_expire_time``. They are only comparable with other
    monotonic readings from the same process, never with wall-clock time.

    Args:
        size: Maximum number of entries; must be positive. A later
            ``resize`` may bring it down to zero.
        expire: Default time-to-live in seconds applied by ``add``.
            Zero or negative means entries never expire.
        on_evict: Called with ``(key, value)`` once for every entry that
            leaves the cache, whatever the reason.
    """

    def __init__(
        self,
        size: int,
        *,
        expire: float = 0.0,
        on_evict: Optional[EvictCallback] = None,
    ) -> None:
        self._size = _check_size(size)
        self._expire = float(expire)
        self._on_evict = on_evict

        self._arena = NodeArena()
        self._evict_list = LinkedList(self._arena)
        self._free_list = LinkedList(self._arena)
        self._items: Dict[K, int] = {}

        self._sync_pool()

    @property
    def size(self) -> int:
        return self._size

    @property
    def expire(self) -> float:
        return self._expire

    def purge(self) -> None:
        """Evict every entry, firing the callback once per key."""
        count = len(self._items)
        for handle in list(self._items.values()):
            self._remove_element(handle)

        self._sync_pool()
        logger.debug("Purged %d entries", count)

    def add(self, key: K, value: V) -> bool:
        """Add a value using the default expiry. Returns True if an eviction occurred."""
        return self.add_with_expire(key, value, 0.0)

    def add_with_expire(self, key: K, value: V, expire: float) -> bool:
        """Add a value that expires after `expire` seconds.

        A non-positive `expire` falls back to the cache default. Updating
        an existing key replaces its value and expiry and marks it most
        recently used. Returns True if an eviction occurred.
        """
        expires_at = self._expires_at(expire)

        handle = self._items.get(key)
        if handle is not None:
            self._evict_list.move_to_front(handle)
            node = self._arena[handle]
            node.value = value
            node.expires_at = expires_at
            return False

        if self._size == 0:
            # Nothing fits; the incoming pair leaves straight away
            if self._on_evict is not None:
                self._on_evict(key, value)
            return True

        evict = len(self._evict_list) >= self._size
        if evict:
            self._remove_oldest()

        handle = self._free_list.remove(self._free_list.front())
        node = self._arena[handle]
        node.key = key
        node.value = value
        node.expires_at = expires_at
        self._evict_list.push_handle_front(handle)
        self._items[key] = handle
        return evict

    def get(self, key: K) -> Tuple[Optional[V], bool]:
        handle = self._items.get(key)
        if handle is None:
            return None, False

        node = self._arena[handle]
        if self._is_expired(node):
            return None, False

        self._evict_list.move_to_front(handle)
        return node.value, True

    def contains(self, key: K) -> bool:
        # No recency update and no removal of stale entries
        handle = self._items.get(key)
        if handle is None:
            return False
        return not self._is_expired(self._arena[handle])

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def peek(self, key: K) -> Tuple[Optional[V], bool]:
        value, _, ok = self.peek_with_expire_time(key)
        return value, ok

    def peek_with_expire_time(self, key: K) -> Tuple[Optional[V], Optional[float], bool]:
        """Return (value, expires_at, found) without touching recency.

        `expires_at` is a time.monotonic() instant, or None for entries
        that never expire. Compare it with time.monotonic(), not with
        wall-clock time.
        """
        handle = self._items.get(key)
        if handle is None:
            return None, None, False

        node = self._arena[handle]
        if self._is_expired(node):
            return None, None, False
        return node.value, node.expires_at, True

    def remove(self, key: K) -> bool:
        handle = self._items.get(key)
        if handle is None:
            return False
        self._remove_element(handle)
        return True

    def remove_oldest(self) -> Tuple[Optional[K], Optional[V], bool]:
        handle = self._evict_list.back()
        if handle is None:
            return None, None, False
        key, value = self._remove_element(handle)
        return key, value, True

    def get_oldest(self) -> Tuple[Optional[K], Optional[V], bool]:
        handle = self._evict_list.back()
        if handle is None:
            return None, None, False
        node = self._arena[handle]
        return node.key, node.value, True

    def keys(self) -> List[K]:
        """Keys from oldest to newest."""
        return [self._arena[handle].key for handle in reversed(self._evict_list)]

    def __len__(self) -> int:
        return len(self._evict_list)

    def resize(self, size: int) -> int:
        """Change the capacity, evicting the oldest entries that no longer fit.

        The pool is grown or trimmed so that the cache can hold exactly
        `size` entries. A non-positive `size` evicts everything and leaves
        a cache that stores nothing. Returns the number of entries evicted.
        """
        size = max(0, size)

        diff = max(0, len(self._evict_list) - size)
        for _ in range(diff):
            self._remove_oldest()

        old_size, self._size = self._size, size
        self._sync_pool()
        logger.debug("Resized from %d to %d, evicted %d", old_size, size, diff)
        return diff

    def _expires_at(self, expire: float) -> Optional[float]:
        if expire > 0:
            return time.monotonic() + expire
        if self._expire > 0:
            return time.monotonic() + self._expire
        return None

    def _is_expired(self, node: Node) -> bool:
        if node.expires_at is None:
            return False
        return time.monotonic() > node.expires_at

    def _remove_oldest(self) -> None:
        handle = self._evict_list.back()
        if handle is not None:
            key, _ = self._remove_element(handle)
            logger.debug("Evicted oldest entry %r", key)

    def _remove_element(self, handle: int) -> Tuple[K, V]:
        node = self._arena[handle]
        key, value = node.key, node.value

        self._evict_list.remove(handle)
        node.clear()
        self._free_list.push_handle_front(handle)
        del self._items[key]

        if self._on_evict is not None:
            self._on_evict(key, value)
        return key, value

    def _sync_pool(self) -> None:
        # Keep len(evict_list) + len(free_list) == size
        while len(self._evict_list) + len(self._free_list) < self._size:
            self._free_list.push_front()

        while len(self._evict_list) + len(self._free_list) > self._size and len(self._free_list):
            handle = self._free_list.remove(self._free_list.front())
            self._arena.retire(handle)


def new_lru(size: int, on_evict: Optional[EvictCallback] = None) -> LRU:
    return LRU(size, on_evict=on_evict)


def new_lru_with_expire(size: int, expire: float, on_evict: Optional[EvictCallback] = None) -> LRU:
    return LRU(size, expire=expire, on_evict=on_evict)


def new_lru_from_config(on_evict: Optional[EvictCallback] = None) -> LRU:
    """Build a cache sized and timed from the LRU_* environment settings."""
    return LRU(config.LRU_SIZE, expire=config.LRU_EXPIRE_SECONDS, on_evict=on_evict)
