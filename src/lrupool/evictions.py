"""Eviction notification helpers.

An eviction callback runs inline inside the call that evicted the entry.
EvictionQueue is a callback that only records the pair, so user code can
react later, outside of any cache mutation.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Iterator, Optional, Tuple

EvictCallback = Callable[[Any, Any], None]


class EvictionQueue:
    def __init__(self, *, maxlen: Optional[int] = None) -> None:
        # With maxlen set, the oldest pending pairs are dropped first
        self._pending: Deque[Tuple[Any, Any]] = deque(maxlen=maxlen)

    def __call__(self, key: Any, value: Any) -> None:
        self._pending.append((key, value))

    def __len__(self) -> int:
        return len(self._pending)

    def drain(self) -> Iterator[Tuple[Any, Any]]:
        """Yield pending (key, value) pairs oldest first, removing each."""
        while self._pending:
            yield self._pending.popleft()
