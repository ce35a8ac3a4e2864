"""Configuration and environment helpers for the cache.

Provides small helpers to read typed environment variables and exposes
the defaults used by ``new_lru_from_config`` (LRU_SIZE,
LRU_EXPIRE_SECONDS).
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Capacity
LRU_SIZE = _env_int("LRU_SIZE", 128)

# Default time-to-live in seconds; 0 means entries never expire
LRU_EXPIRE_SECONDS = _env_float("LRU_EXPIRE_SECONDS", 0.0)
