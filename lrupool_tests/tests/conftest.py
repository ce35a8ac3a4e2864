import pytest

import lrupool.lru as lru_mod


class FakeClock:
    """Stand-in for time.monotonic that only moves when told to."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class EvictRecorder:
    """Eviction callback that remembers every (key, value) it receives."""

    def __init__(self) -> None:
        self.calls = []

    def __call__(self, key, value) -> None:
        self.calls.append((key, value))


@pytest.fixture
def clock(monkeypatch):
    c = FakeClock()
    monkeypatch.setattr(lru_mod.time, "monotonic", c)
    return c


@pytest.fixture
def evicted():
    return EvictRecorder()
