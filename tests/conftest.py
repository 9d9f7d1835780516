"""Shared fixtures for spacetime tests."""

from datetime import datetime, timedelta

import pytest

from spacetime.store import MemoryTimesStore


class FakeClock:
    """Manually advanced replacement for ``datetime.now``."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 3, 9, 0, 0))


@pytest.fixture
def store() -> MemoryTimesStore:
    return MemoryTimesStore()
