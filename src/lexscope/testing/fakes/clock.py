"""Testing fakes – FakeClock."""
from __future__ import annotations

from datetime import UTC, datetime

from lexscope.kernel.time import FrozenClock

FAKE_CLOCK_START = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock(FrozenClock):
    """FrozenClock starting at 2026-01-01 12:00 UTC unless told otherwise."""

    def __init__(self, start: datetime = FAKE_CLOCK_START) -> None:
        super().__init__(start)


__all__ = ["FAKE_CLOCK_START", "FakeClock"]
