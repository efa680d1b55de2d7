"""Application cache – TTLCache, a clock-driven expiring map."""
from __future__ import annotations

import dataclasses
from typing import Generic, TypeVar

from lexscope.kernel.time import Clock, SystemClock

V = TypeVar("V")

__all__ = ["CacheStats", "TTLCache"]


@dataclasses.dataclass(frozen=True)
class CacheStats:
    size: int
    entries: tuple[str, ...]


class TTLCache(Generic[V]):
    """In-process ``key -> (value, expiry)`` map.

    Reads compare the stored expiry with the clock's current instant; writes
    unconditionally overwrite the slot. There is no locking: under asyncio
    two concurrent misses for the same key may both compute and both write,
    which is harmless as long as the computation is idempotent.
    Expired entries are evicted lazily on read.
    """

    def __init__(self, ttl_seconds: float, *, clock: Clock | None = None) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = float(ttl_seconds)
        self._clock = clock or SystemClock()
        self._data: dict[str, tuple[V, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> V | None:
        slot = self._data.get(key)
        if slot is None:
            return None
        value, expiry = slot
        if self._clock.now().timestamp() < expiry:
            return value
        del self._data[key]
        return None

    def set(self, key: str, value: V) -> None:
        self._data[key] = (value, self._clock.now().timestamp() + self._ttl)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def stats(self) -> CacheStats:
        return CacheStats(size=len(self._data), entries=tuple(self._data))
