"""Kernel time – Clock protocol + implementations.

Counters never call ``datetime.now`` themselves; they ask the clock handed to
them by :class:`~redis_metrics.metrics.RedisMetrics`. Every instant a clock
returns is timezone-aware UTC because bucket keys are formatted in UTC.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: source of the current instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        if fixed.tzinfo is None:
            fixed = fixed.replace(tzinfo=UTC)
        self._fixed = fixed.astimezone(UTC)

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)

    def set(self, instant: datetime) -> None:
        """Jump to ``instant`` (naive values are taken as UTC)."""
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        self._fixed = instant.astimezone(UTC)


__all__ = ["Clock", "FrozenClock", "SystemClock"]
