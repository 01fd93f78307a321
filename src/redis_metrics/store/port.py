"""Store – CounterStore and StoreBatch ports.

Every method maps to one Redis command (or one Lua script). ``ttl`` arguments
of ``incrby``/``zincrby`` switch to the expire-on-creation scripts when they
are positive.
"""
from __future__ import annotations

import abc
from collections.abc import Sequence
from typing import Any

ScoredMembers = list[tuple[str, float]]


class StoreBatch(abc.ABC):
    """Commands queued for one atomic ``MULTI``/``EXEC`` round-trip.

    Queueing methods return the batch so calls can be chained; ``execute``
    returns one reply per queued command, in order, and raises the first
    command error (in which case the store applies none of them).
    """

    @abc.abstractmethod
    def incrby(self, key: str, amount: int, ttl: int | None = None) -> StoreBatch: ...

    @abc.abstractmethod
    def zincrby(self, key: str, member: str, amount: int, ttl: int | None = None) -> StoreBatch: ...

    @abc.abstractmethod
    def zscore(self, key: str, member: str) -> StoreBatch: ...

    @abc.abstractmethod
    def zrange(self, key: str, start: int, stop: int, *, desc: bool = False) -> StoreBatch: ...

    @abc.abstractmethod
    async def execute(self) -> list[Any]: ...


class CounterStore(abc.ABC):
    """Port: the key-value / sorted-set commands used by counters."""

    @abc.abstractmethod
    async def get(self, key: str) -> Any: ...

    @abc.abstractmethod
    async def mget(self, keys: Sequence[str]) -> list[Any]: ...

    @abc.abstractmethod
    async def incrby(self, key: str, amount: int, ttl: int | None = None) -> Any: ...

    @abc.abstractmethod
    async def zincrby(self, key: str, member: str, amount: int, ttl: int | None = None) -> Any: ...

    @abc.abstractmethod
    async def zscore(self, key: str, member: str) -> Any: ...

    @abc.abstractmethod
    async def zrange(self, key: str, start: int, stop: int, *, desc: bool = False) -> ScoredMembers: ...

    @abc.abstractmethod
    async def zremrangebyrank(self, key: str, start: int, stop: int) -> int: ...

    @abc.abstractmethod
    async def zrem(self, key: str, member: str) -> int: ...

    @abc.abstractmethod
    async def delete(self, key: str) -> int: ...

    @abc.abstractmethod
    async def ttl(self, key: str) -> int:
        """Remaining seconds to live; ``-1`` without expiry, ``-2`` when missing."""

    @abc.abstractmethod
    def batch(self) -> StoreBatch: ...

    async def close(self) -> None:
        """Release the underlying connection (no-op by default)."""


__all__ = ["CounterStore", "ScoredMembers", "StoreBatch"]
