"""Redis adapter – RedisCounterStore.

Backed by ``redis.asyncio``. Store errors (``redis.exceptions.RedisError``)
propagate unchanged.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import redis.asyncio as aioredis

from redis_metrics.store.port import CounterStore, ScoredMembers, StoreBatch
from redis_metrics.store.scripts import INCRBY_EXPIRE, ZINCRBY_EXPIRE


def _queue_incrby(target: Any, key: str, amount: int, ttl: int | None) -> Any:
    if ttl is not None and ttl > 0:
        return target.eval(INCRBY_EXPIRE, 1, key, amount, ttl)
    return target.incrby(key, amount)


def _queue_zincrby(target: Any, key: str, member: str, amount: int, ttl: int | None) -> Any:
    if ttl is not None and ttl > 0:
        return target.eval(ZINCRBY_EXPIRE, 1, key, amount, member, ttl)
    return target.zincrby(key, amount, member)


class RedisBatch(StoreBatch):
    """``MULTI``/``EXEC`` pipeline wrapper."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._pipe = client.pipeline(transaction=True)

    def incrby(self, key: str, amount: int, ttl: int | None = None) -> RedisBatch:
        _queue_incrby(self._pipe, key, amount, ttl)
        return self

    def zincrby(self, key: str, member: str, amount: int, ttl: int | None = None) -> RedisBatch:
        _queue_zincrby(self._pipe, key, member, amount, ttl)
        return self

    def zscore(self, key: str, member: str) -> RedisBatch:
        self._pipe.zscore(key, member)
        return self

    def zrange(self, key: str, start: int, stop: int, *, desc: bool = False) -> RedisBatch:
        self._pipe.zrange(key, start, stop, desc=desc, withscores=True)
        return self

    async def execute(self) -> list[Any]:
        async with self._pipe as pipe:
            return list(await pipe.execute())


class RedisCounterStore(CounterStore):
    """Async Redis implementation of :class:`CounterStore`.

    ``owns_client`` controls whether :meth:`close` closes the client; stores
    wrapping a caller-supplied client leave it open.
    """

    def __init__(self, client: aioredis.Redis, *, owns_client: bool = False) -> None:
        self._client = client
        self._owns_client = owns_client

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> RedisCounterStore:
        kwargs.setdefault("decode_responses", True)
        return cls(aioredis.from_url(url, **kwargs), owns_client=True)

    @classmethod
    def from_host(cls, host: str, port: int, **kwargs: Any) -> RedisCounterStore:
        kwargs.setdefault("decode_responses", True)
        return cls(aioredis.Redis(host=host, port=port, **kwargs), owns_client=True)

    @property
    def client(self) -> aioredis.Redis:
        return self._client

    async def get(self, key: str) -> Any:
        return await self._client.get(key)

    async def mget(self, keys: Sequence[str]) -> list[Any]:
        if not keys:
            return []
        return list(await self._client.mget(list(keys)))

    async def incrby(self, key: str, amount: int, ttl: int | None = None) -> Any:
        return await _queue_incrby(self._client, key, amount, ttl)

    async def zincrby(self, key: str, member: str, amount: int, ttl: int | None = None) -> Any:
        return await _queue_zincrby(self._client, key, member, amount, ttl)

    async def zscore(self, key: str, member: str) -> Any:
        return await self._client.zscore(key, member)

    async def zrange(self, key: str, start: int, stop: int, *, desc: bool = False) -> ScoredMembers:
        return list(await self._client.zrange(key, start, stop, desc=desc, withscores=True))

    async def zremrangebyrank(self, key: str, start: int, stop: int) -> int:
        return int(await self._client.zremrangebyrank(key, start, stop))

    async def zrem(self, key: str, member: str) -> int:
        return int(await self._client.zrem(key, member))

    async def delete(self, key: str) -> int:
        return int(await self._client.delete(key))

    async def ttl(self, key: str) -> int:
        return int(await self._client.ttl(key))

    def batch(self) -> RedisBatch:
        return RedisBatch(self._client)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["RedisBatch", "RedisCounterStore"]
