"""RedisMetrics – owns the store connection and hands out counters.

Usage::

    metrics = RedisMetrics.from_url("redis://localhost:6379/0")
    pageviews = metrics.counter("pageview", time_granularity="hour")
    await pageviews.incr("/index.html")
    await pageviews.top("day", limit=9)
    await metrics.close()
"""
from __future__ import annotations

from typing import Any

import redis.asyncio as aioredis

from redis_metrics.adapters.redis import RedisCounterStore
from redis_metrics.config import MetricsSettings
from redis_metrics.counters.counter import TimestampedCounter
from redis_metrics.counters.options import CounterOptions
from redis_metrics.kernel.time import Clock, SystemClock
from redis_metrics.observability import get_logger
from redis_metrics.store import CounterStore

_log = get_logger(__name__)


class RedisMetrics:
    """Factory for :class:`TimestampedCounter` objects sharing one store.

    Args:
        store: The store every counter uses. Defaults to a Redis client on
            ``redis://localhost:6379/0``.
        counter_options: Options applied to counters created without
            explicit options.
        clock: Source of "now" handed to every counter.
    """

    def __init__(
        self,
        store: CounterStore | None = None,
        *,
        counter_options: CounterOptions | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store if store is not None else RedisCounterStore.from_url(MetricsSettings().url)
        self._counter_options = counter_options or CounterOptions()
        self._clock = clock or SystemClock()

    @classmethod
    def from_client(cls, client: aioredis.Redis, **kwargs: Any) -> RedisMetrics:
        """Wrap an existing client; :meth:`close` leaves it open."""
        return cls(RedisCounterStore(client), **kwargs)

    @classmethod
    def from_url(cls, url: str, *, redis_options: dict[str, Any] | None = None, **kwargs: Any) -> RedisMetrics:
        return cls(RedisCounterStore.from_url(url, **(redis_options or {})), **kwargs)

    @classmethod
    def from_host(
        cls, host: str, port: int = 6379, *, redis_options: dict[str, Any] | None = None, **kwargs: Any
    ) -> RedisMetrics:
        return cls(RedisCounterStore.from_host(host, port, **(redis_options or {})), **kwargs)

    @classmethod
    def from_settings(cls, settings: MetricsSettings, **kwargs: Any) -> RedisMetrics:
        """Build the facade from :class:`MetricsSettings` (see ``EnvSettingsLoader``)."""
        kwargs.setdefault("counter_options", settings.counter_options())
        store = RedisCounterStore.from_url(settings.url, decode_responses=settings.decode_responses)
        _log.debug("metrics.from_settings", namespace=settings.namespace, granularity=settings.time_granularity)
        return cls(store, **kwargs)

    @property
    def store(self) -> CounterStore:
        return self._store

    @property
    def counter_options(self) -> CounterOptions:
        return self._counter_options

    def counter(self, event_name: str, options: CounterOptions | None = None, **overrides: Any) -> TimestampedCounter:
        """Return a counter for ``event_name``.

        ``options`` replaces the facade defaults entirely; keyword
        ``overrides`` (``time_granularity="hour"``, ``expire_keys=False``, ...)
        are applied on top of whichever options are in effect.
        """
        effective = options or self._counter_options
        if overrides:
            effective = effective.replace(**overrides)
        return TimestampedCounter(self._store, event_name, effective, clock=self._clock)

    async def close(self) -> None:
        await self._store.close()

    async def __aenter__(self) -> RedisMetrics:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()


__all__ = ["RedisMetrics"]
