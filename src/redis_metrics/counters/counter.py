"""Counters – TimestampedCounter.

A timestamped counter writes one Redis key per granularity level, from the
grand total down to its configured granularity. It can then report the total,
the count for the current bucket, or a breakdown over a date range. Passing
an *event object* (for example the page being viewed) turns every bucket into
a sorted set of per-object counts, which makes rankings available through
:meth:`TimestampedCounter.top` and :meth:`TimestampedCounter.top_range`.

Counters are normally obtained through
:meth:`redis_metrics.metrics.RedisMetrics.counter`.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from redis_metrics.counters.granularity import Granularity, GranularityToken, resolve_granularity
from redis_metrics.counters.keys import bucket_key, expiration_for, key_ttl, keys_for
from redis_metrics.counters.options import CounterOptions
from redis_metrics.counters.parsers import (
    RankEntry,
    parse_int,
    parse_int_list,
    parse_range,
    parse_range_total,
    parse_rank,
    parse_rank_range,
    parse_rank_total,
)
from redis_metrics.counters.ranges import DateLike, expand_range, iso_label, shift_years, truncate
from redis_metrics.kernel.errors import InvalidArgumentError
from redis_metrics.kernel.time import Clock, SystemClock
from redis_metrics.observability import get_logger
from redis_metrics.store import CounterStore

LOOKBACK_YEARS = 5
DIRECTIONS = ("asc", "desc")
RANKED_SUFFIX = ":z"


def _check_direction(direction: str, argument: str = "direction") -> None:
    if direction not in DIRECTIONS:
        raise InvalidArgumentError(
            f'The {argument} parameter is expected to be one between "asc" or "desc", got "{direction}".',
            argument=argument,
            value=direction,
        )


def _event_member(event_obj: Any) -> str | None:
    return None if event_obj is None else str(event_obj)


def _unique(keys: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(keys))


class TimestampedCounter:
    """Event counter bucketed by time.

    Args:
        store: Store the counter reads and writes.
        event_name: Name of the counted event; the base key is
            ``"<namespace>:<event_name>"``.
        options: Counter configuration, defaults to :class:`CounterOptions`.
        clock: Source of "now", defaults to the system clock.
    """

    def __init__(
        self,
        store: CounterStore,
        event_name: str,
        options: CounterOptions | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._options = options or CounterOptions()
        self._clock = clock or SystemClock()
        self._event_name = event_name
        self._key = f"{self._options.namespace}:{event_name}"
        self._log = get_logger(__name__, counter=self._key)

    def __repr__(self) -> str:
        return f"TimestampedCounter(key={self._key!r}, granularity={self.granularity.name.lower()})"

    @property
    def key(self) -> str:
        return self._key

    @property
    def event_name(self) -> str:
        return self._event_name

    @property
    def options(self) -> CounterOptions:
        return self._options

    @property
    def granularity(self) -> Granularity:
        return self._options.time_granularity

    @property
    def store(self) -> CounterStore:
        return self._store

    # -- key helpers -------------------------------------------------------

    def get_keys(self, instant: datetime | None = None, granularity: GranularityToken = None) -> list[str]:
        """Keys written for ``instant`` (default: now), least specific first.

        ``granularity`` overrides the counter's own level; ``None`` keeps it.
        """
        level = self.granularity if granularity is None else resolve_granularity(granularity)
        return keys_for(self._key, instant or self._clock.now(), level)

    def get_key_ttl(self, key: str) -> int:
        """Seconds ``key`` lives after creation, ``-1`` for never."""
        return key_ttl(key, self._key, self._options.expire_keys, self._options.expiration)

    def _current_key(self, granularity: Granularity) -> str | None:
        """Current key at ``granularity``, or ``None`` for a level this counter never writes."""
        if granularity > self.granularity:
            return None
        return self.get_keys()[granularity]

    def _range_granularities(self, granularity: GranularityToken) -> tuple[Granularity, Granularity]:
        """Split ``granularity`` into the report level and the level walked in the store.

        A total report is computed by walking the counter's own buckets and
        summing them, which is impossible for counters without buckets.
        """
        report = resolve_granularity(granularity)
        query = report
        if report is Granularity.NONE:
            query = self.granularity
            if query is Granularity.NONE:
                raise InvalidArgumentError(
                    "total granularity not supported for this counter",
                    argument="granularity",
                    value=granularity,
                )
        return report, query

    def _range_keys(
        self, start_date: DateLike | None, end_date: DateLike | None, granularity: Granularity
    ) -> tuple[list[str], list[str]]:
        instants = expand_range(start_date, end_date if end_date is not None else self._clock.now(), granularity)
        keys = [bucket_key(self._key, instant, granularity) for instant in instants]
        labels = [iso_label(instant) for instant in instants]
        return keys, labels

    # -- writes ------------------------------------------------------------

    async def incr(self, event_obj: Any = None) -> int | list[int]:
        """Increment the counter by one. See :meth:`increment`."""
        return await self.increment(1, event_obj)

    async def increment(self, amount: int = 1, event_obj: Any = None) -> int | list[int]:
        """Add ``amount`` to every bucket of the current instant.

        Returns the new value of the single key for counters without a
        granularity, otherwise the list of new values, least specific first.
        The TTL of a bucket is set by the write that creates it and is never
        refreshed.
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            raise InvalidArgumentError("amount must be a positive integer", argument="amount", value=amount)
        member = _event_member(event_obj)
        keys = self.get_keys()
        self._log.debug("counter.increment", amount=amount, event_obj=member, keys=len(keys))

        if len(keys) == 1:
            key = keys[0]
            if member is None:
                raw = await self._store.incrby(key, amount, self.get_key_ttl(key))
            else:
                raw = await self._store.zincrby(key + RANKED_SUFFIX, member, amount, self.get_key_ttl(key))
            return parse_int(raw)

        batch = self._store.batch()
        for key in keys:
            if member is None:
                batch.incrby(key, amount, self.get_key_ttl(key))
            else:
                batch.zincrby(key + RANKED_SUFFIX, member, amount, self.get_key_ttl(key))
        return parse_int_list(await batch.execute())

    # -- counts ------------------------------------------------------------

    async def count(self, granularity: GranularityToken = "total", event_obj: Any = None) -> int:
        """Current value of the bucket at ``granularity`` (default: the grand total).

        A bucket level finer than the counter's own is never written, so it
        reads as ``0`` without a store round-trip.
        """
        level = resolve_granularity(granularity)
        member = _event_member(event_obj)
        key = self._current_key(level)
        if key is None:
            return 0
        if member is None:
            return parse_int(await self._store.get(key))
        return parse_int(await self._store.zscore(key + RANKED_SUFFIX, member))

    async def count_range(
        self,
        granularity: GranularityToken,
        start_date: DateLike | None,
        end_date: DateLike | None = None,
        event_obj: Any = None,
    ) -> int | dict[str, int]:
        """Counts per bucket between ``start_date`` and ``end_date`` (default: now), inclusive.

        Returns ``{"2014-01-01T00:00:00Z": 1, ...}``, or a single summed
        count when ``granularity`` is ``"total"``.
        """
        report, query = self._range_granularities(granularity)
        member = _event_member(event_obj)
        keys, labels = self._range_keys(start_date, end_date, query)
        self._log.debug("counter.count_range", granularity=query.name.lower(), buckets=len(keys))

        if member is None:
            raws = await self._store.mget(keys)
        else:
            batch = self._store.batch()
            for key in keys:
                batch.zscore(key + RANKED_SUFFIX, member)
            raws = await batch.execute()

        if report is Granularity.NONE:
            return parse_range_total(raws)
        return parse_range(labels, raws)

    # -- rankings ----------------------------------------------------------

    async def top(
        self,
        granularity: GranularityToken = "total",
        direction: str = "desc",
        starting_at: int = 0,
        limit: int = -1,
    ) -> list[RankEntry]:
        """Event objects of the current bucket at ``granularity``, ranked by count.

        ``starting_at`` and ``limit`` are the start and stop ranks passed to
        Redis (``limit=-1`` reads to the end). Levels finer than the counter's
        own rank nothing.
        """
        _check_direction(direction)
        key = self._current_key(resolve_granularity(granularity))
        if key is None:
            return []
        raw = await self._store.zrange(key + RANKED_SUFFIX, starting_at, limit, desc=direction == "desc")
        return parse_rank(raw)

    async def top_range(
        self,
        start_date: DateLike | None,
        end_date: DateLike | None = None,
        granularity: GranularityToken = "total",
        direction: str = "desc",
        starting_at: int = 0,
        limit: int = -1,
    ) -> list[RankEntry] | dict[str, list[RankEntry]]:
        """Rankings per bucket between ``start_date`` and ``end_date``.

        With ``granularity="total"`` the buckets are merged: every bucket is
        read in full, scores are summed per event object, and only then are
        ``starting_at`` (an offset) and ``limit`` (a count, ``<= 0`` for all)
        applied.
        """
        if start_date is None:
            raise InvalidArgumentError("The start_date parameter is required.", argument="start_date", value=None)
        _check_direction(direction)
        report, query = self._range_granularities(granularity)
        keys, labels = self._range_keys(start_date, end_date, query)
        self._log.debug("counter.top_range", granularity=query.name.lower(), buckets=len(keys))

        batch = self._store.batch()
        if report is Granularity.NONE:
            for key in keys:
                batch.zrange(key + RANKED_SUFFIX, 0, -1)
            return parse_rank_total(await batch.execute(), direction, starting_at, limit)

        for key in keys:
            batch.zrange(key + RANKED_SUFFIX, starting_at, limit, desc=direction == "desc")
        return parse_rank_range(labels, await batch.execute())

    # -- maintenance -------------------------------------------------------

    async def trim_events(self, direction: str = "desc", limit: int = 1000) -> int:
        """Keep only the ``limit`` best event objects of every bucket; return how many were removed.

        ``direction="desc"`` keeps the highest scores, ``"asc"`` the lowest.
        Buckets finer than a day are left alone, and only the last five years
        are visited.

        Trimming often can freeze a ranking: low-ranked event objects are
        removed before they get a chance to climb. Use it sparingly to reclaim
        memory from counters with very many event objects.
        """
        _check_direction(direction, "direction")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise InvalidArgumentError("limit must be a non-negative integer", argument="limit", value=limit)
        start, stop = (limit, -1) if direction == "asc" else (0, -(limit + 1))

        if self.granularity is Granularity.NONE:
            removed = await self._store.zremrangebyrank(self._key + RANKED_SUFFIX, start, stop)
            self._log.info("counter.trim_events", removed=removed, keys=1)
            return removed

        now = self._clock.now()
        first_day = truncate(shift_years(now, -LOOKBACK_YEARS), Granularity.YEAR)
        keys = _unique(
            key
            for instant in expand_range(first_day, now, Granularity.DAY)
            for key in keys_for(self._key, instant, min(self.granularity, Granularity.DAY))
        )

        removed = 0
        for index, key in enumerate(keys):
            try:
                removed += await self._store.zremrangebyrank(key + RANKED_SUFFIX, start, stop)
            except Exception:
                self._log.error("counter.trim_events.failed", key=key, completed=index, total=len(keys), removed=removed)
                raise
        self._log.info("counter.trim_events", removed=removed, keys=len(keys))
        return removed

    def _zero_keys(self) -> list[str]:
        now = self._clock.now()
        lookback = shift_years(now, -LOOKBACK_YEARS)
        keys: list[str] = []
        for level in Granularity:
            if level > self.granularity:
                break
            ttl = expiration_for(level, self._options.expiration)
            start = max(now - timedelta(seconds=ttl), lookback) if ttl > 0 else lookback
            for instant in expand_range(start, now, level):
                keys.extend(keys_for(self._key, instant, level))
        return _unique(keys)

    async def zero(self, event_obj: Any = None) -> None:
        """Reset every bucket of the last five years (or of each level's expiration window, if shorter).

        With ``event_obj`` only that event object is removed from the rankings.
        """
        member = _event_member(event_obj)
        keys = self._zero_keys()
        for index, key in enumerate(keys):
            try:
                if member is None:
                    await self._store.delete(key)
                else:
                    await self._store.zrem(key + RANKED_SUFFIX, member)
            except Exception:
                self._log.error("counter.zero.failed", key=key, completed=index, total=len(keys), event_obj=member)
                raise
        self._log.info("counter.zero", keys=len(keys), event_obj=member)


__all__ = ["DIRECTIONS", "LOOKBACK_YEARS", "TimestampedCounter"]
