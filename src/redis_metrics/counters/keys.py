"""Counters – storage key derivation and TTL resolution.

A counter named ``c:pageview`` with ``day`` granularity writes, for
2015-01-02T03:04:05Z, to::

    c:pageview
    c:pageview:2015
    c:pageview:201501
    c:pageview:20150102

The length of the timestamp suffix identifies the granularity of a key, which
is how :func:`key_ttl` finds the expiration that applies to it.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime

from redis_metrics.counters.granularity import Granularity

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
NO_EXPIRY = -1

_DAY = 24 * 60 * 60

_WIDTH_TO_GRANULARITY: dict[int, Granularity] = {
    level.timestamp_width: level for level in Granularity if level is not Granularity.NONE
}


def default_expiration_table() -> dict[Granularity, int]:
    """Return a fresh copy of the built-in expiration table (seconds).

    The values keep fewer than ~750 live keys per granularity level for one
    counter, e.g. second buckets live 10 minutes, so at most 600 exist.
    """
    return {
        Granularity.NONE: NO_EXPIRY,
        Granularity.YEAR: NO_EXPIRY,
        Granularity.MONTH: 10 * 365 * _DAY,  # 120 keys
        Granularity.DAY: 2 * 365 * _DAY,  # 730 keys
        Granularity.HOUR: 31 * _DAY,  # 744 keys
        Granularity.MINUTE: 12 * 60 * 60,  # 720 keys
        Granularity.SECOND: 10 * 60,  # 600 keys
    }


def format_timestamp(instant: datetime) -> str:
    """Format ``instant`` as a 14-digit UTC ``YYYYMMDDHHMMSS`` string."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def bucket_key(base_key: str, instant: datetime, granularity: Granularity) -> str:
    """Return the single key addressing ``instant``'s bucket at ``granularity``."""
    if granularity is Granularity.NONE:
        return base_key
    return f"{base_key}:{format_timestamp(instant)[: granularity.timestamp_width]}"


def keys_for(base_key: str, instant: datetime, granularity: Granularity) -> list[str]:
    """Return every key written for ``instant``, least specific first.

    ``result[0]`` is the grand-total key and ``result[granularity]`` the most
    specific bucket.
    """
    keys = [base_key]
    if granularity is Granularity.NONE:
        return keys
    stamp = format_timestamp(instant)
    for level in range(Granularity.YEAR, granularity + 1):
        keys.append(f"{base_key}:{stamp[: Granularity(level).timestamp_width]}")
    return keys


def granularity_of_key(key: str, base_key: str) -> Granularity:
    """Recover the granularity of ``key`` from the length of its timestamp."""
    suffix = key[len(base_key):] if key.startswith(base_key) else key
    suffix = suffix[1:] if suffix.startswith(":") else suffix
    return _WIDTH_TO_GRANULARITY.get(len(suffix), Granularity.NONE)


def expiration_for(
    granularity: Granularity,
    expiration: Mapping[Granularity, int] | None = None,
) -> int:
    """Look up ``granularity`` in ``expiration``, then in the default table."""
    if expiration is not None and granularity in expiration:
        return expiration[granularity]
    return default_expiration_table().get(granularity, NO_EXPIRY)


def key_ttl(
    key: str,
    base_key: str,
    expire_keys: bool,
    expiration: Mapping[Granularity, int] | None = None,
) -> int:
    """Seconds ``key`` should live, or ``NO_EXPIRY``."""
    if not expire_keys:
        return NO_EXPIRY
    return expiration_for(granularity_of_key(key, base_key), expiration)


__all__ = [
    "NO_EXPIRY",
    "TIMESTAMP_FORMAT",
    "bucket_key",
    "default_expiration_table",
    "expiration_for",
    "format_timestamp",
    "granularity_of_key",
    "key_ttl",
    "keys_for",
]
