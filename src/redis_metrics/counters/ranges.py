"""Counters – date coercion and bucket range expansion."""
from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import UTC, date, datetime, timedelta
from typing import Any, Union

from redis_metrics.counters.granularity import Granularity
from redis_metrics.kernel.errors import InvalidArgumentError

DateLike = Union[datetime, date, str, int, float, Mapping[str, int]]

_FIELDS = ("year", "month", "day", "hour", "minute", "second")
_FIELD_DEFAULTS = {"year": 1970, "month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0}

_FIXED_STEPS: dict[Granularity, timedelta] = {
    Granularity.DAY: timedelta(days=1),
    Granularity.HOUR: timedelta(hours=1),
    Granularity.MINUTE: timedelta(minutes=1),
    Granularity.SECOND: timedelta(seconds=1),
}

# Smallest unit a datetime can represent.
_EPSILON = timedelta(microseconds=1)

# Reduced-precision ISO-8601 forms that fromisoformat rejects.
_REDUCED_ISO_FORMATS = ("%Y", "%Y-%m")


def _parse_iso(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _REDUCED_ISO_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def to_utc_datetime(value: Any, *, argument: str = "date") -> datetime:
    """Coerce a date-like value into an aware UTC ``datetime``.

    Accepted inputs:

    * ``datetime`` – naive values are taken as UTC.
    * ``date`` – midnight UTC of that day.
    * ``str`` – ISO-8601, a trailing ``Z`` is allowed, as are ``"2014"`` and ``"2014-03"``.
    * ``int`` / ``float`` – milliseconds since the Unix epoch.
    * mapping – calendar fields, e.g. ``{"year": 2014}`` or ``{"year": 2014, "month": 3}``.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Cannot interpret {value!r} as a date", argument=argument, value=value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidArgumentError(f"Cannot interpret {value!r} as a date", argument=argument, value=value)
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidArgumentError(
                f"{value!r} milliseconds is outside the supported date range", argument=argument, value=value, cause=exc
            ) from exc
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = _parse_iso(text)
        if parsed is None:
            raise InvalidArgumentError(f"Cannot parse {value!r} as an ISO-8601 date", argument=argument, value=value)
        return to_utc_datetime(parsed, argument=argument)
    if isinstance(value, Mapping):
        unknown = set(value) - set(_FIELDS)
        if unknown:
            raise InvalidArgumentError(
                f"Unknown date fields: {', '.join(sorted(unknown))}", argument=argument, value=value
            )
        fields = {name: int(value.get(name, _FIELD_DEFAULTS[name])) for name in _FIELDS}
        try:
            return datetime(tzinfo=UTC, **fields)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc), argument=argument, value=value, cause=exc) from exc
    raise InvalidArgumentError(f"Cannot interpret {value!r} as a date", argument=argument, value=value)


def truncate(instant: datetime, granularity: Granularity) -> datetime:
    """Zero every field of ``instant`` that is finer than ``granularity``."""
    if granularity is Granularity.NONE:
        return instant
    instant = instant.replace(microsecond=0)
    if granularity < Granularity.SECOND:
        instant = instant.replace(second=0)
    if granularity < Granularity.MINUTE:
        instant = instant.replace(minute=0)
    if granularity < Granularity.HOUR:
        instant = instant.replace(hour=0)
    if granularity < Granularity.DAY:
        instant = instant.replace(day=1)
    if granularity < Granularity.MONTH:
        instant = instant.replace(month=1)
    return instant


def step(instant: datetime, granularity: Granularity) -> datetime:
    """Advance ``instant`` by one natural unit of ``granularity``.

    Month and year steps expect an instant already truncated to that level.
    """
    if granularity is Granularity.YEAR:
        return instant.replace(year=instant.year + 1)
    if granularity is Granularity.MONTH:
        if instant.month == 12:
            return instant.replace(year=instant.year + 1, month=1)
        return instant.replace(month=instant.month + 1)
    try:
        return instant + _FIXED_STEPS[granularity]
    except KeyError:
        raise InvalidArgumentError(
            "Cannot step through a range without a time granularity",
            argument="granularity",
            value=granularity,
        ) from None


def shift_years(instant: datetime, years: int) -> datetime:
    """Move ``instant`` by whole calendar years (Feb 29 becomes Feb 28)."""
    try:
        return instant.replace(year=instant.year + years)
    except ValueError:
        return instant.replace(year=instant.year + years, day=28)


def expand_range(start: DateLike | None, end: DateLike, granularity: Granularity) -> list[datetime]:
    """Return one representative instant per bucket in ``[start, end]``.

    Both ends are truncated to ``granularity`` first, so the instants line up
    with the buckets counters write to. A ``NONE`` granularity has a single
    bucket and yields only the end instant.
    """
    if start is None:
        raise InvalidArgumentError("The start_date parameter is required.", argument="start_date", value=None)
    start_dt = truncate(to_utc_datetime(start, argument="start_date"), granularity)
    end_dt = truncate(to_utc_datetime(end, argument="end_date"), granularity)

    if granularity is Granularity.NONE:
        return [end_dt]

    bound = end_dt + _EPSILON
    instants: list[datetime] = []
    current = start_dt
    while current < bound:
        instants.append(current)
        current = step(current, granularity)
    return instants


def iso_label(instant: datetime) -> str:
    """Label used for buckets in range results, e.g. ``2014-01-01T00:00:00Z``."""
    return instant.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


__all__ = [
    "DateLike",
    "expand_range",
    "iso_label",
    "shift_years",
    "step",
    "to_utc_datetime",
    "truncate",
]
