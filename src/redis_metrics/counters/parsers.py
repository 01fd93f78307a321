"""Counters – parsers turning raw store replies into counter results.

Rank results are lists of single-key dicts, best first for ``desc``::

    [{"foo": 39}, {"bar": 13}]
"""
from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from typing import Any

RankEntry = dict[str, int]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(raw: Any) -> int:
    """Coerce a raw reply to an ``int``; anything unparsable becomes ``0``."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else 0
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        return int(match.group(1)) if match else 0
    return 0


def parse_int_list(raws: Iterable[Any]) -> list[int]:
    return [parse_int(raw) for raw in raws]


def parse_range(labels: Sequence[str], raws: Sequence[Any]) -> dict[str, int]:
    """Zip bucket labels with their counts."""
    return dict(zip(labels, parse_int_list(raws)))


def parse_range_total(raws: Iterable[Any]) -> int:
    """Sum the counts of every bucket in a range."""
    return sum(parse_int_list(raws))


def _member(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray)):
        return raw.decode("utf-8", errors="replace")
    return str(raw)


def _pairs(raw: Sequence[Any] | None) -> list[tuple[Any, Any]]:
    """Accept redis-py ``[(member, score)]`` replies or flat ``[member, score, ...]`` ones."""
    if not raw:
        return []
    if isinstance(raw[0], (tuple, list)):
        return [(item[0], item[1]) for item in raw]
    return list(zip(raw[::2], raw[1::2]))


def parse_rank(raw: Sequence[Any] | None) -> list[RankEntry]:
    """Turn a ``WITHSCORES`` range reply into rank entries, keeping store order."""
    return [{_member(member): parse_int(score)} for member, score in _pairs(raw)]


def parse_rank_range(labels: Sequence[str], raws: Sequence[Sequence[Any] | None]) -> dict[str, list[RankEntry]]:
    """Zip bucket labels with the rank list of each bucket."""
    return dict(zip(labels, (parse_rank(raw) for raw in raws)))


def parse_rank_total(
    raws: Iterable[Sequence[Any] | None],
    direction: str = "desc",
    starting_at: int = 0,
    limit: int = -1,
) -> list[RankEntry]:
    """Merge per-bucket rank replies into one ranking.

    Scores of the same member are summed across buckets *before* sorting and
    slicing. Members with equal totals keep the order they were first seen in.
    ``limit <= 0`` means no limit.
    """
    totals: dict[str, int] = {}
    for raw in raws:
        for member, score in _pairs(raw):
            name = _member(member)
            totals[name] = totals.get(name, 0) + parse_int(score)

    if direction == "asc":
        ranked = sorted(totals.items(), key=lambda item: item[1])
    else:
        ranked = sorted(totals.items(), key=lambda item: -item[1])

    ranked = ranked[max(starting_at, 0):]
    if limit > 0:
        ranked = ranked[:limit]
    return [{name: score} for name, score in ranked]


__all__ = [
    "RankEntry",
    "parse_int",
    "parse_int_list",
    "parse_range",
    "parse_range_total",
    "parse_rank",
    "parse_rank_range",
    "parse_rank_total",
]
