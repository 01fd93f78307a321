"""Counters – Granularity enum and token resolution.

Each granularity can be named several ways so that the same level can be
passed around by humans and by other components alike::

    resolve_granularity("hour")   # long form
    resolve_granularity("h")      # short form
    resolve_granularity("4")      # numeric string
    resolve_granularity(4)        # integer

Unknown tokens resolve to :attr:`Granularity.NONE` instead of raising.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Union


class Granularity(IntEnum):
    """Time granularity levels, ordered from least to most specific."""

    NONE = 0
    YEAR = 1
    MONTH = 2
    DAY = 3
    HOUR = 4
    MINUTE = 5
    SECOND = 6

    # "total" reads better when asking for a grand total.
    TOTAL = 0

    @property
    def timestamp_width(self) -> int:
        """Number of ``YYYYMMDDHHMMSS`` characters that identify a bucket."""
        return 0 if self is Granularity.NONE else 2 * self.value + 2


GranularityToken = Union[Granularity, int, str, None]

_TOKENS: dict[str, Granularity] = {
    # long form
    "total": Granularity.NONE,
    "none": Granularity.NONE,
    "year": Granularity.YEAR,
    "month": Granularity.MONTH,
    "day": Granularity.DAY,
    "hour": Granularity.HOUR,
    "minute": Granularity.MINUTE,
    "second": Granularity.SECOND,
    # short form (case matters: M is month, m is minute)
    "T": Granularity.NONE,
    "N": Granularity.NONE,
    "Y": Granularity.YEAR,
    "M": Granularity.MONTH,
    "D": Granularity.DAY,
    "h": Granularity.HOUR,
    "m": Granularity.MINUTE,
    "s": Granularity.SECOND,
}
_TOKENS.update({str(level.value): level for level in Granularity})


def resolve_granularity(token: GranularityToken) -> Granularity:
    """Translate any supported granularity token into a :class:`Granularity`.

    Unknown or out-of-range tokens fall back to ``Granularity.NONE``.
    """
    if isinstance(token, Granularity):
        return token
    if isinstance(token, bool) or token is None:
        return Granularity.NONE
    if isinstance(token, int):
        return Granularity(token) if 0 <= token <= Granularity.SECOND else Granularity.NONE
    if isinstance(token, str):
        return _TOKENS.get(token, Granularity.NONE)
    return Granularity.NONE


__all__ = ["Granularity", "GranularityToken", "resolve_granularity"]
