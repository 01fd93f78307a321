"""Counters – CounterOptions, the immutable configuration of a counter."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from redis_metrics.counters.granularity import Granularity, GranularityToken, resolve_granularity
from redis_metrics.counters.keys import default_expiration_table
from redis_metrics.kernel.errors import InvalidArgumentError

DEFAULT_NAMESPACE = "c"


def normalize_expiration(expiration: Mapping[Any, int] | None) -> Mapping[Granularity, int]:
    """Build a read-only expiration table keyed by :class:`Granularity`.

    Keys may be any granularity token (``"day"``, ``"D"``, ``3`` ...). The
    caller's mapping is never modified. ``None`` yields the default table.
    """
    if expiration is None:
        return MappingProxyType(default_expiration_table())
    table: dict[Granularity, int] = {}
    for token, seconds in expiration.items():
        table[resolve_granularity(token)] = int(seconds)
    return MappingProxyType(table)


@dataclasses.dataclass(frozen=True)
class CounterOptions:
    """Configuration shared by every operation of one counter.

    ``expiration`` only needs the levels that differ from the defaults; TTL
    lookups fall back to :func:`~redis_metrics.counters.keys.default_expiration_table`.
    """

    namespace: str = DEFAULT_NAMESPACE
    time_granularity: Granularity = Granularity.NONE
    expire_keys: bool = True
    expiration: Mapping[Granularity, int] = dataclasses.field(
        default_factory=lambda: MappingProxyType(default_expiration_table())
    )

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, str) or not self.namespace:
            raise InvalidArgumentError("namespace must be a non-empty string", argument="namespace", value=self.namespace)
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "time_granularity", resolve_granularity(self.time_granularity))
        if not isinstance(self.expiration, MappingProxyType) or any(
            not isinstance(k, Granularity) for k in self.expiration
        ):
            object.__setattr__(self, "expiration", normalize_expiration(self.expiration))

    @classmethod
    def build(
        cls,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        time_granularity: GranularityToken = Granularity.NONE,
        expire_keys: bool = True,
        expiration: Mapping[Any, int] | None = None,
    ) -> CounterOptions:
        """Build options from loosely typed values (granularity tokens, aliases)."""
        return cls(
            namespace=namespace,
            time_granularity=resolve_granularity(time_granularity),
            expire_keys=bool(expire_keys),
            expiration=normalize_expiration(expiration),
        )

    def replace(self, **changes: Any) -> CounterOptions:
        """Return a copy with ``changes`` applied (tokens are normalised)."""
        current = {
            "namespace": self.namespace,
            "time_granularity": self.time_granularity,
            "expire_keys": self.expire_keys,
            "expiration": dict(self.expiration),
        }
        current.update(changes)
        return CounterOptions.build(**current)


__all__ = ["DEFAULT_NAMESPACE", "CounterOptions", "normalize_expiration"]
