"""Counters – granularities, key encoding, range expansion and the counter itself."""
from redis_metrics.counters.counter import TimestampedCounter
from redis_metrics.counters.granularity import Granularity, GranularityToken, resolve_granularity
from redis_metrics.counters.keys import default_expiration_table, key_ttl, keys_for
from redis_metrics.counters.options import CounterOptions
from redis_metrics.counters.ranges import expand_range

__all__ = [
    "CounterOptions",
    "Granularity",
    "GranularityToken",
    "TimestampedCounter",
    "default_expiration_table",
    "expand_range",
    "key_ttl",
    "keys_for",
    "resolve_granularity",
]
