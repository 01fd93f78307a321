"""
redis_metrics – time-bucketed event counters on top of Redis.

Import path convention::

    from redis_metrics import RedisMetrics
    from redis_metrics.counters import Granularity, TimestampedCounter
    from redis_metrics.kernel.errors import InvalidArgumentError
"""

from redis_metrics.counters import CounterOptions, Granularity, TimestampedCounter
from redis_metrics.metrics import RedisMetrics

__version__ = "0.1.0"
__all__ = ["CounterOptions", "Granularity", "RedisMetrics", "TimestampedCounter", "__version__"]
