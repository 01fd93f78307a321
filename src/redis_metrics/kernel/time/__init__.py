"""Kernel time – Clock port + implementations."""
from redis_metrics.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
