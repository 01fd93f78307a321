"""Testing fakes – in-memory doubles for the store and clock ports."""
from redis_metrics.kernel.time import FrozenClock
from redis_metrics.testing.fakes.clock import FakeClock
from redis_metrics.testing.fakes.store import InMemoryBatch, InMemoryCounterStore

__all__ = ["FakeClock", "FrozenClock", "InMemoryBatch", "InMemoryCounterStore"]
