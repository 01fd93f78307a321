"""Store port – the command surface counters need from Redis."""
from redis_metrics.store.port import CounterStore, StoreBatch
from redis_metrics.store.scripts import INCRBY_EXPIRE, ZINCRBY_EXPIRE

__all__ = ["INCRBY_EXPIRE", "ZINCRBY_EXPIRE", "CounterStore", "StoreBatch"]
