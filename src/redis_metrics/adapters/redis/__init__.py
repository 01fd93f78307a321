"""Redis adapter – RedisCounterStore, RedisBatch."""
from redis_metrics.adapters.redis.store import RedisBatch, RedisCounterStore

__all__ = ["RedisBatch", "RedisCounterStore"]
