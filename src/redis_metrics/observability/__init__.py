"""Observability – structured logging helpers."""
from redis_metrics.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
