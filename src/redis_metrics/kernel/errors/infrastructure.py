"""Infrastructure errors — failures reported by the counter store."""

from __future__ import annotations

from typing import Any

from redis_metrics.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a counter rule violation."""

    default_code = "infrastructure_error"


class StoreError(InfrastructureError):
    """A store command failed.

    The Redis adapter lets ``redis.exceptions.RedisError`` through untouched;
    this type is raised by stores that have no native error of their own,
    such as the in-memory fake.
    """

    default_code = "store_error"

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        key: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.command = command
        self.key = key
        if command is not None:
            self.detail.setdefault("command", command)
        if key is not None:
            self.detail.setdefault("key", key)


__all__ = ["InfrastructureError", "StoreError"]
