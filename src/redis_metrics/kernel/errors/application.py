"""Application-layer errors — facade setup and configuration failures."""

from __future__ import annotations

from redis_metrics.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Failure while assembling the metrics facade, e.g. bad settings."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
