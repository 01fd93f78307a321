"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── ValidationError
    │       └── InvalidArgumentError
    ├── ApplicationError         (application.py)
    └── InfrastructureError      (infrastructure.py)
        └── StoreError

Configuration errors live in :mod:`redis_metrics.config.errors` and extend
``ApplicationError``.
"""

from redis_metrics.kernel.errors.application import ApplicationError
from redis_metrics.kernel.errors.base import BaseError
from redis_metrics.kernel.errors.domain import DomainError, InvalidArgumentError, ValidationError
from redis_metrics.kernel.errors.infrastructure import InfrastructureError, StoreError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "InvalidArgumentError",
    "StoreError",
    "ValidationError",
]
