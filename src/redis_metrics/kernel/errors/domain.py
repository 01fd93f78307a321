"""Domain errors — rejected arguments and counter rule violations."""

from __future__ import annotations

from typing import Any

from redis_metrics.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a counter rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class InvalidArgumentError(ValidationError):
    """A counter operation was called with an unusable argument.

    Raised before any store command is issued.
    """

    default_code = "invalid_argument"

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        errors = kwargs.pop("errors", None)
        if errors is None and argument is not None:
            errors = [{"field": argument, "value": repr(value), "message": message}]
        super().__init__(message, errors=errors, **kwargs)
        self.argument = argument
        self.value = value


__all__ = ["DomainError", "InvalidArgumentError", "ValidationError"]
