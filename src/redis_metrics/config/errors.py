"""Config errors – failures while loading or validating ``REDIS_METRICS_*`` settings.

Every error names the environment variable involved, so the message says what
to change in the deployment rather than which dataclass field failed.
"""
from __future__ import annotations

from collections.abc import Iterable

from redis_metrics.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or did not validate."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An environment variable backing a field without default is unset."""

    default_code = "missing_required_setting"

    def __init__(self, env_var: str) -> None:
        super().__init__(f"{env_var} must be set", detail={"env_var": env_var})
        self.env_var = env_var


class InvalidSettingValueError(ConfigError):
    """An environment variable holds a value the facade cannot use.

    ``allowed`` lists the accepted values (or prefixes, for URLs) when the
    setting has a closed set of them.
    """

    default_code = "invalid_setting_value"

    def __init__(self, env_var: str, value: object, reason: str, *, allowed: Iterable[str] = ()) -> None:
        self.env_var = env_var
        self.value = value
        self.reason = reason
        self.allowed = tuple(allowed)
        message = f"{env_var}={value!r} is invalid: {reason}"
        detail: dict[str, object] = {"env_var": env_var, "value": value, "reason": reason}
        if self.allowed:
            message += f" (allowed: {', '.join(self.allowed)})"
            detail["allowed"] = list(self.allowed)
        super().__init__(message, detail=detail)


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
