"""Config settings – MetricsSettings and its environment loader.

Every field can be set through ``REDIS_METRICS_<FIELD>``::

    REDIS_METRICS_URL=redis://cache:6379/2
    REDIS_METRICS_NAMESPACE=stats
    REDIS_METRICS_TIME_GRANULARITY=hour
    REDIS_METRICS_EXPIRE_KEYS=false
"""
from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from redis_metrics.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from redis_metrics.counters.granularity import Granularity, resolve_granularity
from redis_metrics.counters.options import CounterOptions

T = TypeVar("T", bound="Settings")

_URL_SCHEMES = ("redis://", "rediss://", "unix://")
_GRANULARITY_NAMES = {level.name.lower() for level in Granularity} | {"total"}
_GRANULARITY_TOKENS = _GRANULARITY_NAMES | {str(level.value) for level in Granularity}


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    @classmethod
    def env_var(cls, field_name: str) -> str:
        """Environment variable backing ``field_name``, e.g. ``REDIS_METRICS_URL``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class MetricsSettings(Settings):
    """Connection and default counter settings for :class:`RedisMetrics`."""

    _prefix: ClassVar[str] = "REDIS_METRICS"

    url: str = "redis://localhost:6379/0"
    namespace: str = "c"
    time_granularity: str = "none"
    expire_keys: bool = True
    decode_responses: bool = True

    def _validate(self) -> None:
        if not self.url.startswith(_URL_SCHEMES):
            raise InvalidSettingValueError(
                self.env_var("url"), self.url, "unsupported scheme", allowed=_URL_SCHEMES
            )
        if not self.namespace or ":" in self.namespace:
            raise InvalidSettingValueError(
                self.env_var("namespace"), self.namespace, "must be non-empty and contain no ':'"
            )
        # Counters silently treat unknown tokens as "none"; settings are stricter.
        if str(self.time_granularity) not in _GRANULARITY_TOKENS:
            raise InvalidSettingValueError(
                self.env_var("time_granularity"),
                self.time_granularity,
                "unknown granularity",
                allowed=sorted(_GRANULARITY_NAMES),
            )

    def counter_options(self) -> CounterOptions:
        """Default counter options described by these settings."""
        return CounterOptions.build(
            namespace=self.namespace,
            time_granularity=resolve_granularity(self.time_granularity),
            expire_keys=self.expire_keys,
        )


class EnvSettingsLoader:
    """Load settings from OS environment variables (or any mapping)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = settings_class.env_var(field.name)
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            kwargs[field.name] = self._coerce(env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, env_key: str, value: str, type_hint: Any) -> Any:
        if type_hint is bool or type_hint == "bool":
            lowered = value.strip().lower()
            if lowered in ("1", "true", "yes", "on"):
                return True
            if lowered in ("0", "false", "no", "off", ""):
                return False
            raise InvalidSettingValueError(env_key, value, "expected a boolean")
        if type_hint is int or type_hint == "int":
            try:
                return int(value)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, value, "expected an integer") from exc
        return value


__all__ = ["EnvSettingsLoader", "MetricsSettings", "Settings"]
