"""Config – 12-factor env-based settings for the metrics facade."""
from redis_metrics.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from redis_metrics.config.settings import EnvSettingsLoader, MetricsSettings, Settings

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MetricsSettings",
    "MissingRequiredSettingError",
    "Settings",
]
