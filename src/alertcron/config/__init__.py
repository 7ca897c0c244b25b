"""Config – 12-factor settings for a Cron host."""

from alertcron.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from alertcron.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from alertcron.config.cron import CronSettings

__all__ = [
    "ConfigError",
    "CronSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
