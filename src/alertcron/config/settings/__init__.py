"""Config settings – 12-factor env-based configuration."""
from alertcron.config.settings.base import Settings
from alertcron.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from alertcron.config.settings.factory import SettingsFactory

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
