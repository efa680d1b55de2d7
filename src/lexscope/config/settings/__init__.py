"""Config settings – 12-factor env-based configuration."""
from lexscope.config.settings.base import Settings
from lexscope.config.settings.factory import SettingsFactory
from lexscope.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
