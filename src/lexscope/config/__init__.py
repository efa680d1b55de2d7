"""Config – 12-factor settings and loaders."""

from lexscope.config.settings import EnvSettingsLoader, Settings, SettingsFactory, SettingsLoader
from lexscope.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
