"""Config errors raised while loading or validating settings."""
from __future__ import annotations

from lexscope.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or failed validation."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} must be set", detail={"setting": setting})
        self.setting = setting


class InvalidSettingValueError(ConfigError):
    """A value is present but rejected (wrong type, out of range)."""

    default_code = "invalid_setting_value"

    def __init__(self, setting: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting}={value!r} rejected: {reason}",
            detail={"setting": setting, "reason": reason},
        )
        self.setting = setting
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
