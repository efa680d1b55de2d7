"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Mapping, TypeVar

from lexscope.config.settings.base import Settings, is_required
from lexscope.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class SettingsLoader(abc.ABC):
    """Port: produce a settings instance from one configuration source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read ``<PREFIX>_<FIELD>`` keys from the process environment.

    With prefix ``LEXSCOPE_POLICY`` the field ``context_cache_ttl_seconds``
    comes from ``LEXSCOPE_POLICY_CONTEXT_CACHE_TTL_SECONDS``. ``list`` and
    ``tuple`` fields are comma-separated; ``bool`` accepts 1/true/yes/on.
    Pass *environ* to read from a mapping instead of ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = settings_class._prefix.upper()
        values: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)
            if raw is None:
                if is_required(field):
                    raise MissingRequiredSettingError(env_key)
                continue
            try:
                values[field.name] = _coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__} from environment: {exc}", cause=exc) from exc


def _coerce(raw: str, annotation: Any) -> Any:
    # under ``from __future__ import annotations`` field types are strings
    hint = annotation if isinstance(annotation, str) else getattr(annotation, "__name__", str(annotation))
    if hint == "bool":
        return raw.strip().lower() in _TRUTHY
    if hint == "int":
        return int(raw)
    if hint == "float":
        return float(raw)
    if hint.startswith(("list", "tuple")):
        items = [item.strip() for item in raw.split(",") if item.strip()]
        return tuple(items) if hint.startswith("tuple") else items
    return raw


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
