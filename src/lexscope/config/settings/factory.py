"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Sequence, TypeVar

from lexscope.config.settings.base import Settings, is_required
from lexscope.config.settings.loaders import SettingsLoader
from lexscope.config.validation.errors import ConfigError, MissingRequiredSettingError
from lexscope.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

_log = get_logger(__name__)


class SettingsFactory:
    """Build a settings dataclass from layered sources.

    Precedence, lowest first: field defaults, each loader in order, then
    *overrides*. A loader raising :class:`ConfigError` contributes nothing and
    is logged as ``config.loader_skipped``; a bad override is raised.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> T:
        """
        Raises
        ------
        MissingRequiredSettingError
            A field without default is absent from every source.
        ConfigError
            The merged values are rejected by the settings class.
        """
        values: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                loaded = loader.load(settings_cls)
            except ConfigError as exc:
                _log.warning("config.loader_skipped", loader=type(loader).__name__, **exc.log_fields())
                continue
            values.update(dataclasses.asdict(loaded))
        values.update(overrides or {})

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name not in values and is_required(field):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_cls.__name__}: {exc}", cause=exc) from exc


__all__ = ["SettingsFactory"]
