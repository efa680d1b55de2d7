"""Config settings – Settings base dataclass."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass
class Settings:
    """Base for 12-factor settings dataclasses.

    ``_prefix`` namespaces the environment keys of a subclass
    (``<PREFIX>_<FIELD>``). Cross-field rules go in :meth:`_validate`, which
    runs on every construction, so an invalid instance never exists.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        pass


def is_required(field: dataclasses.Field[Any]) -> bool:
    return field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING


__all__ = ["Settings", "is_required"]
