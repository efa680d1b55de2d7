"""Kernel security – PermissionGrant, Role, RoleAssignment."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, TypeVar

from lexscope.kernel.security.scopes import Action, Effect, Scope

_E = TypeVar("_E", bound=Enum)


def _enum_or_raw(enum_cls: type[_E], value: Any) -> _E | Any:
    """Convert *value* into *enum_cls* when possible, else hand it back verbatim.

    Unknown values are kept so the evaluator can reject the grant instead of
    the whole catalogue failing to load.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return value


@dataclasses.dataclass(frozen=True)
class FieldCondition:
    """Field-level condition attached to a grant (passed through, not evaluated)."""

    field: str
    op: str
    value: Any = None


@dataclasses.dataclass(frozen=True)
class PermissionGrant:
    """One authorization rule bound to roles through its ``id``.

    ``scope`` is only meaningful when ``effect`` is :attr:`Effect.ALLOW`.
    """

    id: str
    resource: str
    action: Action | str
    effect: Effect | str = Effect.ALLOW
    scope: Scope | str = Scope.OWN
    conditions: tuple[FieldCondition, ...] = ()
    name: str = ""
    category: str = ""
    description: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PermissionGrant":
        """Build a grant from a raw store row (dict or SQL mapping)."""
        conditions = tuple(
            c if isinstance(c, FieldCondition)
            else FieldCondition(field=c["field"], op=c["op"], value=c.get("value"))
            for c in (data.get("conditions") or ())
        )
        return cls(
            id=str(data["id"]),
            resource=str(data["resource"]),
            action=_enum_or_raw(Action, data["action"]),
            effect=_enum_or_raw(Effect, data.get("effect", Effect.ALLOW)),
            scope=_enum_or_raw(Scope, data.get("scope", Scope.OWN)),
            conditions=conditions,
            name=data.get("name") or "",
            category=data.get("category") or "",
            description=data.get("description") or "",
        )


@dataclasses.dataclass(frozen=True)
class Role:
    """A named bundle of grant ids. Inactive roles grant nothing."""

    id: str
    name: str
    permission_ids: tuple[str, ...] = ()
    is_active: bool = True
    tenant_id: str | None = None


@dataclasses.dataclass(frozen=True)
class RoleAssignment:
    """Binds a user to a role, optionally until ``expires_at``."""

    user_id: str
    role_id: str
    is_active: bool = True
    expires_at: datetime | None = None

    def is_effective(self, at: datetime) -> bool:
        if not self.is_active:
            return False
        return self.expires_at is None or at < self.expires_at


__all__ = ["FieldCondition", "PermissionGrant", "Role", "RoleAssignment"]
