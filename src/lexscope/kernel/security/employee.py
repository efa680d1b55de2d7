"""Kernel security – Employee, a node of the organizational hierarchy."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping

from lexscope.kernel.errors.domain import ValidationError


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


@dataclasses.dataclass(frozen=True)
class Employee:
    """Organizational actor. ``manager_id`` may point anywhere, including
    back into the employee's own reporting line."""

    id: str
    manager_id: str | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    tenant_id: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status is EmployeeStatus.ACTIVE

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Employee":
        raw_status = data.get("status") or EmployeeStatus.ACTIVE.value
        try:
            status = EmployeeStatus(str(raw_status).strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Employee '{data.get('id')}' has unknown status {raw_status!r}"
            ) from exc
        manager_id = data.get("manager_id")
        tenant_id = data.get("tenant_id")
        return cls(
            id=str(data["id"]),
            manager_id=str(manager_id) if manager_id else None,
            status=status,
            tenant_id=str(tenant_id) if tenant_id else None,
        )


__all__ = ["Employee", "EmployeeStatus"]
