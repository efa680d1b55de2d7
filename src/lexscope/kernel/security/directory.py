"""Kernel security — in-memory implementations of the grant store ports.

* :class:`InMemoryEmployeeDirectory`: employee hierarchy records.
* :class:`InMemoryGrantCatalogue`: the permission grant catalogue.
* :class:`InMemoryRoleDirectory`: roles and user-to-role assignments.

Intended for unit tests and small single-process deployments. Each store
publishes a :class:`DirectoryChange` to its listeners after every mutation so
a policy engine can invalidate cached contexts (see
:meth:`lexscope.application.policy.engine.PolicyEngine.watch`).
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable

from lexscope.kernel.security.employee import Employee
from lexscope.kernel.security.grants import PermissionGrant, Role, RoleAssignment
from lexscope.kernel.time import Clock, SystemClock


class ChangeKind(str, Enum):
    HIERARCHY = "hierarchy"
    ROLES = "roles"
    GRANTS = "grants"


@dataclasses.dataclass(frozen=True)
class DirectoryChange:
    """Published after a store mutation. ``user_id`` is ``None`` when the
    change is not attributable to a single user."""

    kind: ChangeKind
    user_id: str | None = None


ChangeListener = Callable[[DirectoryChange], None]


class _Observable:
    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        """Register *listener*; it is called synchronously after each change."""
        self._listeners.append(listener)

    def _publish(self, change: DirectoryChange) -> None:
        for listener in list(self._listeners):
            listener(change)


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------


class InMemoryEmployeeDirectory(_Observable):
    """Employee records keyed by id, in insertion order."""

    def __init__(self, employees: Iterable[Employee] = ()) -> None:
        super().__init__()
        self._employees: dict[str, Employee] = {e.id: e for e in employees}

    def upsert(self, employee: Employee) -> None:
        self._employees[employee.id] = employee
        self._publish(DirectoryChange(ChangeKind.HIERARCHY, employee.id))

    def remove(self, employee_id: str) -> None:
        """Delete *employee_id* (no-op if absent). Subordinates keep their
        now-dangling ``manager_id``."""
        if self._employees.pop(employee_id, None) is not None:
            self._publish(DirectoryChange(ChangeKind.HIERARCHY, employee_id))

    async def list_employees(self) -> list[Employee]:
        return list(self._employees.values())


# ---------------------------------------------------------------------------
# Grants
# ---------------------------------------------------------------------------


class InMemoryGrantCatalogue(_Observable):
    def __init__(self, grants: Iterable[PermissionGrant] = ()) -> None:
        super().__init__()
        self._grants: dict[str, PermissionGrant] = {g.id: g for g in grants}

    def add(self, grant: PermissionGrant) -> None:
        self._grants[grant.id] = grant
        self._publish(DirectoryChange(ChangeKind.GRANTS))

    def remove(self, grant_id: str) -> None:
        if self._grants.pop(grant_id, None) is not None:
            self._publish(DirectoryChange(ChangeKind.GRANTS))

    async def list_grants(self) -> list[PermissionGrant]:
        return list(self._grants.values())


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


class InMemoryRoleDirectory(_Observable):
    """Roles plus user assignments.

    :meth:`get_user_roles` only returns active roles reached through active,
    unexpired assignments; unknown users get an empty list.
    """

    def __init__(
        self,
        roles: Iterable[Role] = (),
        *,
        clock: Clock | None = None,
    ) -> None:
        super().__init__()
        self._roles: dict[str, Role] = {r.id: r for r in roles}
        self._assignments: dict[str, dict[str, RoleAssignment]] = {}
        self._clock = clock or SystemClock()

    def add_role(self, role: Role) -> None:
        self._roles[role.id] = role
        for user_id, assignments in self._assignments.items():
            if role.id in assignments:
                self._publish(DirectoryChange(ChangeKind.ROLES, user_id))

    def assign(
        self,
        user_id: str,
        role_id: str,
        *,
        expires_at: datetime | None = None,
    ) -> RoleAssignment:
        """Assign *role_id* to *user_id*, replacing any previous assignment."""
        assignment = RoleAssignment(user_id=user_id, role_id=role_id, expires_at=expires_at)
        self._assignments.setdefault(user_id, {})[role_id] = assignment
        self._publish(DirectoryChange(ChangeKind.ROLES, user_id))
        return assignment

    def revoke(self, user_id: str, role_id: str) -> None:
        """Deactivate the assignment (no-op if not present)."""
        current = self._assignments.get(user_id, {}).get(role_id)
        if current is None:
            return
        self._assignments[user_id][role_id] = dataclasses.replace(current, is_active=False)
        self._publish(DirectoryChange(ChangeKind.ROLES, user_id))

    def assignments_for(self, user_id: str) -> list[RoleAssignment]:
        return list(self._assignments.get(user_id, {}).values())

    async def get_user_roles(self, user_id: str) -> list[Role]:
        now = self._clock.now()
        roles: list[Role] = []
        for assignment in self.assignments_for(user_id):
            if not assignment.is_effective(now):
                continue
            role = self._roles.get(assignment.role_id)
            if role is not None and role.is_active:
                roles.append(role)
        return roles


__all__ = [
    "ChangeKind",
    "ChangeListener",
    "DirectoryChange",
    "InMemoryEmployeeDirectory",
    "InMemoryGrantCatalogue",
    "InMemoryRoleDirectory",
]
