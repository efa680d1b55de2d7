"""Kernel security – read ports feeding the policy engine (the grant store)."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from lexscope.kernel.security.employee import Employee
from lexscope.kernel.security.grants import PermissionGrant, Role


@runtime_checkable
class RoleResolver(Protocol):
    """Resolves a user to the roles currently in effect.

    Must return an empty list for unknown users rather than raise.
    """

    async def get_user_roles(self, user_id: str) -> list[Role]: ...


@runtime_checkable
class GrantCatalogue(Protocol):
    async def list_grants(self) -> list[PermissionGrant]: ...


@runtime_checkable
class EmployeeDirectory(Protocol):
    async def list_employees(self) -> list[Employee]: ...


__all__ = ["EmployeeDirectory", "GrantCatalogue", "RoleResolver"]
