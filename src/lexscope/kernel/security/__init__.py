"""Kernel security – grant vocabulary, hierarchy records, store ports."""
from lexscope.kernel.security.directory import (
    ChangeKind,
    ChangeListener,
    DirectoryChange,
    InMemoryEmployeeDirectory,
    InMemoryGrantCatalogue,
    InMemoryRoleDirectory,
)
from lexscope.kernel.security.employee import Employee, EmployeeStatus
from lexscope.kernel.security.grants import (
    FieldCondition,
    PermissionGrant,
    Role,
    RoleAssignment,
)
from lexscope.kernel.security.ports import EmployeeDirectory, GrantCatalogue, RoleResolver
from lexscope.kernel.security.scopes import Action, Effect, Scope

__all__ = [
    "Action",
    "ChangeKind",
    "ChangeListener",
    "DirectoryChange",
    "Effect",
    "Employee",
    "EmployeeDirectory",
    "EmployeeStatus",
    "FieldCondition",
    "GrantCatalogue",
    "InMemoryEmployeeDirectory",
    "InMemoryGrantCatalogue",
    "InMemoryRoleDirectory",
    "PermissionGrant",
    "Role",
    "RoleAssignment",
    "RoleResolver",
    "Scope",
]
