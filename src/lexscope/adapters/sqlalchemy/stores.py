"""SQLAlchemy adapter – read-side implementations of the grant store ports.

Each reader takes a session factory (anything returning an async session
usable as ``async with factory() as session``) and opens a short session
per call. Database and row-decoding failures surface as
:class:`~lexscope.kernel.errors.LookupFailure`.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from lexscope.adapters.sqlalchemy.schema import (
    employees_table,
    permissions_table,
    role_permissions_table,
    roles_table,
    user_roles_table,
)
from lexscope.kernel.errors import LookupFailure, ValidationError
from lexscope.kernel.security import Employee, PermissionGrant, Role, RoleAssignment
from lexscope.kernel.time import Clock, SystemClock

SessionFactory = Callable[[], Any]


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; they are stored as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlAlchemyEmployeeDirectory:
    def __init__(self, session_factory: SessionFactory) -> None:
        self._sf = session_factory

    async def list_employees(self) -> list[Employee]:
        try:
            async with self._sf() as session:
                rows = (await session.execute(select(employees_table))).mappings().all()
            return [Employee.from_mapping(row) for row in rows]
        except (SQLAlchemyError, ValidationError) as exc:
            raise LookupFailure("employees", f"Could not read employees: {exc}", cause=exc) from exc


class SqlAlchemyGrantCatalogue:
    def __init__(self, session_factory: SessionFactory) -> None:
        self._sf = session_factory

    async def list_grants(self) -> list[PermissionGrant]:
        try:
            async with self._sf() as session:
                rows = (await session.execute(select(permissions_table))).mappings().all()
            return [PermissionGrant.from_mapping(row) for row in rows]
        except (SQLAlchemyError, KeyError, TypeError) as exc:
            raise LookupFailure("permissions", f"Could not read permissions: {exc}", cause=exc) from exc


class SqlAlchemyRoleResolver:
    """Roles in effect for a user: active assignment, not expired, active role."""

    def __init__(self, session_factory: SessionFactory, *, clock: Clock | None = None) -> None:
        self._sf = session_factory
        self._clock = clock or SystemClock()

    async def get_user_roles(self, user_id: str) -> list[Role]:
        try:
            async with self._sf() as session:
                assignment_rows = (
                    await session.execute(
                        select(user_roles_table).where(user_roles_table.c.user_id == user_id)
                    )
                ).mappings().all()
                now = self._clock.now()
                role_ids = [
                    row["role_id"]
                    for row in assignment_rows
                    if RoleAssignment(
                        user_id=row["user_id"],
                        role_id=row["role_id"],
                        is_active=bool(row["is_active"]),
                        expires_at=_as_utc(row["expires_at"]),
                    ).is_effective(now)
                ]
                if not role_ids:
                    return []

                role_rows = (
                    await session.execute(
                        select(roles_table).where(
                            roles_table.c.id.in_(role_ids),
                            roles_table.c.is_active.is_(True),
                        )
                    )
                ).mappings().all()
                link_rows = (
                    await session.execute(
                        select(role_permissions_table).where(
                            role_permissions_table.c.role_id.in_(role_ids)
                        )
                    )
                ).mappings().all()
        except SQLAlchemyError as exc:
            raise LookupFailure("roles", f"Could not read roles: {exc}", user_id=user_id, cause=exc) from exc

        permission_ids: dict[str, list[str]] = {}
        for link in link_rows:
            permission_ids.setdefault(link["role_id"], []).append(link["permission_id"])
        return [
            Role(
                id=row["id"],
                name=row["name"],
                permission_ids=tuple(permission_ids.get(row["id"], ())),
                is_active=bool(row["is_active"]),
                tenant_id=row["tenant_id"],
            )
            for row in role_rows
        ]


__all__ = [
    "SqlAlchemyEmployeeDirectory",
    "SqlAlchemyGrantCatalogue",
    "SqlAlchemyRoleResolver",
]
