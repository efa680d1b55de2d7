"""SQLAlchemy adapter – Core tables backing the grant store.

Column names follow the practice database: ``employees.manager_id``,
``employees.status`` ('Active' / 'Inactive' / 'Suspended'), ``user_roles``
with soft revocation through ``is_active``.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

employees_table = Table(
    "employees",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("manager_id", String(64), nullable=True, index=True),
    Column("status", String(16), nullable=False, default="Active"),
    Column("tenant_id", String(64), nullable=True),
)

roles_table = Table(
    "roles",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(128), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("tenant_id", String(64), nullable=True),
)

permissions_table = Table(
    "permissions",
    metadata,
    Column("id", String(128), primary_key=True),
    Column("resource", String(64), nullable=False, index=True),
    Column("action", String(16), nullable=False),
    Column("effect", String(8), nullable=False, default="allow"),
    Column("scope", String(16), nullable=False, default="own"),
    Column("conditions", JSON, nullable=True),
    Column("name", String(128), nullable=True),
    Column("category", String(64), nullable=True),
    Column("description", Text, nullable=True),
)

role_permissions_table = Table(
    "role_permissions",
    metadata,
    Column("role_id", String(64), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", String(128), ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

user_roles_table = Table(
    "user_roles",
    metadata,
    Column("user_id", String(64), primary_key=True),
    Column("role_id", String(64), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("expires_at", DateTime(timezone=True), nullable=True),
)


async def create_policy_tables(bind: Any) -> None:
    """Create the grant store tables on an :class:`~sqlalchemy.ext.asyncio.AsyncEngine`."""
    async with bind.begin() as conn:
        await conn.run_sync(metadata.create_all)


__all__ = [
    "create_policy_tables",
    "employees_table",
    "metadata",
    "permissions_table",
    "role_permissions_table",
    "roles_table",
    "user_roles_table",
]
