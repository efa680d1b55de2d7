"""SQLAlchemy adapter – relational grant store (employees, roles, permissions)."""
from lexscope.adapters.sqlalchemy.schema import (
    create_policy_tables,
    employees_table,
    metadata,
    permissions_table,
    role_permissions_table,
    roles_table,
    user_roles_table,
)
from lexscope.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from lexscope.adapters.sqlalchemy.stores import (
    SqlAlchemyEmployeeDirectory,
    SqlAlchemyGrantCatalogue,
    SqlAlchemyRoleResolver,
)

__all__ = [
    "SqlAlchemyEmployeeDirectory",
    "SqlAlchemyGrantCatalogue",
    "SqlAlchemyRoleResolver",
    "SqlAlchemySessionFactory",
    "create_policy_tables",
    "employees_table",
    "metadata",
    "permissions_table",
    "role_permissions_table",
    "roles_table",
    "user_roles_table",
]
