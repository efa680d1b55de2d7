"""Default permission catalogue and system role templates for a practice.

Grant ids follow ``<resource>.<action>.<scope>``; the three system grants
keep their historical ids (``system.settings``, ``system.rbac``,
``system.audit``).
"""

from __future__ import annotations

from lexscope.kernel.security import Action, PermissionGrant, Role, Scope

_R, _W, _D, _A = Action.READ, Action.WRITE, Action.DELETE, Action.ADMIN
_OWN, _TEAM, _ORG = Scope.OWN, Scope.TEAM, Scope.ORG

# (resource, category, [(action, scope, description), ...])
_CATALOGUE: tuple[tuple[str, str, tuple[tuple[Action, Scope, str], ...]], ...] = (
    ("cases", "Cases", (
        (_R, _OWN, "View own cases"),
        (_R, _TEAM, "View team cases"),
        (_R, _ORG, "View all cases"),
        (_W, _OWN, "Edit own cases"),
        (_W, _TEAM, "Edit team cases"),
        (_W, _ORG, "Edit all cases"),
        (_D, _TEAM, "Delete team cases"),
        (_A, _ORG, "Full case administration"),
    )),
    ("clients", "Clients", (
        (_R, _OWN, "View own clients"),
        (_R, _TEAM, "View team clients"),
        (_R, _ORG, "View all clients"),
        (_W, _OWN, "Edit own clients"),
        (_W, _TEAM, "Edit team clients"),
        (_W, _ORG, "Edit all clients"),
        (_A, _ORG, "Full client administration"),
    )),
    ("documents", "Documents", (
        (_R, _OWN, "View own documents"),
        (_R, _TEAM, "View team documents"),
        (_R, _ORG, "View all documents"),
        (_W, _OWN, "Upload own documents"),
        (_W, _TEAM, "Upload team documents"),
        (_A, _ORG, "Full document administration"),
    )),
    ("tasks", "Tasks", (
        (_R, _OWN, "View own tasks"),
        (_R, _TEAM, "View team tasks"),
        (_R, _ORG, "View all tasks"),
        (_W, _OWN, "Edit own tasks"),
        (_W, _TEAM, "Edit team tasks"),
        (_W, _ORG, "Edit all tasks"),
        (_A, _ORG, "Full task administration"),
    )),
    ("hearings", "Hearings", (
        (_R, _OWN, "View own hearings"),
        (_R, _TEAM, "View team hearings"),
        (_R, _ORG, "View all hearings"),
        (_W, _TEAM, "Schedule team hearings"),
        (_W, _ORG, "Schedule all hearings"),
        (_A, _ORG, "Full hearing administration"),
    )),
    ("reports", "Reports", (
        (_R, _OWN, "View own reports"),
        (_R, _ORG, "View all reports"),
        (_W, _ORG, "Generate reports"),
        (_A, _ORG, "Manage report templates"),
    )),
    ("dashboard", "Dashboard", (
        (_R, _OWN, "View own dashboard"),
        (_R, _ORG, "View all dashboards"),
        (_A, _ORG, "Customize dashboards"),
    )),
    ("analytics", "Analytics", (
        (_R, _OWN, "View own analytics"),
        (_R, _ORG, "View all analytics"),
        (_A, _ORG, "Configure analytics"),
    )),
)

_SYSTEM: tuple[tuple[str, str, Action, str], ...] = (
    ("system.settings", "system", _A, "Manage system settings"),
    ("system.rbac", "rbac", _A, "Manage roles and permissions"),
    ("system.audit", "audit", _R, "View audit logs"),
)


def default_grants() -> list[PermissionGrant]:
    """The scope-aware allow grants every new practice starts with."""
    grants: list[PermissionGrant] = []
    for resource, category, entries in _CATALOGUE:
        for action, scope, description in entries:
            grant_id = f"{resource}.{action.value}.{scope.value}"
            grants.append(
                PermissionGrant(
                    id=grant_id,
                    resource=resource,
                    action=action,
                    scope=scope,
                    name=grant_id,
                    category=category,
                    description=description,
                )
            )
    for grant_id, resource, action, description in _SYSTEM:
        grants.append(
            PermissionGrant(
                id=grant_id,
                resource=resource,
                action=action,
                scope=_ORG,
                name=grant_id,
                category="System",
                description=description,
            )
        )
    return grants


def default_roles(grants: list[PermissionGrant] | None = None) -> list[Role]:
    """System role templates built over *grants* (defaults to :func:`default_grants`)."""
    grants = grants if grants is not None else default_grants()

    def ids(predicate) -> tuple[str, ...]:
        return tuple(g.id for g in grants if predicate(g))

    return [
        Role(id="super-admin", name="SuperAdmin", permission_ids=ids(lambda g: True)),
        Role(
            id="admin",
            name="Admin",
            permission_ids=ids(
                lambda g: g.id != "system.rbac"
                and (g.scope is _ORG or (g.scope is _TEAM and g.action in (_R, _W, _A)))
            ),
        ),
        Role(
            id="manager",
            name="Manager",
            permission_ids=ids(
                lambda g: (g.resource in ("cases", "clients", "documents", "hearings") and g.scope is _TEAM)
                or (g.resource == "tasks" and g.scope is _ORG and g.action is _R)
            ),
        ),
        Role(
            id="staff",
            name="Staff",
            permission_ids=ids(
                lambda g: (g.scope is _OWN and g.action in (_R, _W))
                or (g.resource == "documents" and g.scope is _TEAM and g.action is _R)
            ),
        ),
        Role(
            id="read-only",
            name="ReadOnly",
            permission_ids=ids(lambda g: g.action is _R and g.scope is _OWN),
        ),
    ]


__all__ = ["default_grants", "default_roles"]
