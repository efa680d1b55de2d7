"""Policy engine – context resolution, permission evaluation, scope filters.

Typical wiring::

    from lexscope.application.policy import PolicyEngine, SecureDataAccess

    engine = PolicyEngine(roles=roles, grants=grants, employees=employees)
    access = SecureDataAccess(engine)
    cases = await access.secure_list(user_id, "cases", case_repo.list_all)
"""
from lexscope.application.policy.context import ContextResolver, ScopeContext
from lexscope.application.policy.defaults import default_grants, default_roles
from lexscope.application.policy.engine import PolicyEngine, require_permission
from lexscope.application.policy.evaluator import (
    REASON_DENIED,
    REASON_ERROR,
    REASON_NO_MATCH,
    PermissionEvaluator,
    PolicyEvaluation,
)
from lexscope.application.policy.filters import (
    DEFAULT_SCOPE_FIELDS,
    FilterOperator,
    ScopeFields,
    ScopeFilter,
    apply_scope_filter,
    build_scope_filter,
)
from lexscope.application.policy.hierarchy import OrgHierarchy
from lexscope.application.policy.secure_access import SecureDataAccess
from lexscope.application.policy.settings import PolicySettings

__all__ = [
    "DEFAULT_SCOPE_FIELDS",
    "REASON_DENIED",
    "REASON_ERROR",
    "REASON_NO_MATCH",
    "ContextResolver",
    "FilterOperator",
    "OrgHierarchy",
    "PermissionEvaluator",
    "PolicyEngine",
    "PolicyEvaluation",
    "PolicySettings",
    "ScopeContext",
    "ScopeFields",
    "ScopeFilter",
    "SecureDataAccess",
    "apply_scope_filter",
    "build_scope_filter",
    "default_grants",
    "default_roles",
    "require_permission",
]
