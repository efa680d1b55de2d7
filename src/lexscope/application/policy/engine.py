"""PolicyEngine — composition root of the scope-aware authorization layer.

Construct one instance at application start and pass it to callers::

    engine = PolicyEngine(
        roles=role_directory,
        grants=grant_catalogue,
        employees=employee_directory,
    )
    evaluation = await engine.evaluate_permission("u1", "cases", Action.READ)

Every public operation is total: internal failures are logged and replaced
by a fail-closed default (deny, degraded context, restrictive filter).
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Mapping, Sequence, TypeVar

from lexscope.application.cache import CacheStats
from lexscope.application.policy.context import (
    DEFAULT_CONTEXT_TTL_SECONDS,
    ContextResolver,
    ScopeContext,
)
from lexscope.application.policy.evaluator import PermissionEvaluator, PolicyEvaluation
from lexscope.application.policy.filters import (
    DEFAULT_SCOPE_FIELDS,
    ScopeFields,
    ScopeFilter,
    apply_scope_filter,
    build_scope_filter,
)
from lexscope.application.policy.settings import PolicySettings
from lexscope.kernel.errors import ForbiddenError
from lexscope.kernel.security import (
    Action,
    ChangeKind,
    DirectoryChange,
    EmployeeDirectory,
    GrantCatalogue,
    RoleResolver,
    Scope,
)
from lexscope.kernel.time import Clock

R = TypeVar("R")
F = TypeVar("F", bound=Callable[..., Any])


class PolicyEngine:
    def __init__(
        self,
        *,
        roles: RoleResolver,
        grants: GrantCatalogue,
        employees: EmployeeDirectory,
        context_ttl_seconds: float = DEFAULT_CONTEXT_TTL_SECONDS,
        scope_fields: ScopeFields = DEFAULT_SCOPE_FIELDS,
        resource_fields: Mapping[str, ScopeFields] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._evaluator = PermissionEvaluator(roles, grants)
        self._contexts = ContextResolver(employees, ttl_seconds=context_ttl_seconds, clock=clock)
        self._scope_fields = scope_fields
        self._resource_fields: dict[str, ScopeFields] = dict(resource_fields or {})

    @classmethod
    def from_settings(
        cls,
        settings: PolicySettings,
        *,
        roles: RoleResolver,
        grants: GrantCatalogue,
        employees: EmployeeDirectory,
        resource_fields: Mapping[str, ScopeFields] | None = None,
        clock: Clock | None = None,
    ) -> "PolicyEngine":
        return cls(
            roles=roles,
            grants=grants,
            employees=employees,
            context_ttl_seconds=settings.context_cache_ttl_seconds,
            scope_fields=settings.scope_fields,
            resource_fields=resource_fields,
            clock=clock,
        )

    # -- the five operations ------------------------------------------------

    async def get_user_context(self, user_id: str) -> ScopeContext:
        return await self._contexts.get_user_context(user_id)

    async def evaluate_permission(
        self,
        user_id: str,
        resource: str,
        action: Action | str,
    ) -> PolicyEvaluation:
        return await self._evaluator.evaluate_permission(user_id, resource, action)

    def build_scope_filter(
        self,
        resource: str,
        scope: Scope | str,
        context: ScopeContext,
    ) -> list[ScopeFilter]:
        """Filters for *resource* using its registered :class:`ScopeFields`.

        An unknown scope value falls back to the ``own`` filters.
        """
        return build_scope_filter(resource, scope, context, self.fields_for(resource))

    @staticmethod
    def apply_scope_filter(records: Sequence[R], filters: Sequence[ScopeFilter]) -> Sequence[R]:
        return apply_scope_filter(records, filters)

    async def check_permission(self, user_id: str, resource: str, action: Action | str) -> bool:
        return (await self.evaluate_permission(user_id, resource, action)).allowed

    def fields_for(self, resource: str) -> ScopeFields:
        return self._resource_fields.get(resource, self._scope_fields)

    def register_resource_fields(self, resource: str, fields: ScopeFields) -> None:
        self._resource_fields[resource] = fields

    # -- cache ------------------------------------------------------------------

    def clear_user_cache(self, user_id: str) -> None:
        self._contexts.invalidate(user_id)

    def clear_cache(self) -> None:
        self._contexts.invalidate_all()

    def get_cache_stats(self) -> CacheStats:
        return self._contexts.cache_stats()

    def on_directory_change(self, change: DirectoryChange) -> None:
        """Invalidate cached contexts affected by *change*.

        A hierarchy edit can alter the reportee set of every ancestor of the
        edited employee, so it clears the whole cache. Role and grant changes
        do not touch contexts; the affected user's entry is dropped anyway to
        honour the invalidation contract for role assignment edits.
        """
        if change.kind is ChangeKind.HIERARCHY:
            self.clear_cache()
        elif change.kind is ChangeKind.ROLES and change.user_id is not None:
            self.clear_user_cache(change.user_id)

    def watch(self, *stores: Any) -> None:
        """Subscribe to stores exposing ``subscribe(listener)``."""
        for store in stores:
            store.subscribe(self.on_directory_change)


def require_permission(
    engine: PolicyEngine,
    resource: str,
    action: Action | str,
    *,
    user_arg: str = "user_id",
) -> Callable[[F], F]:
    """Guard an async handler; raises :class:`ForbiddenError` when denied.

    The user id is read from the keyword or positional argument named
    *user_arg*.

    Example::

        @require_permission(engine, "cases", Action.DELETE)
        async def delete_case(user_id: str, case_id: str) -> None:
            ...
    """

    def decorator(fn: F) -> F:
        signature = inspect.signature(fn)
        action_name = str(getattr(action, "value", action))

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = signature.bind_partial(*args, **kwargs)
            user_id = bound.arguments.get(user_arg)
            if user_id is None:
                raise ForbiddenError("No user to authorize", resource=resource, action=action_name)
            evaluation = await engine.evaluate_permission(user_id, resource, action)
            if not evaluation.allowed:
                raise ForbiddenError(evaluation.reason or "forbidden", resource=resource, action=action_name)
            return await fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["PolicyEngine", "require_permission"]
