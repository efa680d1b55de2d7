"""Secure Access Facade — scoped list and get for calling code.

Both operations fail closed: a denial, a missing record and an internal
error all look the same to the caller (``[]`` / ``None``), so the return
value never reveals whether hidden data exists. Details go to the logs and,
when configured, to the :class:`AuditLogger`.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Sequence, TypeVar

import structlog

from lexscope.application.policy.engine import PolicyEngine
from lexscope.application.policy.evaluator import PolicyEvaluation
from lexscope.application.policy.settings import PolicySettings
from lexscope.kernel.security import Action, Scope
from lexscope.observability.logging import AuditLogger, AuditOutcome, get_logger

R = TypeVar("R")

_log = get_logger(__name__)


class SecureDataAccess:
    def __init__(self, engine: PolicyEngine, *, audit: AuditLogger | None = None) -> None:
        self._engine = engine
        self._audit = audit

    @classmethod
    def from_settings(cls, engine: PolicyEngine, settings: PolicySettings) -> "SecureDataAccess":
        audit = AuditLogger(service=settings.audit_service) if settings.audit_enabled else None
        return cls(engine, audit=audit)

    async def secure_list(
        self,
        user_id: str,
        resource: str,
        fetch: Callable[[], Awaitable[Sequence[R]]],
    ) -> Sequence[R]:
        """Fetch and scope-filter a collection; ``[]`` when denied or on error."""
        with structlog.contextvars.bound_contextvars(user_id=user_id, resource=resource):
            try:
                evaluation = await self._engine.evaluate_permission(user_id, resource, Action.READ)
                if not evaluation.allowed:
                    _log.warning("policy.access.denied", reason=evaluation.reason)
                    self._record(user_id, resource, AuditOutcome.DENIED, evaluation)
                    return []

                data = await fetch()
                visible = await self._scope(user_id, resource, evaluation, data)
                self._record(user_id, resource, AuditOutcome.SUCCESS, evaluation, returned=len(visible))
                return visible
            except Exception as exc:  # noqa: BLE001
                _log.error("policy.secure_list.failed", error=repr(exc))
                self._record(user_id, resource, AuditOutcome.ERROR)
                return []

    async def secure_get(
        self,
        user_id: str,
        resource: str,
        item_id: str,
        fetch: Callable[[str], Awaitable[R | None]],
    ) -> R | None:
        """Fetch one record and check it against the caller's scope.

        The record goes through the same filter as :meth:`secure_list`,
        wrapped in a one-element list.
        """
        target = f"{resource}:{item_id}"
        with structlog.contextvars.bound_contextvars(user_id=user_id, resource=resource):
            try:
                evaluation = await self._engine.evaluate_permission(user_id, resource, Action.READ)
                if not evaluation.allowed:
                    _log.warning("policy.access.denied", item_id=item_id, reason=evaluation.reason)
                    self._record(user_id, target, AuditOutcome.DENIED, evaluation)
                    return None

                record = await fetch(item_id)
                if record is None:
                    return None

                visible = await self._scope(user_id, resource, evaluation, [record])
                if not visible:
                    self._record(user_id, target, AuditOutcome.DENIED, evaluation)
                    return None
                self._record(user_id, target, AuditOutcome.SUCCESS, evaluation)
                return visible[0]
            except Exception as exc:  # noqa: BLE001
                _log.error("policy.secure_get.failed", item_id=item_id, error=repr(exc))
                self._record(user_id, target, AuditOutcome.ERROR)
                return None

    async def _scope(
        self,
        user_id: str,
        resource: str,
        evaluation: PolicyEvaluation,
        data: Sequence[R],
    ) -> Sequence[R]:
        if evaluation.scope is Scope.ORG:
            return data
        context = await self._engine.get_user_context(user_id)
        filters = self._engine.build_scope_filter(resource, evaluation.scope, context)
        return self._engine.apply_scope_filter(data, filters)

    def _record(
        self,
        user_id: str,
        resource: str,
        outcome: AuditOutcome,
        evaluation: PolicyEvaluation | None = None,
        **extra: object,
    ) -> None:
        if self._audit is None:
            return
        if evaluation is not None:
            extra.setdefault("scope", evaluation.scope.value)
            extra.setdefault("reason", evaluation.reason)
        self._audit.log_access(user_id, resource, Action.READ.value, outcome, **extra)


__all__ = ["SecureDataAccess"]
