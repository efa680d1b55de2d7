"""Permission Evaluator — deny-overrides-allow with strongest-scope selection."""

from __future__ import annotations

import dataclasses
from typing import Iterable

from lexscope.kernel.errors import LookupFailure, MalformedGrantError
from lexscope.kernel.security import (
    Action,
    Effect,
    FieldCondition,
    GrantCatalogue,
    PermissionGrant,
    RoleResolver,
    Scope,
)
from lexscope.kernel.types import Err, Ok, Result
from lexscope.observability.logging import get_logger

_log = get_logger(__name__)

REASON_NO_MATCH = "No matching permissions found"
REASON_DENIED = "Explicitly denied by policy"
REASON_ERROR = "Evaluation error"


@dataclasses.dataclass(frozen=True)
class PolicyEvaluation:
    """Outcome of one evaluation. Never cached."""

    allowed: bool
    scope: Scope
    conditions: tuple[FieldCondition, ...] | None = None
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def deny(cls, reason: str, scope: Scope = Scope.OWN) -> "PolicyEvaluation":
        return cls(allowed=False, scope=scope, reason=reason)


@dataclasses.dataclass(frozen=True)
class _AllowGrant:
    grant: PermissionGrant
    scope: Scope


def _report(exc: MalformedGrantError) -> None:
    _log.error("policy.grant.malformed", **exc.log_fields())


def _scope_of(grant: PermissionGrant) -> Scope:
    try:
        return Scope(grant.scope)
    except ValueError as exc:
        raise MalformedGrantError(grant.id, "scope", grant.scope) from exc


def decide(grants: Iterable[PermissionGrant]) -> PolicyEvaluation:
    """Resolve already-matched grants into a decision.

    A deny grant denies whatever its scope says; an unreadable deny scope is
    logged and reported as own. A grant whose effect is outside the known
    vocabulary fails the whole evaluation closed. Allow grants with an
    unknown scope are logged and dropped.
    """
    allows: list[_AllowGrant] = []
    denial: PolicyEvaluation | None = None
    for grant in grants:
        try:
            effect = Effect(grant.effect)
        except ValueError as exc:
            _report(MalformedGrantError(grant.id, "effect", grant.effect, cause=exc))
            return PolicyEvaluation.deny(REASON_ERROR)

        if effect is Effect.DENY:
            if denial is None:
                try:
                    denial = PolicyEvaluation.deny(REASON_DENIED, _scope_of(grant))
                except MalformedGrantError as exc:
                    _report(exc)
                    denial = PolicyEvaluation.deny(REASON_DENIED)
            continue

        try:
            allows.append(_AllowGrant(grant=grant, scope=_scope_of(grant)))
        except MalformedGrantError as exc:
            _report(exc)

    if denial is not None:
        return denial
    if not allows:
        return PolicyEvaluation.deny(REASON_NO_MATCH)

    strongest = allows[0]
    for candidate in allows:
        # strict comparison: the first grant reaching the top scope wins ties
        if candidate.scope.is_stronger_than(strongest.scope):
            strongest = candidate

    return PolicyEvaluation(
        allowed=True,
        scope=strongest.scope,
        conditions=strongest.grant.conditions or None,
        reason=f"Allowed with {strongest.scope.value} scope",
    )


class PermissionEvaluator:
    """Evaluates ``(user, resource, action)`` against the user's role grants.

    Resource names match verbatim; there is no wildcard or hierarchical
    resource matching.
    """

    def __init__(self, roles: RoleResolver, catalogue: GrantCatalogue) -> None:
        self._roles = roles
        self._catalogue = catalogue

    async def matching_grants(
        self,
        user_id: str,
        resource: str,
        action: Action,
    ) -> Result[list[PermissionGrant], LookupFailure]:
        try:
            roles = await self._roles.get_user_roles(user_id)
            grant_ids = {grant_id for role in roles for grant_id in role.permission_ids}
            grants = await self._catalogue.list_grants() if grant_ids else []
        except LookupFailure as exc:
            return Err(exc)
        except Exception as exc:  # noqa: BLE001
            return Err(LookupFailure("grants", f"Grant lookup failed: {exc}", user_id=user_id, cause=exc))

        return Ok([
            grant for grant in grants
            if grant.id in grant_ids
            and grant.resource == resource
            and grant.action == action
        ])

    async def evaluate(
        self,
        user_id: str,
        resource: str,
        action: Action | str,
    ) -> Result[PolicyEvaluation, LookupFailure]:
        try:
            wanted = Action(action)
        except ValueError as exc:
            return Err(LookupFailure("grants", f"Unknown action {action!r}", user_id=user_id, cause=exc))
        return (await self.matching_grants(user_id, resource, wanted)).map(decide)

    async def evaluate_permission(
        self,
        user_id: str,
        resource: str,
        action: Action | str,
    ) -> PolicyEvaluation:
        """Never raises; lookup failures yield a deny with reason ``Evaluation error``."""
        result = await self.evaluate(user_id, resource, action)
        return result.unwrap_or_else(lambda exc: self._fail_closed(user_id, resource, action, exc))

    @staticmethod
    def _fail_closed(
        user_id: str,
        resource: str,
        action: Action | str,
        exc: LookupFailure,
    ) -> PolicyEvaluation:
        fields = exc.log_fields()
        fields.update(user_id=user_id, resource=resource, action=str(getattr(action, "value", action)))
        _log.warning("policy.evaluation.failed", **fields)
        return PolicyEvaluation.deny(REASON_ERROR)


__all__ = [
    "REASON_DENIED",
    "REASON_ERROR",
    "REASON_NO_MATCH",
    "PermissionEvaluator",
    "PolicyEvaluation",
    "decide",
]
