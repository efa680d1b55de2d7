"""Context Resolver — per-user organizational snapshot with a TTL cache."""

from __future__ import annotations

import dataclasses

from lexscope.application.cache import CacheStats, TTLCache, user_context_key
from lexscope.application.policy.hierarchy import OrgHierarchy
from lexscope.kernel.errors import LookupFailure
from lexscope.kernel.security import EmployeeDirectory
from lexscope.kernel.time import Clock
from lexscope.kernel.types import Err, Ok, Result
from lexscope.observability.logging import get_logger

_log = get_logger(__name__)

DEFAULT_CONTEXT_TTL_SECONDS = 300


@dataclasses.dataclass(frozen=True)
class ScopeContext:
    """Resolved organizational position of a user.

    ``manager_chain`` is ordered nearest manager first; ``reportee_ids`` holds
    every active transitive subordinate. Both are duplicate-free.
    A ``degraded`` context is the fail-closed fallback: with no reportees it
    reduces team filtering to the user's own records.
    """

    user_id: str
    employee_id: str
    manager_chain: tuple[str, ...] = ()
    reportee_ids: tuple[str, ...] = ()
    tenant_id: str | None = None
    degraded: bool = False

    @property
    def team_ids(self) -> tuple[str, ...]:
        return (self.employee_id, *self.reportee_ids)

    @classmethod
    def fallback(cls, user_id: str) -> "ScopeContext":
        return cls(user_id=user_id, employee_id=user_id, degraded=True)


class ContextResolver:
    """Builds :class:`ScopeContext` values from the employee directory.

    Successful resolutions are cached under ``user:<id>`` for the TTL.
    Hierarchy edits are not observed: a cached context stays in use until it
    expires or is invalidated with :meth:`invalidate` / :meth:`invalidate_all`.
    """

    def __init__(
        self,
        directory: EmployeeDirectory,
        *,
        ttl_seconds: float = DEFAULT_CONTEXT_TTL_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        self._directory = directory
        self._cache: TTLCache[ScopeContext] = TTLCache(ttl_seconds, clock=clock)

    async def resolve(self, user_id: str) -> Result[ScopeContext, LookupFailure]:
        key = user_context_key(user_id)
        cached = self._cache.get(key)
        if cached is not None:
            return Ok(cached)

        built = await self._build(user_id)
        if built.is_ok():
            self._cache.set(key, built.unwrap())
        return built

    async def get_user_context(self, user_id: str) -> ScopeContext:
        """Never raises; lookup failures yield :meth:`ScopeContext.fallback`."""
        result = await self.resolve(user_id)
        return result.unwrap_or_else(lambda exc: self._degrade(user_id, exc))

    async def _build(self, user_id: str) -> Result[ScopeContext, LookupFailure]:
        try:
            hierarchy = OrgHierarchy(await self._directory.list_employees())
        except LookupFailure as exc:
            return Err(exc)
        except Exception as exc:  # noqa: BLE001
            return Err(LookupFailure("employees", f"Employee lookup failed: {exc}", user_id=user_id, cause=exc))

        employee = hierarchy.get(user_id)
        if employee is None:
            return Err(LookupFailure("employees", f"Employee not found for user: {user_id}", user_id=user_id))

        return Ok(
            ScopeContext(
                user_id=user_id,
                employee_id=employee.id,
                manager_chain=hierarchy.manager_chain(employee.id),
                reportee_ids=hierarchy.reportees(employee.id),
                tenant_id=employee.tenant_id,
            )
        )

    @staticmethod
    def _degrade(user_id: str, exc: LookupFailure) -> ScopeContext:
        fields = exc.log_fields()
        fields.setdefault("user_id", user_id)
        _log.warning("policy.context.lookup_failed", **fields)
        return ScopeContext.fallback(user_id)

    # -- cache management ---------------------------------------------------

    def invalidate(self, user_id: str) -> None:
        self._cache.delete(user_context_key(user_id))

    def invalidate_all(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()


__all__ = ["DEFAULT_CONTEXT_TTL_SECONDS", "ContextResolver", "ScopeContext"]
