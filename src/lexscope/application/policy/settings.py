"""Policy engine settings."""
from __future__ import annotations

import dataclasses

from lexscope.application.policy.context import DEFAULT_CONTEXT_TTL_SECONDS
from lexscope.application.policy.filters import ScopeFields
from lexscope.config import EnvSettingsLoader, InvalidSettingValueError, Settings, SettingsFactory


@dataclasses.dataclass
class PolicySettings(Settings):
    """Environment: ``LEXSCOPE_POLICY_<FIELD>``, e.g.
    ``LEXSCOPE_POLICY_ASSIGNEE_FIELDS=assigned_to,assignedToId``."""

    _prefix = "LEXSCOPE_POLICY"

    context_cache_ttl_seconds: int = DEFAULT_CONTEXT_TTL_SECONDS
    owner_field: str = "ownerId"
    assignee_fields: list[str] = dataclasses.field(
        default_factory=lambda: ["assigned_to", "assignedToId"]
    )
    tenant_field: str = "tenantId"
    audit_enabled: bool = True
    audit_service: str = "lexscope"

    def _validate(self) -> None:
        if self.context_cache_ttl_seconds <= 0:
            raise InvalidSettingValueError(
                "context_cache_ttl_seconds",
                self.context_cache_ttl_seconds,
                "must be a positive number of seconds",
            )
        if not self.owner_field and not self.assignee_fields:
            raise InvalidSettingValueError(
                "assignee_fields",
                self.assignee_fields,
                "at least one ownership field is required",
            )

    @property
    def scope_fields(self) -> ScopeFields:
        return ScopeFields(
            owner_field=self.owner_field or None,
            assignee_fields=tuple(self.assignee_fields),
            tenant_field=self.tenant_field or None,
        )

    @classmethod
    def from_env(cls, **overrides: object) -> "PolicySettings":
        return SettingsFactory.create(cls, loaders=[EnvSettingsLoader()], overrides=overrides or None)


__all__ = ["PolicySettings"]
