"""Unit tests for PolicyEngine – wiring, invalidation and require_permission."""
from __future__ import annotations

import asyncio

import pytest
from structlog.testing import capture_logs

from lexscope.application.policy import (
    REASON_NO_MATCH,
    FilterOperator,
    PolicyEngine,
    PolicySettings,
    ScopeFields,
    ScopeFilter,
    default_grants,
    default_roles,
    require_permission,
)
from lexscope.kernel.errors import ForbiddenError
from lexscope.kernel.security import (
    Action,
    Employee,
    InMemoryEmployeeDirectory,
    InMemoryGrantCatalogue,
    InMemoryRoleDirectory,
    Scope,
)
from lexscope.testing.fakes import FakeClock, RecordingEmployeeDirectory


def _firm(clock=None) -> tuple[PolicyEngine, InMemoryRoleDirectory, InMemoryEmployeeDirectory]:
    clock = clock or FakeClock()
    grants = default_grants()
    roles = InMemoryRoleDirectory(default_roles(grants), clock=clock)
    for user_id, role_id in (("partner", "admin"), ("m1", "manager"), ("e1", "staff"), ("e2", "read-only")):
        roles.assign(user_id, role_id)
    employees = InMemoryEmployeeDirectory(
        [
            Employee("partner", tenant_id="firm-1"),
            Employee("m1", manager_id="partner", tenant_id="firm-1"),
            Employee("e1", manager_id="m1", tenant_id="firm-1"),
            Employee("e2", manager_id="m1", tenant_id="firm-1"),
        ]
    )
    engine = PolicyEngine(
        roles=roles,
        grants=InMemoryGrantCatalogue(grants),
        employees=employees,
        clock=clock,
    )
    return engine, roles, employees


# ---------------------------------------------------------------------------
# Evaluation over the default catalogue
# ---------------------------------------------------------------------------


class TestEvaluateWithDefaults:
    @pytest.mark.parametrize(
        ("user_id", "scope"),
        [("partner", Scope.ORG), ("m1", Scope.TEAM), ("e1", Scope.OWN), ("e2", Scope.OWN)],
    )
    def test_case_read_scope_by_role(self, user_id: str, scope: Scope) -> None:
        engine, _, _ = _firm()
        evaluation = asyncio.run(engine.evaluate_permission(user_id, "cases", Action.READ))
        assert evaluation.allowed
        assert evaluation.scope is scope

    def test_read_only_cannot_write(self) -> None:
        engine, _, _ = _firm()
        evaluation = asyncio.run(engine.evaluate_permission("e2", "cases", "write"))
        assert not evaluation.allowed
        assert evaluation.reason == REASON_NO_MATCH

    def test_check_permission(self) -> None:
        engine, _, _ = _firm()
        assert asyncio.run(engine.check_permission("m1", "cases", Action.DELETE))
        assert not asyncio.run(engine.check_permission("e1", "cases", Action.DELETE))

    def test_unknown_user_is_denied(self) -> None:
        engine, _, _ = _firm()
        assert not asyncio.run(engine.check_permission("stranger", "cases", Action.READ))


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestEngineFilters:
    def test_uses_default_fields(self) -> None:
        engine, _, _ = _firm()
        context = asyncio.run(engine.get_user_context("e1"))
        filters = engine.build_scope_filter("cases", Scope.OWN, context)
        assert filters[0] == ScopeFilter("ownerId", FilterOperator.EQ, "e1")

    def test_resource_fields_override(self) -> None:
        engine, _, _ = _firm()
        engine.register_resource_fields("hearings", ScopeFields(owner_field=None, assignee_fields=("lawyerId",)))
        context = asyncio.run(engine.get_user_context("m1"))
        assert engine.build_scope_filter("hearings", Scope.TEAM, context) == [
            ScopeFilter("lawyerId", FilterOperator.IN, ("m1", "e1", "e2"))
        ]
        assert engine.fields_for("cases") == ScopeFields()

    def test_unknown_scope_falls_back_to_own(self) -> None:
        engine, _, _ = _firm()
        context = asyncio.run(engine.get_user_context("e1"))
        with capture_logs() as logs:
            filters = engine.build_scope_filter("cases", "galaxy", context)
        assert filters == engine.build_scope_filter("cases", Scope.OWN, context)
        assert any(e["event"] == "policy.filter.unknown_scope" for e in logs)

    def test_apply_scope_filter(self) -> None:
        records = [{"ownerId": "e1"}, {"ownerId": "e2"}]
        filters = [ScopeFilter("ownerId", FilterOperator.EQ, "e2")]
        assert PolicyEngine.apply_scope_filter(records, filters) == [{"ownerId": "e2"}]


# ---------------------------------------------------------------------------
# Cache management
# ---------------------------------------------------------------------------


class TestEngineCache:
    def test_stats_and_clear(self) -> None:
        engine, _, _ = _firm()
        asyncio.run(engine.get_user_context("m1"))
        asyncio.run(engine.get_user_context("e1"))
        assert engine.get_cache_stats().entries == ("user:m1", "user:e1")
        engine.clear_user_cache("m1")
        assert engine.get_cache_stats().entries == ("user:e1",)
        engine.clear_cache()
        assert engine.get_cache_stats().size == 0

    def test_clear_user_cache_recomputes(self) -> None:
        directory = RecordingEmployeeDirectory(InMemoryEmployeeDirectory([Employee("u1")]))
        engine = PolicyEngine(
            roles=InMemoryRoleDirectory(),
            grants=InMemoryGrantCatalogue(),
            employees=directory,
            clock=FakeClock(),
        )
        first = asyncio.run(engine.get_user_context("u1"))
        assert asyncio.run(engine.get_user_context("u1")) is first
        assert directory.calls == 1
        engine.clear_user_cache("u1")
        asyncio.run(engine.get_user_context("u1"))
        assert directory.calls == 2

    def test_watch_hierarchy_change_clears_everything(self) -> None:
        engine, roles, employees = _firm()
        engine.watch(roles, employees)
        asyncio.run(engine.get_user_context("m1"))
        asyncio.run(engine.get_user_context("partner"))
        employees.upsert(Employee("e3", manager_id="e1", tenant_id="firm-1"))
        assert engine.get_cache_stats().size == 0
        partner = asyncio.run(engine.get_user_context("partner"))
        assert "e3" in partner.reportee_ids

    def test_watch_role_change_clears_that_user(self) -> None:
        engine, roles, employees = _firm()
        engine.watch(roles, employees)
        asyncio.run(engine.get_user_context("m1"))
        asyncio.run(engine.get_user_context("e1"))
        roles.assign("e1", "manager")
        assert engine.get_cache_stats().entries == ("user:m1",)

    def test_watch_via_fixture(self, policy_engine: PolicyEngine, employee_directory: InMemoryEmployeeDirectory) -> None:
        employee_directory.upsert(Employee("u1"))
        asyncio.run(policy_engine.get_user_context("u1"))
        employee_directory.remove("u1")
        assert policy_engine.get_cache_stats().size == 0


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestFromSettings:
    def test_fields_and_ttl(self) -> None:
        clock = FakeClock()
        settings = PolicySettings(
            context_cache_ttl_seconds=60,
            owner_field="createdBy",
            assignee_fields=["lawyerId"],
        )
        directory = RecordingEmployeeDirectory(InMemoryEmployeeDirectory([Employee("u1")]))
        engine = PolicyEngine.from_settings(
            settings,
            roles=InMemoryRoleDirectory(),
            grants=InMemoryGrantCatalogue(),
            employees=directory,
            clock=clock,
        )
        assert engine.fields_for("cases") == ScopeFields("createdBy", ("lawyerId",), "tenantId")

        asyncio.run(engine.get_user_context("u1"))
        clock.advance(seconds=59)
        asyncio.run(engine.get_user_context("u1"))
        assert directory.calls == 1
        clock.advance(seconds=1)
        asyncio.run(engine.get_user_context("u1"))
        assert directory.calls == 2


# ---------------------------------------------------------------------------
# require_permission
# ---------------------------------------------------------------------------


class TestRequirePermission:
    def test_allowed_call_passes_through(self) -> None:
        engine, _, _ = _firm()

        @require_permission(engine, "cases", Action.DELETE)
        async def delete_case(user_id: str, case_id: str) -> str:
            return f"deleted {case_id}"

        assert asyncio.run(delete_case("m1", "c-1")) == "deleted c-1"
        assert delete_case.__name__ == "delete_case"

    def test_denied_call_raises(self) -> None:
        engine, _, _ = _firm()
        calls: list[str] = []

        @require_permission(engine, "cases", Action.DELETE)
        async def delete_case(user_id: str, case_id: str) -> None:
            calls.append(case_id)

        with pytest.raises(ForbiddenError) as exc_info:
            asyncio.run(delete_case(user_id="e1", case_id="c-1"))
        assert exc_info.value.message == REASON_NO_MATCH
        assert (exc_info.value.resource, exc_info.value.action) == ("cases", "delete")
        assert calls == []

    def test_custom_user_argument(self) -> None:
        engine, _, _ = _firm()

        @require_permission(engine, "system", "admin", user_arg="actor")
        async def change_settings(actor: str) -> bool:
            return True

        assert asyncio.run(change_settings(actor="partner"))
        with pytest.raises(ForbiddenError):
            asyncio.run(change_settings(actor="m1"))

    def test_missing_user_raises(self) -> None:
        engine, _, _ = _firm()

        @require_permission(engine, "cases", Action.READ)
        async def list_cases(user_id: str | None = None) -> list:
            return []

        with pytest.raises(ForbiddenError, match="No user"):
            asyncio.run(list_cases())
