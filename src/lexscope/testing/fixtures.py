"""Testing fixtures – pytest fixtures for the policy engine.

Enable in a ``conftest.py``::

    pytest_plugins = ["lexscope.testing.fixtures"]
"""
from __future__ import annotations

import pytest

from lexscope.application.policy import PolicyEngine
from lexscope.kernel.security import (
    InMemoryEmployeeDirectory,
    InMemoryGrantCatalogue,
    InMemoryRoleDirectory,
)
from lexscope.kernel.time import FrozenClock
from lexscope.testing.fakes import FakeClock, FakePolicyEngine


@pytest.fixture
def fake_clock() -> FrozenClock:
    """FakeClock pinned to 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def employee_directory() -> InMemoryEmployeeDirectory:
    return InMemoryEmployeeDirectory()


@pytest.fixture
def grant_catalogue() -> InMemoryGrantCatalogue:
    return InMemoryGrantCatalogue()


@pytest.fixture
def role_directory(fake_clock: FrozenClock) -> InMemoryRoleDirectory:
    return InMemoryRoleDirectory(clock=fake_clock)


@pytest.fixture
def policy_engine(
    role_directory: InMemoryRoleDirectory,
    grant_catalogue: InMemoryGrantCatalogue,
    employee_directory: InMemoryEmployeeDirectory,
    fake_clock: FrozenClock,
) -> PolicyEngine:
    """Engine over the three in-memory stores, watching them for changes."""
    engine = PolicyEngine(
        roles=role_directory,
        grants=grant_catalogue,
        employees=employee_directory,
        clock=fake_clock,
    )
    engine.watch(role_directory, employee_directory)
    return engine


@pytest.fixture
def fake_policy_engine(employee_directory: InMemoryEmployeeDirectory) -> FakePolicyEngine:
    return FakePolicyEngine(employee_directory)


__all__ = [
    "employee_directory",
    "fake_clock",
    "fake_policy_engine",
    "grant_catalogue",
    "policy_engine",
    "role_directory",
]
