"""Scope Filter Builder and Applier.

A scope filter is an ordered list of :class:`ScopeFilter` predicates. An
empty list means "unrestricted"; otherwise a record is kept when **any**
predicate matches. The OR is deliberate: ownership may live under different
field names depending on the entity type, so every conventional name is
tried. It also means a record passes when an unrelated field with one of
those names happens to hold a matching value; use :class:`ScopeFields` to
narrow the field set per resource.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping, Sequence, TypeVar

from lexscope.application.policy.context import ScopeContext
from lexscope.kernel.security import Scope
from lexscope.observability.logging import get_logger

R = TypeVar("R")

_log = get_logger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)
_MISSING = object()


class FilterOperator(str, Enum):
    EQ = "eq"
    IN = "in"
    NE = "ne"
    INCLUDES = "includes"


@dataclasses.dataclass(frozen=True)
class ScopeFilter:
    field: str
    op: FilterOperator
    value: Any


@dataclasses.dataclass(frozen=True)
class ScopeFields:
    """Field names a resource uses for ownership and tenancy.

    ``owner_field`` is compared with the user id, ``assignee_fields`` with the
    employee id (or the team ids for team scope).
    """

    owner_field: str | None = "ownerId"
    assignee_fields: tuple[str, ...] = ("assigned_to", "assignedToId")
    tenant_field: str | None = "tenantId"


DEFAULT_SCOPE_FIELDS = ScopeFields()


def build_scope_filter(
    resource: str,
    scope: Scope | str,
    context: ScopeContext,
    fields: ScopeFields | None = None,
) -> list[ScopeFilter]:
    """Translate *scope* for *context* into predicates.

    Never raises: an unknown scope value is logged and treated as ``own``.
    """
    fields = fields or DEFAULT_SCOPE_FIELDS
    try:
        scope = Scope(scope)
    except ValueError:
        _log.error("policy.filter.unknown_scope", resource=resource, scope=repr(scope))
        scope = Scope.OWN

    if scope is Scope.OWN:
        filters = []
        if fields.owner_field:
            filters.append(ScopeFilter(fields.owner_field, FilterOperator.EQ, context.user_id))
        filters.extend(
            ScopeFilter(name, FilterOperator.EQ, context.employee_id)
            for name in fields.assignee_fields
        )
        return filters

    if scope is Scope.TEAM:
        team_ids = context.team_ids
        names = [fields.owner_field] if fields.owner_field else []
        names.extend(fields.assignee_fields)
        return [ScopeFilter(name, FilterOperator.IN, team_ids) for name in names]

    if context.tenant_id and fields.tenant_field:
        return [ScopeFilter(fields.tenant_field, FilterOperator.EQ, context.tenant_id)]
    return []


def _field_value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, _MISSING)
    return getattr(record, name, _MISSING)


def _contains(collection: Any, item: Any) -> bool:
    try:
        return item in collection
    except TypeError:  # unhashable item probed against a set
        return False


def matches(record: Any, scope_filter: ScopeFilter) -> bool:
    value = _field_value(record, scope_filter.field)
    op = scope_filter.op
    if op is FilterOperator.EQ:
        return value is not _MISSING and value == scope_filter.value
    if op is FilterOperator.NE:
        return value is _MISSING or value != scope_filter.value
    if op is FilterOperator.IN:
        return (
            value is not _MISSING
            and isinstance(scope_filter.value, _COLLECTION_TYPES)
            and _contains(scope_filter.value, value)
        )
    if op is FilterOperator.INCLUDES:
        return isinstance(value, _COLLECTION_TYPES) and _contains(value, scope_filter.value)
    return False


def apply_scope_filter(records: Sequence[R], filters: Sequence[ScopeFilter]) -> Sequence[R]:
    """Keep records matching at least one filter.

    With no filters the input sequence itself is returned unchanged.
    """
    if not filters:
        return records
    return [record for record in records if any(matches(record, f) for f in filters)]


__all__ = [
    "DEFAULT_SCOPE_FIELDS",
    "FilterOperator",
    "ScopeFields",
    "ScopeFilter",
    "apply_scope_filter",
    "build_scope_filter",
    "matches",
]
