"""Kernel security – closed vocabularies for grants: Action, Effect, Scope."""
from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    ADMIN = "admin"


class Effect(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class Scope(str, Enum):
    """Breadth of record visibility, totally ordered ``own < team < org``."""

    OWN = "own"
    TEAM = "team"
    ORG = "org"

    @property
    def strength(self) -> int:
        return _SCOPE_ORDER.index(self)

    def is_stronger_than(self, other: "Scope") -> bool:
        return self.strength > other.strength


_SCOPE_ORDER: tuple[Scope, ...] = (Scope.OWN, Scope.TEAM, Scope.ORG)


__all__ = ["Action", "Effect", "Scope"]
