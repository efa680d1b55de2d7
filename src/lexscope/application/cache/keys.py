"""Application cache – key scheme for cached policy data."""
from __future__ import annotations

USER_CONTEXT_PREFIX = "user"


def user_context_key(user_id: str) -> str:
    """``user:<id>``, the slot holding one user's resolved scope context."""
    return f"{USER_CONTEXT_PREFIX}:{user_id}"


__all__ = ["USER_CONTEXT_PREFIX", "user_context_key"]
