"""Infrastructure errors — failures of the stores feeding the policy engine."""

from __future__ import annotations

from typing import Any

from lexscope.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class LookupFailure(InfrastructureError):
    """Employee, grant or role data is unavailable or malformed.

    Never escapes the public policy operations: it is collapsed into a
    fail-closed default at the engine boundary.
    """

    default_code = "lookup_failure"

    def __init__(
        self,
        source: str,
        message: str | None = None,
        *,
        user_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Lookup in '{source}' failed", **kwargs)
        self.source = source
        self.user_id = user_id
        if user_id is not None:
            self.detail.setdefault("user_id", user_id)


__all__ = ["InfrastructureError", "LookupFailure"]
