"""Domain errors — invalid authorization data and rule violations."""

from __future__ import annotations

from typing import Any

from lexscope.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules."""

    default_code = "validation_error"


class MalformedGrantError(DomainError):
    """A permission grant carries a value outside its closed vocabulary.

    The grant store is expected to only hand out grants whose ``scope``,
    ``effect`` and ``action`` belong to the known enums.
    """

    default_code = "malformed_grant"

    def __init__(
        self,
        grant_id: str,
        field: str,
        value: Any,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Grant '{grant_id}' has invalid {field} {value!r}",
            detail={"grant_id": grant_id, "field": field, "value": value},
            **kwargs,
        )
        self.grant_id = grant_id
        self.field = field
        self.value = value


__all__ = ["DomainError", "MalformedGrantError", "ValidationError"]
