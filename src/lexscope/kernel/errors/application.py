"""Application-layer errors."""

from __future__ import annotations

from typing import Any

from lexscope.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ForbiddenError(ApplicationError):
    """Principal lacks the permission required by a guarded handler."""

    default_code = "forbidden"

    def __init__(
        self,
        message: str = "Access denied",
        *,
        resource: str | None = None,
        action: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.resource = resource
        self.action = action


__all__ = ["ApplicationError", "ForbiddenError"]
