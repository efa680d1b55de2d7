"""Kernel – framework-agnostic building blocks of the policy engine."""

from lexscope.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    ForbiddenError,
    InfrastructureError,
    LookupFailure,
    MalformedGrantError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "ForbiddenError",
    "InfrastructureError",
    "LookupFailure",
    "MalformedGrantError",
    "ValidationError",
]
