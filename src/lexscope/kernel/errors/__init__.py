"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   └── MalformedGrantError
    ├── ApplicationError     (application.py)
    │   └── ForbiddenError
    └── InfrastructureError  (infrastructure.py)
        └── LookupFailure
"""

from lexscope.kernel.errors.application import ApplicationError, ForbiddenError
from lexscope.kernel.errors.base import BaseError
from lexscope.kernel.errors.domain import (
    DomainError,
    MalformedGrantError,
    ValidationError,
)
from lexscope.kernel.errors.infrastructure import InfrastructureError, LookupFailure

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
