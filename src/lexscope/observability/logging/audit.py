"""Observability – AuditLogger.

A dedicated structured-log sink for authorization decisions taken by the
secure access facade.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from lexscope.observability.logging.processors import get_logger


class AuditOutcome(str, Enum):
    """Standardised audit outcomes."""

    SUCCESS = "success"
    DENIED = "denied"
    ERROR = "error"


class AuditLogger:
    """Structured-log sink for security-sensitive access.

    All audit entries are emitted at ``WARNING`` level so they pass through
    even restrictive log-level filters.

    Parameters
    ----------
    service:
        Logical service name injected into every audit entry.
    logger:
        Underlying structlog logger. Defaults to ``get_logger("audit")``.
    """

    def __init__(self, service: str = "lexscope", logger: Any = None) -> None:
        self._service = service
        self._log = logger if logger is not None else get_logger("audit")

    def log_access(
        self,
        user_id: str,
        resource: str,
        action: str,
        outcome: AuditOutcome | str = AuditOutcome.SUCCESS,
        **extra: Any,
    ) -> None:
        """Record an access decision.

        Parameters
        ----------
        user_id:
            The user whose request was evaluated.
        resource:
            The protected collection (e.g. ``"cases"``), optionally with an
            item id (``"cases:42"``).
        action:
            The evaluated action (e.g. ``"read"``).
        outcome:
            :class:`AuditOutcome` or plain string.
        **extra:
            Additional structured fields (scope, returned count, ...).
        """
        self._log.warning(
            "audit.access",
            service=self._service,
            user_id=user_id,
            resource=resource,
            action=action,
            outcome=outcome.value if isinstance(outcome, AuditOutcome) else str(outcome),
            timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
            **extra,
        )


__all__ = ["AuditLogger", "AuditOutcome"]
