"""Observability – logging and audit."""
from lexscope.observability.logging import AuditLogger, AuditOutcome, JsonLoggerFactory, get_logger

__all__ = ["AuditLogger", "AuditOutcome", "JsonLoggerFactory", "get_logger"]
