"""Observability – structured logging helpers."""
from lexscope.observability.logging.audit import AuditLogger, AuditOutcome
from lexscope.observability.logging.factory import JsonLoggerFactory
from lexscope.observability.logging.processors import get_logger

__all__ = [
    "AuditLogger",
    "AuditOutcome",
    "JsonLoggerFactory",
    "get_logger",
]
