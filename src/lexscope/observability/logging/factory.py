"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog


def _pre_chain() -> list[Any]:
    # applied to structlog events and to foreign stdlib records alike
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


class JsonLoggerFactory:
    """Route structlog through stdlib logging and render one JSON object per line.

    Records from other libraries (SQLAlchemy, asyncio) go through the same
    pre-chain, so every line carries ``level``, ``logger`` and ``timestamp``,
    plus any contextvars bound at the call site, such as the
    ``user_id``/``resource`` pair bound by the secure access facade.
    """

    @staticmethod
    def configure(level: int = logging.INFO, stream: IO[str] | None = None) -> None:
        pre_chain = _pre_chain()
        structlog.configure(
            processors=[
                *pre_chain,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=pre_chain,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )
        root = logging.getLogger()
        root.handlers[:] = [handler]
        root.setLevel(level)


__all__ = ["JsonLoggerFactory"]
