"""Root of the lexscope error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Error with a stable machine-readable ``code``.

    ``detail`` carries structured context. :meth:`log_fields` flattens code,
    message, detail and cause into keyword arguments for a structlog call::

        _log.warning("policy.context.lookup_failed", **exc.log_fields())
    """

    default_code: str = "error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code}: {self.message!r})"

    def log_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {"error_code": self.code, "error": self.message, **self.detail}
        if self.cause is not None:
            fields["cause"] = repr(self.cause)
        return fields


__all__ = ["BaseError"]
