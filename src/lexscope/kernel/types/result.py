"""Result[T, E] – explicit success/failure values for internal policy steps.

Resolution and evaluation return these so a failure can be inspected in
tests; the engine's public operations collapse ``Err`` into a fail-closed
default with :meth:`unwrap_or_else`.
"""

from __future__ import annotations

import dataclasses
from typing import Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or_else(self, fallback: Callable[[Exception], T]) -> T:  # noqa: ARG002
        return self.value

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        return Ok(func(self.value))


@dataclasses.dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self.error

    def unwrap_or_else(self, fallback: Callable[[E], T]) -> T:
        return fallback(self.error)

    def map(self, func: Callable[[T], U]) -> "Err[E]":  # noqa: ARG002
        return self


type Result[T, E] = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
