"""Kernel value types."""

from lexscope.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
