"""Testing generators – Hypothesis strategies."""
from lexscope.testing.generators.strategies import (
    grant_strategy,
    hierarchy_strategy,
    record_strategy,
)

__all__ = ["grant_strategy", "hierarchy_strategy", "record_strategy"]
