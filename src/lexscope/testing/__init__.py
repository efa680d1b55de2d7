"""Testing utilities – fakes, pytest fixtures and Hypothesis strategies.

``lexscope.testing.generators`` needs ``hypothesis`` and
``lexscope.testing.fixtures`` needs ``pytest``; both ship with the
``test`` extra.
"""
from lexscope.testing.fakes import (
    FailingStore,
    FakeClock,
    FakePolicyEngine,
    RecordingEmployeeDirectory,
)

__all__ = [
    "FailingStore",
    "FakeClock",
    "FakePolicyEngine",
    "RecordingEmployeeDirectory",
]
