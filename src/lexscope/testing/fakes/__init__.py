"""Testing fakes – in-memory doubles for the policy engine and its stores."""
from lexscope.kernel.time import FrozenClock
from lexscope.testing.fakes.clock import FakeClock
from lexscope.testing.fakes.policy import FakePolicyEngine
from lexscope.testing.fakes.stores import FailingStore, RecordingEmployeeDirectory

__all__ = [
    "FailingStore",
    "FakeClock",
    "FakePolicyEngine",
    "FrozenClock",
    "RecordingEmployeeDirectory",
]
