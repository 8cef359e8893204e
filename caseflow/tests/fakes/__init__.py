"""Fake implementations of core ports for testing.

These in-memory implementations allow engine logic to be tested
without writing to a terminal:

- FakeDisplayPort: Captured displays for assertion
"""

from .display import FakeDisplayPort

__all__ = [
    "FakeDisplayPort",
]
