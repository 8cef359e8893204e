"""Core domain logic for the caseflow test engine.

This package contains zero external dependencies and represents
the pure engine logic. Rendering of results is handled by the
adapters package.
"""

from .checkers import is_deep_equal, is_equal, is_equal_disordered, pass_
from .class_engine import ClassTestEngine, OperationNotFoundError
from .engine import TestEngine, build_cases
from .models import (
    Checker,
    ClassRunResult,
    InstanceCheck,
    InstanceRoundResult,
    RunResult,
    TestCase,
    default_ider,
)
from .suite import ClassSuite, InstanceRound, run_class_suite

__all__ = [
    "Checker",
    "ClassRunResult",
    "ClassSuite",
    "ClassTestEngine",
    "InstanceCheck",
    "InstanceRound",
    "InstanceRoundResult",
    "OperationNotFoundError",
    "RunResult",
    "TestCase",
    "TestEngine",
    "build_cases",
    "default_ider",
    "is_deep_equal",
    "is_equal",
    "is_equal_disordered",
    "pass_",
    "run_class_suite",
]
