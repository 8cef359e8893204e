"""Declarative class suites.

A ClassSuite describes the whole test of a class up front: the
construction cases and every instance round to run afterwards. The
runner folds each round into the accumulated ClassRunResult and passes
it forward, so no history has to be read back off an engine.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .class_engine import ClassTestEngine
from .models import Checker, ClassRunResult, Ider, InstanceCheck, TestCase, default_ider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstanceRound:
    """One named operation to test against every constructed instance."""

    name: str
    checks: tuple[InstanceCheck, ...]
    checker: Checker
    expect_exception: bool = False
    parallelize: bool | None = None

    def __post_init__(self) -> None:
        """Validate the round and freeze its checks."""
        if not self.name or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.checks, tuple):
            object.__setattr__(self, "checks", tuple(self.checks))


@dataclass(frozen=True)
class ClassSuite:
    """Construction cases for a class plus the instance rounds to follow."""

    constructor: Callable[..., Any]
    cases: tuple[TestCase, ...]
    checker: Checker
    operations: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    rounds: tuple[InstanceRound, ...] = ()
    expect_exception: bool = False
    parallelize: bool = False
    ider: Ider = default_ider

    def __post_init__(self) -> None:
        """Convert collections to immutable forms."""
        if not isinstance(self.cases, tuple):
            object.__setattr__(self, "cases", tuple(self.cases))
        if not isinstance(self.rounds, tuple):
            object.__setattr__(self, "rounds", tuple(self.rounds))
        if isinstance(self.operations, dict):
            object.__setattr__(self, "operations", MappingProxyType(self.operations))


async def _run_rounds(
    engine: ClassTestEngine,
    rounds: Sequence[InstanceRound],
    result: ClassRunResult,
) -> ClassRunResult:
    if not rounds:
        return result
    current, rest = rounds[0], rounds[1:]
    round_result = await engine.run_instance_tests(
        current.name,
        current.checks,
        current.checker,
        current.expect_exception,
        current.parallelize,
    )
    return await _run_rounds(engine, rest, result.with_round(round_result))


async def run_class_suite(
    suite: ClassSuite, engine: ClassTestEngine | None = None
) -> ClassRunResult:
    """Run construction and then every instance round of a suite.

    Args:
        suite: What to run.
        engine: Engine to run on. A fresh one is built from the suite
            when omitted; pass one in to display its records afterwards.

    Returns:
        ClassRunResult with the construction run, the tracked instances
        and one InstanceRoundResult per round, in suite order.

    Raises:
        OperationNotFoundError: If a round names an unknown operation.
        ValueError: If a round's checks have fewer expecteds than instances.
    """
    if engine is None:
        engine = ClassTestEngine(suite.constructor, suite.parallelize, suite.operations)

    construction = await engine.run_tests(
        list(suite.cases), suite.checker, suite.expect_exception, suite.ider
    )
    result = ClassRunResult(
        construction=construction,
        instances=tuple(engine.instances),
    )
    logger.debug(f"{engine.name}: running {len(suite.rounds)} instance round(s)")
    return await _run_rounds(engine, suite.rounds, result)
