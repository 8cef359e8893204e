"""Class test engine: tests a constructor and the instances it produces.

Construction is tested like any other callable. Every instance whose
construction check passes is tracked, and later instance rounds test a
named operation against each tracked instance through one nested
TestEngine per instance.

Instances are tracked only for successful constructions, with no
placeholder for failures. ``expecteds[i]`` of an instance check is
therefore matched against the i-th *successful* construction, which is
not the i-th construction case once any construction fails.
"""

import asyncio
import functools
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .engine import TestEngine, callable_name, resolve
from .models import (
    Checker,
    Ider,
    InstanceCheck,
    InstanceRoundResult,
    Message,
    RunResult,
    TestCase,
    default_ider,
)
from .ports import ClassTestRunnerPort, DisplayPort

logger = logging.getLogger(__name__)


class OperationNotFoundError(LookupError):
    """An instance round named an operation the engine cannot resolve."""


class ClassTestEngine(TestEngine, ClassTestRunnerPort):
    """Tests construction of a class and operations of its instances.

    Operations are looked up in an explicit mapping from name to an
    unbound function, e.g. ``{"push": Stack.push}``, and bound to each
    instance with ``functools.partial``.
    """

    def __init__(
        self,
        constructor: Callable[..., Any],
        parallelize: bool = False,
        operations: Mapping[str, Callable[..., Any]] | None = None,
        instance_parallelize: bool = False,
    ):
        """Initialize the class engine.

        Args:
            constructor: Class (or factory) under test.
            parallelize: Run construction cases concurrently, and run
                instance rounds concurrently across instances.
            operations: Operation name -> unbound function taking the
                instance as first argument.
            instance_parallelize: Default scheduling of the cases within
                each instance, for rounds that do not specify one.
        """
        super().__init__(
            lambda *args: constructor(*args),
            parallelize,
            name=callable_name(constructor),
        )
        self.constructor = constructor
        self.operations: dict[str, Callable[..., Any]] = dict(operations or {})
        self.instance_parallelize = instance_parallelize
        self.instances: list[Any] = []
        self.instance_cases: list[TestCase] = []
        self.last_function_tests: dict[str, list[TestEngine]] = {}

    async def run_tests(
        self,
        cases: list[TestCase],
        checker: Checker,
        expect_exception: bool = False,
        ider: Ider = default_ider,
    ) -> RunResult:
        """Run construction cases and track the instances that pass.

        Previously tracked instances and instance rounds are discarded.
        """
        self.instances = []
        self.instance_cases = []
        self.last_function_tests = {}
        constructed: dict[int, Any] = {}

        async def construction_checker(
            actual: Any, expected: Any, input: tuple[Any, ...], index: int | None
        ) -> Message:
            message = await resolve(checker(actual, expected, input, index))
            if (
                message is None
                and index is not None
                and not (expect_exception or cases[index].expect_exception)
            ):
                constructed[index] = actual
            return message

        result = await super().run_tests(cases, construction_checker, expect_exception, ider)

        # Completion order is arbitrary in concurrent mode; keep case order
        for index in sorted(constructed):
            if cases[index].passed:
                self.instances.append(constructed[index])
                self.instance_cases.append(cases[index])

        logger.info(
            f"{self.name}: tracking {len(self.instances)} instance(s) "
            f"from {len(cases)} construction case(s)"
        )
        return result

    def register_operation(self, name: str, operation: Callable[..., Any]) -> None:
        """Make an operation available to instance rounds under ``name``."""
        self.operations[name] = operation

    def _resolve_operation(self, name: str) -> Callable[..., Any]:
        operation = self.operations.get(name)
        if operation is None or not callable(operation):
            raise OperationNotFoundError(
                f"{name} is not an operation of {self.name} "
                f"(known: {', '.join(sorted(self.operations)) or 'none'})"
            )
        return operation

    def _instance_cases(
        self, checks: Sequence[InstanceCheck], index: int
    ) -> list[TestCase]:
        return [
            TestCase(input=check.input, expected=check.expecteds[index])
            for check in checks
        ]

    async def run_instance_tests(
        self,
        name: str,
        checks: Sequence[InstanceCheck],
        checker: Checker,
        expect_exception: bool = False,
        parallelize: bool | None = None,
    ) -> InstanceRoundResult:
        """Test operation ``name`` against every tracked instance.

        Instances are scheduled by this engine's ``parallelize``; the
        cases within each instance by the ``parallelize`` argument, or
        ``instance_parallelize`` when it is None.

        Raises:
            OperationNotFoundError: If ``name`` is not a known operation.
            ValueError: If a check has fewer expecteds than instances.
        """
        operation = self._resolve_operation(name)
        if parallelize is None:
            parallelize = self.instance_parallelize

        for check in checks:
            if len(check.expecteds) < len(self.instances):
                raise ValueError(
                    f"check {check.input!r} of {name} provides "
                    f"{len(check.expecteds)} expected value(s) for "
                    f"{len(self.instances)} instance(s)"
                )

        if self.last_cases and len(self.instances) < len(self.last_cases):
            logger.warning(
                f"{self.name}.{name}: {len(self.last_cases) - len(self.instances)} "
                f"construction(s) failed; expected values are matched against "
                f"successful constructions only"
            )

        engines = [
            TestEngine(
                functools.partial(operation, instance),
                parallelize,
                name=f"{name} ({self.instance_cases[i].id})",
            )
            for i, instance in enumerate(self.instances)
        ]
        self.last_function_tests[name] = engines

        if self.parallelize:
            runs = list(
                await asyncio.gather(
                    *(
                        engine.run_tests(self._instance_cases(checks, i), checker, expect_exception)
                        for i, engine in enumerate(engines)
                    )
                )
            )
        else:
            runs = []
            for i, engine in enumerate(engines):
                runs.append(
                    await engine.run_tests(self._instance_cases(checks, i), checker, expect_exception)
                )

        round_result = InstanceRoundResult(name=name, runs=tuple(runs))
        logger.info(
            f"{self.name}.{name}: {sum(run.success_count for run in runs)} of "
            f"{sum(run.total for run in runs)} case(s) passed across "
            f"{len(runs)} instance(s)"
        )
        return round_result

    async def display_last_cases(
        self, display: DisplayPort, title: str | None = None
    ) -> bool:
        """Display construction cases, then every recorded instance round.

        Returns:
            True if construction and every instance round passed.
        """
        all_passed = await super().display_last_cases(display, title)
        for engines in self.last_function_tests.values():
            for engine in engines:
                passed = await engine.display_last_cases(display)
                all_passed = all_passed and passed
        return all_passed
