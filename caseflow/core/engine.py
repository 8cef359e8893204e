"""Test engine: runs cases against a single callable.

The engine invokes the callable with each case's input, hands the
outcome to a checker and records the resulting message on the case.
Failures of the callable and of the checker are converted into
messages; nothing derived from Exception escapes a run.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from . import checkers
from .models import Checker, Ider, Message, RunResult, TestCase, default_ider
from .ports import DisplayPort, TestRunnerPort

logger = logging.getLogger(__name__)


def describe_exception(error: BaseException) -> str:
    """Render an exception as a failure message."""
    return f"{type(error).__name__}: {error}"


def callable_name(func: Callable[..., Any]) -> str:
    """Best-effort display name for a callable."""
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if name is None:
        inner = getattr(func, "func", None)  # functools.partial
        if inner is not None:
            return callable_name(inner)
        return type(func).__name__
    return name


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


def build_cases(
    inputs: Sequence[Sequence[Any]],
    expecteds: Sequence[Any],
    ids: Sequence[str] | None = None,
    raise_expecteds: Sequence[Any] = (),
) -> list[TestCase]:
    """Pair parallel sequences of inputs and expected values into cases.

    The first ``len(expecteds)`` inputs expect a return value. The
    remaining inputs are paired with ``raise_expecteds`` and expect the
    callable to raise.

    Args:
        inputs: Argument tuples, one per case.
        expecteds: Expected return values, one per leading input.
        ids: Optional explicit ids, one per case.
        raise_expecteds: Values the checker compares the raised
            exception against, one per trailing input.

    Returns:
        List of fresh, not yet run cases.

    Raises:
        ValueError: If the sequences differ in length.
    """
    expected_count = len(expecteds) + len(raise_expecteds)
    if len(inputs) != expected_count:
        raise ValueError(
            f"got {len(inputs)} inputs but {expected_count} expected values"
        )
    if ids is not None and len(ids) != len(inputs):
        raise ValueError(f"got {len(inputs)} inputs but {len(ids)} ids")

    outcomes = [(expected, False) for expected in expecteds]
    outcomes += [(expected, True) for expected in raise_expecteds]
    return [
        TestCase(
            input=tuple(input),
            expected=expected,
            id=ids[i] if ids is not None else None,
            expect_exception=raises,
        )
        for i, (input, (expected, raises)) in enumerate(zip(inputs, outcomes))
    ]


class TestEngine(TestRunnerPort):
    """Runs cases against one callable.

    The callable may be synchronous or return an awaitable. With
    ``parallelize`` off, each case (callable and checker) finishes before
    the next one starts, which is required when the callable carries
    state across calls. With it on, all cases are started at once and
    only their results are joined.
    """

    __test__ = False

    is_equal = staticmethod(checkers.is_equal)
    is_deep_equal = staticmethod(checkers.is_deep_equal)
    is_equal_disordered = staticmethod(checkers.is_equal_disordered)
    pass_ = staticmethod(checkers.pass_)

    def __init__(
        self,
        func: Callable[..., Any | Awaitable[Any]],
        parallelize: bool = False,
        name: str | None = None,
    ):
        """Initialize the engine.

        Args:
            func: Callable under test.
            parallelize: Run the cases of a batch concurrently.
            name: Title used when displaying results. Defaults to the
                callable's qualified name.
        """
        self.func = func
        self._parallelize = parallelize
        self.name = name or callable_name(func)
        self.last_cases: list[TestCase] = []
        self.last_result: RunResult | None = None

    @property
    def parallelize(self) -> bool:
        return self._parallelize

    async def run_test(
        self,
        case: TestCase,
        checker: Checker,
        expect_exception: bool = False,
        index: int | None = None,
    ) -> Message:
        """Run one case and return its message."""
        try:
            actual = await resolve(self.func(*case.input))
        except Exception as error:
            if not expect_exception:
                return describe_exception(error)
            return await self._check(checker, error, case, index)

        if expect_exception:
            return f"Expected exception but received: {actual}"
        return await self._check(checker, actual, case, index)

    async def _check(
        self, checker: Checker, actual: Any, case: TestCase, index: int | None
    ) -> Message:
        """Apply the checker, converting its own failures into messages."""
        try:
            message = await resolve(checker(actual, case.expected, case.input, index))
        except Exception as error:
            logger.warning(
                f"Checker {callable_name(checker)} raised on case {case.id} "
                f"of {self.name}: {error}",
                exc_info=True,
            )
            return describe_exception(error)

        if message is not None and not isinstance(message, str):
            return f"Checker returned non-message value: {message!r}"
        return message

    async def run_tests(
        self,
        cases: list[TestCase],
        checker: Checker,
        expect_exception: bool = False,
        ider: Ider = default_ider,
    ) -> RunResult:
        """Run every case and record the outcomes on the cases.

        Returns:
            RunResult whose messages follow case order in both
            scheduling modes.
        """
        for case in cases:
            if case.id is None:
                case.id = ider(case.input)

        logger.info(
            f"Running {len(cases)} case(s) against {self.name} "
            f"({'concurrent' if self.parallelize else 'sequential'})"
        )

        if self.parallelize:
            tasks = [
                asyncio.ensure_future(
                    self.run_test(case, checker, expect_exception or case.expect_exception, i)
                )
                for i, case in enumerate(cases)
            ]
            messages = list(await asyncio.gather(*tasks))
        else:
            messages = []
            for i, case in enumerate(cases):
                messages.append(
                    await self.run_test(case, checker, expect_exception or case.expect_exception, i)
                )

        for case, message in zip(cases, messages):
            case.record_outcome(message)
            if message is None:
                logger.debug(f"{self.name} ({case.id}): passed")
            else:
                logger.debug(f"{self.name} ({case.id}): {message}")

        self.last_cases = cases
        self.last_result = RunResult(
            title=self.name,
            cases=tuple(cases),
            messages=tuple(messages),
        )
        logger.info(
            f"{self.name}: {self.last_result.success_count} of "
            f"{self.last_result.total} case(s) passed"
        )
        return self.last_result

    def count_success(self) -> int:
        """Count passed cases of the last run."""
        return sum(1 for case in self.last_cases if case.passed)

    async def display_last_cases(
        self, display: DisplayPort, title: str | None = None
    ) -> bool:
        """Hand the last run to a display adapter.

        Returns:
            True if every case of the last run passed.
        """
        return await display.display(self.last_cases, title or self.name)
