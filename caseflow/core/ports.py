"""Port interfaces for the caseflow test engine.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - DisplayPort: Render finished case records

2. **Driving Ports** (callers drive the core)
   - TestRunnerPort: Run cases against a single callable
   - ClassTestRunnerPort: Run construction cases and instance rounds
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

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


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class DisplayPort(ABC):
    """Port for rendering the outcome of a run.

    Adapters receive finished cases (each with ``id`` and
    ``error_message`` set) and decide how to present them. The core only
    ever hands over records; it never interprets rendering concerns.
    The adapter owns its mount point (stream, file, widget).
    """

    @abstractmethod
    async def display(self, cases: Sequence[TestCase], title: str) -> bool:
        """Render a pass/fail summary of the given cases.

        Args:
            cases: Finished cases in run order.
            title: Heading for the summary.

        Returns:
            True if every case passed.

        Raises:
            Exception: If the output channel is unavailable.
        """


# ============================================================================
# DRIVING PORTS (Callers invoke the core)
# ============================================================================


class TestRunnerPort(ABC):
    """Port for running cases against one callable.

    Implementations live in the core.
    """

    __test__ = False

    @abstractmethod
    async def run_test(
        self,
        case: TestCase,
        checker: Checker,
        expect_exception: bool = False,
        index: int | None = None,
    ) -> Message:
        """Run a single case.

        Args:
            case: Case whose input is spread into the callable.
            checker: Decides pass/fail for the outcome.
            expect_exception: Whether the callable is expected to raise.
            index: Position of the case in its batch, passed to the checker.

        Returns:
            None on success, a failure message otherwise. Never raises
            for failures of the callable or the checker.
        """

    @abstractmethod
    async def run_tests(
        self,
        cases: list[TestCase],
        checker: Checker,
        expect_exception: bool = False,
        ider: Ider = default_ider,
    ) -> RunResult:
        """Run a batch of cases and record outcomes on them.

        Args:
            cases: Cases to run; mutated in place with ids and outcomes.
            checker: Decides pass/fail for each outcome.
            expect_exception: Whether the callable is expected to raise.
            ider: Derives an id from the input of cases lacking one.

        Returns:
            RunResult with one message per case, in case order.
        """

    @abstractmethod
    def count_success(self) -> int:
        """Count passed cases of the last run (0 before any run)."""


class ClassTestRunnerPort(TestRunnerPort):
    """Port for testing a class: its construction and its instances."""

    @abstractmethod
    async def run_instance_tests(
        self,
        name: str,
        checks: Sequence[InstanceCheck],
        checker: Checker,
        expect_exception: bool = False,
        parallelize: bool | None = None,
    ) -> InstanceRoundResult:
        """Test a named operation against every constructed instance.

        Args:
            name: Operation name, resolved through the engine's operations.
            checks: Inputs paired with one expected value per instance.
            checker: Decides pass/fail for each outcome.
            expect_exception: Whether the operation is expected to raise.
            parallelize: Scheduling of cases within each instance; None
                uses the engine default.

        Returns:
            InstanceRoundResult with one RunResult per instance.

        Raises:
            OperationNotFoundError: If the operation cannot be resolved.
            ValueError: If a check has fewer expecteds than instances.
        """
