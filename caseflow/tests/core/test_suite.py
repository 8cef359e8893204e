"""Unit tests for declarative class suites."""

import pytest

from caseflow.core.checkers import is_equal, is_equal_disordered
from caseflow.core.class_engine import ClassTestEngine, OperationNotFoundError
from caseflow.core.engine import build_cases
from caseflow.core.models import ClassRunResult, InstanceCheck
from caseflow.core.suite import ClassSuite, InstanceRound, run_class_suite
from caseflow.tests.fakes import FakeDisplayPort


class Bag:
    """Unordered collection used as the class under test."""

    def __init__(self, *items: str):
        self.items = list(items)

    def add(self, item: str) -> int:
        self.items.append(item)
        return len(self.items)

    def contents(self) -> list[str]:
        return list(self.items)


def size_checker(actual, expected, input, index):
    return is_equal(len(actual.items), expected)


@pytest.fixture
def suite() -> ClassSuite:
    """Create a suite with two construction cases and two rounds."""
    return ClassSuite(
        constructor=Bag,
        cases=build_cases([("a",), ("a", "b")], [1, 2]),
        checker=size_checker,
        operations={"add": Bag.add, "contents": Bag.contents},
        rounds=[
            InstanceRound("add", [InstanceCheck(("z",), (2, 3))], is_equal),
            InstanceRound("contents", [InstanceCheck((), (["z", "a"], ["b", "z", "a"]))], is_equal_disordered),
        ],
    )


class TestSuiteConfiguration:
    """Tests for the configuration objects."""

    def test_collections_frozen(self, suite: ClassSuite) -> None:
        assert isinstance(suite.cases, tuple)
        assert isinstance(suite.rounds, tuple)
        assert isinstance(suite.rounds[0].checks, tuple)
        with pytest.raises(TypeError):
            suite.operations["remove"] = Bag.add  # type: ignore[index]

    def test_round_requires_name(self) -> None:
        with pytest.raises(ValueError):
            InstanceRound(" ", (), is_equal)


class TestRunClassSuite:
    """Tests for run_class_suite."""

    @pytest.mark.asyncio
    async def test_runs_construction_then_rounds(self, suite: ClassSuite) -> None:
        result = await run_class_suite(suite)

        assert isinstance(result, ClassRunResult)
        assert result.construction.all_passed
        assert len(result.instances) == 2
        assert [r.name for r in result.rounds] == ["add", "contents"]
        assert result.rounds[0].messages == [[None], [None]]
        assert result.rounds[1].messages == [[None], [None]]
        assert result.all_passed

    @pytest.mark.asyncio
    async def test_failures_reported_per_round(self) -> None:
        suite = ClassSuite(
            constructor=Bag,
            cases=build_cases([("a",)], [1]),
            checker=size_checker,
            operations={"add": Bag.add},
            rounds=(InstanceRound("add", (InstanceCheck(("b",), (5,)),), is_equal),),
        )

        result = await run_class_suite(suite)

        assert result.rounds[0].messages == [["Expected {2} to be {5}"]]
        assert not result.all_passed

    @pytest.mark.asyncio
    async def test_unknown_operation_propagates(self, suite: ClassSuite) -> None:
        broken = ClassSuite(
            constructor=suite.constructor,
            cases=suite.cases,
            checker=suite.checker,
            operations={},
            rounds=suite.rounds,
        )

        with pytest.raises(OperationNotFoundError):
            await run_class_suite(broken)

    @pytest.mark.asyncio
    async def test_supplied_engine_keeps_records(self, suite: ClassSuite) -> None:
        engine = ClassTestEngine(Bag, operations=suite.operations)
        display = FakeDisplayPort()

        await run_class_suite(suite, engine)
        await engine.display_last_cases(display)

        assert display.get_titles() == [
            "Bag",
            "add (a)",
            "add (a, b)",
            "contents (a)",
            "contents (a, b)",
        ]

    @pytest.mark.asyncio
    async def test_suite_without_rounds(self) -> None:
        suite = ClassSuite(constructor=Bag, cases=build_cases([()], [0]), checker=size_checker)

        result = await run_class_suite(suite)

        assert result.rounds == ()
        assert result.construction.messages == (None,)
