"""Domain models for the caseflow test engine.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeAlias, TypeVar

Input = TypeVar("Input", bound=tuple)
Actual = TypeVar("Actual")
Expected = TypeVar("Expected")

# Outcome of a single case: None on success, a failure message otherwise
Message: TypeAlias = str | None

Checker: TypeAlias = Callable[..., Message | Awaitable[Message]]
Ider: TypeAlias = Callable[[tuple[Any, ...]], str]


def default_ider(input: tuple[Any, ...]) -> str:
    """Identify a case by the string forms of its arguments."""
    return ", ".join(str(arg) for arg in input)


@dataclass
class TestCase(Generic[Input, Expected]):
    """One input/expected pairing submitted to an engine.

    The engine mutates cases in place: it assigns ``id`` when missing and
    writes the outcome of the run into ``error_message``. ``completed``
    separates "not run yet" from "passed", since both leave
    ``error_message`` as None. A case with ``expect_exception`` set expects
    the callable to raise even when its batch does not.

    Note: This dataclass is intentionally mutable so that the case list
    handed to an engine doubles as the record of the run.
    """

    __test__ = False  # not a pytest test class

    input: tuple[Any, ...]
    expected: Any = None
    id: str | None = None
    error_message: Message = None
    completed: bool = False
    expect_exception: bool = False

    def __post_init__(self) -> None:
        """Normalize the argument list to an immutable tuple."""
        if isinstance(self.input, (str, bytes)) or not isinstance(self.input, Sequence):
            raise ValueError(
                f"input must be a sequence of positional arguments, got {self.input!r}"
            )
        if not isinstance(self.input, tuple):
            self.input = tuple(self.input)

    @property
    def passed(self) -> bool:
        """Whether the case ran and its checker reported success."""
        return self.completed and self.error_message is None

    def record_outcome(self, message: Message) -> None:
        """Store the outcome of a run on this case."""
        self.error_message = message
        self.completed = True


@dataclass(frozen=True)
class InstanceCheck:
    """An input tested against every tracked instance.

    ``expecteds[i]`` is the value expected from the i-th tracked instance.
    """

    input: tuple[Any, ...]
    expecteds: tuple[Any, ...]

    def __post_init__(self) -> None:
        """Convert argument and expected lists to tuples."""
        if not isinstance(self.input, tuple):
            object.__setattr__(self, "input", tuple(self.input))
        if not isinstance(self.expecteds, tuple):
            object.__setattr__(self, "expecteds", tuple(self.expecteds))


@dataclass(frozen=True)
class RunResult:
    """Summary of one batch run of an engine."""

    title: str
    cases: tuple[TestCase, ...]  # immutable for frozen dataclass
    messages: tuple[Message, ...]  # parallel to cases

    def __post_init__(self) -> None:
        """Validate that every case has exactly one message."""
        if len(self.cases) != len(self.messages):
            raise ValueError(
                f"got {len(self.messages)} messages for {len(self.cases)} cases"
            )

    @property
    def total(self) -> int:
        return len(self.cases)

    @property
    def success_count(self) -> int:
        return sum(1 for message in self.messages if message is None)

    @property
    def all_passed(self) -> bool:
        return self.success_count == self.total

    @property
    def failures(self) -> tuple[TestCase, ...]:
        """Cases whose checker reported a failure."""
        return tuple(
            case for case, message in zip(self.cases, self.messages) if message is not None
        )


@dataclass(frozen=True)
class InstanceRoundResult:
    """Outcome of one named operation tested against every instance."""

    name: str
    runs: tuple[RunResult, ...]  # one per instance, in instance order

    @property
    def messages(self) -> list[list[Message]]:
        """Per-instance lists of per-case messages."""
        return [list(run.messages) for run in self.runs]

    @property
    def all_passed(self) -> bool:
        return all(run.all_passed for run in self.runs)


@dataclass(frozen=True)
class ClassRunResult:
    """Construction outcome of a class plus any instance rounds run since.

    WARNING: While this dataclass is frozen, the instances it holds are
    whatever objects the constructor produced and may be mutated by the
    operations tested against them.
    """

    construction: RunResult
    instances: tuple[Any, ...]
    rounds: tuple[InstanceRoundResult, ...] = field(default_factory=tuple)

    @property
    def all_passed(self) -> bool:
        return self.construction.all_passed and all(r.all_passed for r in self.rounds)

    def with_round(self, round_result: InstanceRoundResult) -> "ClassRunResult":
        """Return a copy with one more instance round appended."""
        return ClassRunResult(
            construction=self.construction,
            instances=self.instances,
            rounds=self.rounds + (round_result,),
        )

    def get_round(self, name: str) -> InstanceRoundResult | None:
        """Get the most recent round run for the named operation, if any."""
        for round_result in reversed(self.rounds):
            if round_result.name == name:
                return round_result
        return None
