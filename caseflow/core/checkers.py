"""Built-in checkers for comparing actual results against expectations.

Every checker follows the same contract: it is called as
``checker(actual, expected, input, index)`` and returns None when the
case passes or a human-readable failure message when it does not. The
built-ins only look at ``actual`` and ``expected`` and ignore the rest.
"""

from collections.abc import Mapping, Sequence
from numbers import Number
from typing import Any

_MISSING = object()


def is_equal(actual: Any, expected: Any, *_: Any) -> str | None:
    """Pass iff actual is expected or compares equal to it."""
    if actual is expected or actual == expected:
        return None
    return f"Expected {{{actual}}} to be {{{expected}}}"


def _kind(value: Any) -> str:
    """Runtime kind used when comparing structures.

    Integers and floats share the ``number`` kind; bools do not. Every
    non-scalar value (mapping, sequence or plain object) is an ``object``.
    """
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Number):
        return "number"
    if isinstance(value, (str, bytes)):
        return "string"
    return "object"


def _expected_items(expected: Any) -> list[tuple[Any, Any]] | None:
    """Keys and values of ``expected``, or None if it has no keys to walk."""
    if isinstance(expected, Mapping):
        return list(expected.items())
    if isinstance(expected, (str, bytes)):
        return None
    if isinstance(expected, Sequence):
        return list(enumerate(expected))
    if _kind(expected) == "object" and hasattr(expected, "__dict__"):
        return list(vars(expected).items())
    return None


def _lookup(actual: Any, key: Any) -> Any:
    """Fetch ``key`` from a mapping, sequence or object attribute."""
    if isinstance(actual, Mapping):
        return actual[key] if key in actual else _MISSING
    if isinstance(actual, Sequence) and not isinstance(actual, (str, bytes)):
        if isinstance(key, int) and 0 <= key < len(actual):
            return actual[key]
        return _MISSING
    if isinstance(key, str):
        return getattr(actual, key, _MISSING)
    return _MISSING


def is_deep_equal(actual: Any, expected: Any, *_: Any) -> str | None:
    """Check that every key of ``expected`` is matched in ``actual``.

    Comparison is one-directional: keys present only in ``actual`` are
    never inspected, so expected fixtures may be partial. Keys are mapping
    keys, sequence indices or object attributes, and nested values with
    keys of their own recurse. Other values are compared with ``is_equal``.
    An ``expected`` without keys, such as a number, has nothing to match
    and passes.
    """
    for key, expected_value in _expected_items(expected) or ():
        actual_value = _lookup(actual, key)
        if actual_value is _MISSING:
            return f"Actual is missing key: {key}"
        expected_kind = _kind(expected_value)
        actual_kind = _kind(actual_value)
        if actual_kind != expected_kind:
            return f"Type mismatch: {key} should be {expected_kind} but is {actual_kind}"
        if _expected_items(expected_value) is not None:
            error = is_deep_equal(actual_value, expected_value)
        else:
            error = is_equal(actual_value, expected_value)
        if error:
            return error
    return None


def is_equal_disordered(actual: Any, expected: Any, *_: Any) -> str | None:
    """Check that two sequences hold the same elements in any order.

    Duplicates count: each expected element consumes one equal element
    of ``actual``.
    """
    remaining = list(actual)
    missing = []

    for element in expected:
        for position, candidate in enumerate(remaining):
            if candidate is element or candidate == element:
                del remaining[position]
                break
        else:
            missing.append(element)

    if missing or remaining:
        return (
            f"Missing: {', '.join(str(e) for e in missing)}; "
            f"Surplus: {', '.join(str(e) for e in remaining)}"
        )
    return None


def pass_(*_: Any) -> None:
    """Always succeed; used when only running without raising matters."""
    return None


__all__ = ["is_deep_equal", "is_equal", "is_equal_disordered", "pass_"]
