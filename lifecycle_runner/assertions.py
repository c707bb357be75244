"""Strict assertion helpers for case bodies.

Both helpers are silent on success and raise AssertionFailure, whose message
names the actual and expected values, on mismatch.
"""

import difflib
import math
import pprint
from collections.abc import Mapping, Sequence, Set
from typing import Any, Optional


class AssertionFailure(AssertionError):
    """A failed comparison, carrying both values."""

    def __init__(self, message: str, actual: Any, expected: Any, operator: str):
        super().__init__(message)
        self.actual = actual
        self.expected = expected
        self.operator = operator


def assert_strict_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    """Assert that both values have the same type and are equal."""
    if _strict_equal(actual, expected):
        return

    raise AssertionFailure(
        message or (
            "Expected values to be strictly equal:\n\n"
            f"{actual!r} !== {expected!r}\n"
        ),
        actual,
        expected,
        "strictEqual",
    )


def assert_deep_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    """Assert structural equality with strict comparison at the leaves.

    Mappings compare by key set and values, sequences element-wise, sets by
    membership. Container types must match (a list never equals a tuple).
    """
    if _deep_equal(actual, expected):
        return

    raise AssertionFailure(
        message or (
            "Expected values to be strictly deep-equal:\n"
            "+ actual - expected\n\n"
            f"{_diff(actual, expected)}\n"
        ),
        actual,
        expected,
        "deepStrictEqual",
    )


def _strict_equal(actual: Any, expected: Any) -> bool:
    if actual is expected:
        return True
    if type(actual) is not type(expected):
        return False
    if isinstance(actual, float) and math.isnan(actual) and math.isnan(expected):
        return True
    try:
        return bool(actual == expected)
    except Exception:
        return False


def _deep_equal(actual: Any, expected: Any) -> bool:
    if actual is expected:
        return True
    if type(actual) is not type(expected):
        return False

    if isinstance(actual, Mapping):
        if set(actual.keys()) != set(expected.keys()):
            return False
        return all(_deep_equal(actual[k], expected[k]) for k in actual)

    if isinstance(actual, Set):
        return actual == expected

    if isinstance(actual, Sequence) and not isinstance(actual, (str, bytes)):
        if len(actual) != len(expected):
            return False
        return all(_deep_equal(a, e) for a, e in zip(actual, expected))

    return _strict_equal(actual, expected)


def _diff(actual: Any, expected: Any) -> str:
    actual_lines = pprint.pformat(actual, width=60).splitlines()
    expected_lines = pprint.pformat(expected, width=60).splitlines()
    if actual_lines == expected_lines:
        # Same repr, different types
        return (
            f"+ {type(actual).__name__}: {actual!r}\n"
            f"- {type(expected).__name__}: {expected!r}"
        )

    lines = []
    for line in difflib.ndiff(actual_lines, expected_lines):
        if line.startswith("?"):
            continue
        # ndiff marks the first sequence with '-', the second with '+'
        if line.startswith("- "):
            lines.append("+ " + line[2:])
        elif line.startswith("+ "):
            lines.append("- " + line[2:])
        else:
            lines.append(line)
    return "\n".join(lines)
