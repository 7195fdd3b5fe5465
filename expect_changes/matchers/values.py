from __future__ import annotations

import operator
from typing import Any, Callable, Mapping, Optional, Tuple

from expect_changes.errors import MatcherUsageError
from expect_changes.matchers.abstract import Matcher, values_match
from expect_changes.utils.formatting import description_of

_MISSING = object()


class Eq(Matcher):
    """
    Passes if ``actual == expected``.
    """

    def __init__(self, expected: Any) -> None:
        self.expected = expected
        self.__actual: Any = None

    def matches(self, actual: Any) -> bool:
        self.__actual = actual
        return bool(actual == self.expected)

    @property
    def failure_message(self) -> str:
        return (
            f"\nexpected: {description_of(self.expected)}"
            f"\n     got: {description_of(self.__actual)}"
            "\n\n(compared using ==)\n"
        )

    @property
    def failure_message_when_negated(self) -> str:
        return (
            f"\nexpected: value != {description_of(self.expected)}"
            f"\n     got: {description_of(self.__actual)}"
            "\n\n(compared using ==)\n"
        )

    @property
    def description(self) -> str:
        return f"eq {description_of(self.expected)}"


_OPERATORS: Mapping[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class BeComparedTo(Matcher):
    """
    Passes if ``actual <operator> expected``. Built with ``be``, as in
    ``be > 1``.
    """

    def __init__(self, operator: str, expected: Any) -> None:
        self.operator = operator
        self.expected = expected
        self.__compare = _OPERATORS[operator]
        self.__actual: Any = None

    def matches(self, actual: Any) -> bool:
        self.__actual = actual
        try:
            return bool(self.__compare(actual, self.expected))
        except TypeError:
            return False

    @property
    def failure_message(self) -> str:
        padding = " " * len(self.operator)
        return (
            f"expected: {self.operator} {description_of(self.expected)}\n"
            f"     got: {padding} {description_of(self.__actual)}"
        )

    @property
    def failure_message_when_negated(self) -> str:
        return (
            f"`expect({description_of(self.__actual)}).not_to(be "
            f"{self.operator} {description_of(self.expected)})`"
        )

    @property
    def description(self) -> str:
        return f"be {self.operator} {description_of(self.expected)}"


class _Be:
    """
    Entry point for comparison matchers: ``be < 1``, ``be >= 0`` and so on.
    """

    def __lt__(self, expected: Any) -> BeComparedTo:
        return BeComparedTo("<", expected)

    def __le__(self, expected: Any) -> BeComparedTo:
        return BeComparedTo("<=", expected)

    def __gt__(self, expected: Any) -> BeComparedTo:
        return BeComparedTo(">", expected)

    def __ge__(self, expected: Any) -> BeComparedTo:
        return BeComparedTo(">=", expected)

    def __repr__(self) -> str:
        return "be"


be = _Be()


class Include(Matcher):
    """
    Passes if every expected item is contained in the actual value.
    """

    def __init__(self, *expected: Any) -> None:
        if not expected:
            raise MatcherUsageError("include() requires at least one item")
        self.expected: Tuple[Any, ...] = expected
        self.__actual: Any = None

    def matches(self, actual: Any) -> bool:
        self.__actual = actual
        return all(self.__contains(actual, item) for item in self.expected)

    def does_not_match(self, actual: Any) -> bool:
        self.__actual = actual
        return not any(self.__contains(actual, item) for item in self.expected)

    @staticmethod
    def __contains(actual: Any, item: Any) -> bool:
        try:
            if item in actual:
                return True
        except TypeError:
            return False
        if isinstance(item, Matcher):
            return any(values_match(item, element) for element in actual)
        return False

    def __expected_description(self) -> str:
        return ", ".join(description_of(item) for item in self.expected)

    @property
    def failure_message(self) -> str:
        return (
            f"expected {description_of(self.__actual)} "
            f"to include {self.__expected_description()}"
        )

    @property
    def failure_message_when_negated(self) -> str:
        return (
            f"expected {description_of(self.__actual)} "
            f"not to include {self.__expected_description()}"
        )

    @property
    def description(self) -> str:
        return f"include {self.__expected_description()}"


class BeWithin(Matcher):
    """
    Passes if ``abs(actual - expected) <= delta``. The expected value is
    supplied with ``of``: ``be_within(0.1).of(1.0)``.
    """

    def __init__(self, delta: Any, noun: str = "be") -> None:
        self.delta = delta
        self.expected: Any = _MISSING
        self.__noun = noun
        self.__actual: Any = None

    def of(self, expected: Any) -> BeWithin:
        self.expected = expected
        return self

    def matches(self, actual: Any) -> bool:
        if self.expected is _MISSING:
            raise MatcherUsageError(
                "You must set an expected value using `of`: "
                "be_within(0.1).of(expected_value)"
            )
        self.__actual = actual
        try:
            return bool(abs(actual - self.expected) <= self.delta)
        except TypeError:
            return False

    @property
    def failure_message(self) -> str:
        return f"expected {description_of(self.__actual)} to {self.description}"

    @property
    def failure_message_when_negated(self) -> str:
        return f"expected {description_of(self.__actual)} not to {self.description}"

    @property
    def description(self) -> str:
        expected: Optional[str] = (
            None if self.expected is _MISSING else description_of(self.expected)
        )
        return f"{self.__noun} within {description_of(self.delta)} of {expected}"


def eq(expected: Any) -> Eq:
    return Eq(expected)


def include(*expected: Any) -> Include:
    return Include(*expected)


def be_within(delta: Any) -> BeWithin:
    return BeWithin(delta)


def a_value_within(delta: Any) -> BeWithin:
    return BeWithin(delta, noun="a value")


__all__ = [
    "BeComparedTo",
    "BeWithin",
    "Eq",
    "Include",
    "a_value_within",
    "be",
    "be_within",
    "eq",
    "include",
]
