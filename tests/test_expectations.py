from unittest.mock import Mock

import pytest

from expect_changes import (
    ExpectationNotMet,
    MatcherUsageError,
    before_and_after,
    change,
    eq,
    expect,
)
from expect_changes.expectations import ExpectationTarget


def test_to() -> None:
    target = expect(5)
    assert isinstance(target, ExpectationTarget)
    assert target.actual == 5

    target.to(eq(5))

    with pytest.raises(ExpectationNotMet):
        target.to(eq(6))


def test_failures_are_assertion_errors() -> None:
    with pytest.raises(AssertionError):
        expect(5).to(eq(6))


def test_custom_message() -> None:
    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(5).to(eq(6), message="five is not six")

    assert str(excinfo.value) == "five is not six"

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(5).to_not(eq(5), "five is five")

    assert str(excinfo.value) == "five is five"


def test_callable_is_a_value_for_value_matchers() -> None:
    function = Mock()

    expect(function).to(eq(function))

    assert function.call_count == 0


def test_callable_is_an_action_for_block_matchers() -> None:
    holder = Mock(value=1)

    def action() -> None:
        holder.value = 2

    expect(action).to(change(holder, "value").from_(1).to(2))


def test_requires_a_matcher() -> None:
    with pytest.raises(MatcherUsageError, match=r"Did you mean eq\(5\)\?"):
        expect(5).to(5)  # type: ignore


def test_block_and_value_matchers_cannot_share_an_action() -> None:
    with pytest.raises(MatcherUsageError):
        expect(Mock()).to(before_and_after(Mock(), Mock()) & eq(1))
