from __future__ import annotations

import operator as operators
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from expect_changes.errors import ExpectationNotMet, MatcherUsageError
from expect_changes.matchers.abstract import (
    BlockMatcher,
    finish_phases,
    start_phases,
)
from expect_changes.matchers.before_and_after import before_and_after

T = TypeVar("T")


@contextmanager
def expecting(matcher: BlockMatcher) -> Iterator[None]:
    """
    Evaluate a block matcher around the body of a ``with`` statement::

        with expecting(make_changes(change(lambda: len(items)).by(1))):
            items.append(1)

    The before phase runs on entry and the after phase on exit. If the body
    raises, the error propagates and the after phase is skipped.
    """
    if not isinstance(matcher, BlockMatcher):
        raise MatcherUsageError(f"{matcher!r} does not support block expectations")

    phases = matcher.phases()
    start_phases(phases)

    try:
        yield
    except BaseException:
        phases.close()
        raise

    if not finish_phases(phases):
        raise ExpectationNotMet(matcher.failure_message)


def _compare(
    callable: Callable[[], Any],
    expected: T,
    operator: Callable[[T, T], bool],
    condition: str,
) -> Callable[[], None]:
    def probe() -> None:
        actual = callable()
        if not operator(actual, expected):
            raise ExpectationNotMet(
                f"{condition} ({operator}) on {callable} failed: "
                f"expected: {expected!r}, actual: {actual!r}"
            )

    return probe


@contextmanager
def assert_changes(
    callable: Callable[[], Any],
    before: T,
    after: T,
    operator: Callable[[T, T], bool] = operators.eq,
) -> Iterator[None]:
    with expecting(
        before_and_after(
            _compare(callable, before, operator, "precondition"),
            _compare(callable, after, operator, "postcondition"),
        )
    ):
        yield


@contextmanager
def assert_does_not_change(
    callable: Callable[[], Any],
    value: T,
    operator: Callable[[T, T], bool] = operators.eq,
) -> Iterator[None]:
    with expecting(
        before_and_after(
            _compare(callable, value, operator, "precondition"),
            _compare(callable, value, operator, "postcondition"),
        )
    ):
        yield


__all__ = ["assert_changes", "assert_does_not_change", "expecting"]
