from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from expect_changes.errors import ExpectationNotMet, MatcherUsageError
from expect_changes.matchers.abstract import Matcher

logger = logging.getLogger(__name__)

TActual = TypeVar("TActual")


class ExpectationTarget(Generic[TActual]):
    """
    Wraps the subject of an expectation. When the matcher supports block
    expectations and the subject is callable, the subject is treated as the
    action to run; otherwise it is the value to match.
    """

    def __init__(self, actual: TActual) -> None:
        self.__actual = actual

    @property
    def actual(self) -> TActual:
        return self.__actual

    def to(self, matcher: Matcher, message: Optional[str] = None) -> None:
        _check_matcher(matcher)
        if not matcher.matches(self.__actual):
            logger.debug("Expectation failed: %r", matcher)
            raise ExpectationNotMet(
                message if message is not None else matcher.failure_message
            )

    def not_to(self, matcher: Matcher, message: Optional[str] = None) -> None:
        _check_matcher(matcher)
        if not matcher.does_not_match(self.__actual):
            logger.debug("Negated expectation failed: %r", matcher)
            raise ExpectationNotMet(
                message
                if message is not None
                else matcher.failure_message_when_negated
            )

    to_not = not_to


def _check_matcher(matcher: Any) -> None:
    if not isinstance(matcher, Matcher):
        raise MatcherUsageError(
            f"expected a matcher, got {matcher!r}. Did you mean eq({matcher!r})?"
        )


def expect(actual: TActual) -> ExpectationTarget[TActual]:
    """
    Start an expectation: ``expect(value).to(eq(1))`` for values,
    ``expect(action).to(make_changes(...))`` for actions.
    """
    return ExpectationTarget(actual)


__all__ = ["ExpectationTarget", "expect"]
