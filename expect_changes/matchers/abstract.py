from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generator, List, Optional, Sequence

from expect_changes.errors import MatcherUsageError
from expect_changes.utils.formatting import indent_multiline_message

logger = logging.getLogger(__name__)

# The before phase runs up to the single ``yield``, the after phase runs
# after it, and the generator returns the verdict.
Phases = Generator[None, None, bool]


def values_match(expected: Any, actual: Any) -> bool:
    """
    Compare ``actual`` against ``expected``, which may itself be a matcher
    (``change(...).by(a_value_within(0.1).of(1.0))``).
    """
    if isinstance(expected, Matcher):
        return expected.matches(actual)
    return bool(expected == actual)


class Matcher(ABC):
    """
    A matcher answers whether an actual value satisfies it and explains
    itself when it does not.

    Matchers can be combined with ``&`` (or ``and_``); the result requires
    both operands to hold.
    """

    @abstractmethod
    def matches(self, actual: Any) -> bool:
        raise NotImplementedError

    def does_not_match(self, actual: Any) -> bool:
        return not self.matches(actual)

    @property
    @abstractmethod
    def failure_message(self) -> str:
        raise NotImplementedError

    @property
    def failure_message_when_negated(self) -> str:
        return f"expected not to {self.description}"

    @property
    @abstractmethod
    def description(self) -> str:
        raise NotImplementedError

    def supports_block_expectations(self) -> bool:
        return False

    def __and__(self, other: Matcher) -> And:
        return And(self, other)

    def and_(self, other: Matcher) -> And:
        return And(self, other)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.description}>"


class BlockMatcher(Matcher):
    """
    A matcher evaluated around a deferred action rather than against a
    value. Subclasses describe their work as phases, which lets a
    conjunction of block matchers share a single invocation of the action.
    """

    @abstractmethod
    def phases(self) -> Phases:
        """
        A generator that runs the before phase, yields exactly once while
        the action runs, then runs the after phase and returns whether the
        matcher is satisfied.
        """
        raise NotImplementedError

    def supports_block_expectations(self) -> bool:
        return True

    def matches(self, actual: Any) -> bool:
        phases = self.phases()
        start_phases(phases)

        if not callable(actual):
            phases.close()
            return self._not_given_a_block()

        try:
            actual()
        except BaseException:
            phases.close()
            raise
        return finish_phases(phases)

    def _not_given_a_block(self) -> bool:
        """
        Called when a value rather than an action was supplied, after the
        before phase has run.
        """
        return False


def start_phases(phases: Phases) -> None:
    """Run the before phase, stopping at the single ``yield``."""
    try:
        next(phases)
    except StopIteration:
        raise RuntimeError("phases finished before the action was run") from None


def finish_phases(phases: Phases) -> bool:
    """Run the after phase and return the verdict."""
    try:
        next(phases)
    except StopIteration as stop:
        return bool(stop.value)
    phases.close()
    raise RuntimeError("phases yielded more than once")


def drive_phases(
    matchers: Sequence[BlockMatcher],
) -> Generator[None, None, List[bool]]:
    """
    Run the before phases of all matchers in order, yield once for the
    action, then run the after phases in the same order.

    The first phase to raise aborts the evaluation: generators that were
    already started are closed and the error propagates unchanged.
    """
    started: List[Phases] = []
    try:
        for matcher in matchers:
            phases = matcher.phases()
            start_phases(phases)
            started.append(phases)

        yield

        return [finish_phases(phases) for phases in started]
    finally:
        for phases in started:
            phases.close()


class And(BlockMatcher):
    """
    Requires both matchers to hold.

    Against a callable where both operands support block expectations, the
    callable is invoked once: every before phase runs first, in order, and
    every after phase runs afterwards. Otherwise both operands are evaluated
    against the value.
    """

    def __init__(self, matcher_1: Matcher, matcher_2: Matcher) -> None:
        for matcher in (matcher_1, matcher_2):
            if not isinstance(matcher, Matcher):
                raise MatcherUsageError(f"{matcher!r} is not a matcher")

        self.matcher_1 = matcher_1
        self.matcher_2 = matcher_2
        self.__matcher_1_matches: Optional[bool] = None
        self.__matcher_2_matches: Optional[bool] = None

    @property
    def matchers(self) -> Sequence[Matcher]:
        return (self.matcher_1, self.matcher_2)

    def supports_block_expectations(self) -> bool:
        return all(m.supports_block_expectations() for m in self.matchers)

    def matches(self, actual: Any) -> bool:
        if callable(actual) and self.supports_block_expectations():
            return super().matches(actual)

        if callable(actual) and any(
            m.supports_block_expectations() for m in self.matchers
        ):
            raise MatcherUsageError(
                "cannot combine a block matcher with a value matcher: "
                f"{self.description}"
            )

        self.__matcher_1_matches = self.matcher_1.matches(actual)
        self.__matcher_2_matches = self.matcher_2.matches(actual)
        return self.__matcher_1_matches and self.__matcher_2_matches

    def does_not_match(self, actual: Any) -> bool:
        raise NotImplementedError(
            "`expect(...).not_to(matcher & matcher)` is not supported, "
            "since it creates ambiguity. Negate each matcher separately."
        )

    def phases(self) -> Phases:
        block_matchers = [m for m in self.matchers if isinstance(m, BlockMatcher)]
        if len(block_matchers) != 2:
            raise MatcherUsageError(f"{self!r} does not support block expectations")

        logger.debug("Running phases of %r", self)
        results = yield from drive_phases(block_matchers)
        self.__matcher_1_matches, self.__matcher_2_matches = results
        return all(results)

    @property
    def failure_message(self) -> str:
        if self.__matcher_1_matches:
            return self.matcher_2.failure_message
        if self.__matcher_2_matches:
            return self.matcher_1.failure_message
        return self.__compound_failure_message()

    def __compound_failure_message(self) -> str:
        message_1 = self.matcher_1.failure_message.rstrip("\n")
        message_2 = self.matcher_2.failure_message.lstrip("\n")
        return (
            indent_multiline_message(message_1)
            + "\n\n...and:\n\n"
            + indent_multiline_message(message_2)
        )

    @property
    def description(self) -> str:
        return f"{self.matcher_1.description} and {self.matcher_2.description}"


__all__ = [
    "And",
    "BlockMatcher",
    "Matcher",
    "Phases",
    "drive_phases",
    "finish_phases",
    "start_phases",
    "values_match",
]
