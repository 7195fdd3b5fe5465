from __future__ import annotations

import logging
import re
from functools import reduce
from typing import Any, Callable, NamedTuple, Sequence, Tuple, Union

from expect_changes.errors import ExpectationNotMet, InvalidChangeExpectation
from expect_changes.expectations import expect
from expect_changes.matchers.abstract import BlockMatcher, Matcher, Phases
from expect_changes.matchers.before_and_after import BeforeAndAfter

logger = logging.getLogger(__name__)

ChangeExpectation = Union[Matcher, Sequence[Callable[[], Any]]]

FALLBACK_FAILURE_MESSAGE = " expected block to make changes:\n but it did not."

_QUALIFIER = re.compile(r"\Amake changes *")


class ProbePair(NamedTuple):
    before: Callable[[], Any]
    after: Callable[[], Any]

    def to_matcher(self) -> BeforeAndAfter:
        return BeforeAndAfter(self.before, self.after)


def normalize_change_expectation(
    entry: ChangeExpectation, index: int
) -> BlockMatcher:
    """
    Turn one argument of ``make_changes`` into a block matcher. A list or
    tuple of exactly two callables is shorthand for ``before_and_after``.
    """
    if isinstance(entry, Matcher):
        if not (
            isinstance(entry, BlockMatcher) and entry.supports_block_expectations()
        ):
            raise InvalidChangeExpectation(
                f"{entry!r} does not support block expectations", index
            )
        return entry

    if isinstance(entry, (list, tuple)):
        if len(entry) != 2:
            raise InvalidChangeExpectation(
                f"expected a pair of before and after callables, but its size "
                f"was {len(entry)}",
                index,
            )
        if not all(callable(probe) for probe in entry):
            raise InvalidChangeExpectation(
                "expected a pair of before and after callables", index
            )
        return ProbePair(*entry).to_matcher()

    raise InvalidChangeExpectation(
        f"expected a matcher or a pair of callables, got {entry!r}", index
    )


class MakeChanges(BlockMatcher):
    """
    Combines change expectations into one check around a single action.

    Each entry is either a block matcher (``change(...)``,
    ``before_and_after(...)``, or a conjunction built with ``&``) or a pair
    of callables, which is shorthand for ``before_and_after``. The action
    runs exactly once: every before phase runs first, in entry order, then
    every after phase.

    Evaluation stops at the first failing phase; failures of later entries
    are not collected.
    """

    def __init__(self, *expected_changes: ChangeExpectation) -> None:
        if not expected_changes:
            raise InvalidChangeExpectation("expected at least one change expectation")

        self.expected_changes: Tuple[BlockMatcher, ...] = tuple(
            normalize_change_expectation(entry, index)
            for index, entry in enumerate(expected_changes)
        )
        self.compound: BlockMatcher = reduce(
            lambda compound, expected_change: compound & expected_change,
            self.expected_changes,
        )

    def matches(self, actual: Any) -> bool:
        if not callable(actual):
            # The before phases still run, then the match fails.
            return super().matches(actual)

        logger.debug("Checking %d change expectation(s)", len(self.expected_changes))
        expect(actual).to(self.compound)
        return True

    def phases(self) -> Phases:
        matched = yield from self.compound.phases()
        if not matched:
            raise ExpectationNotMet(self.compound.failure_message)
        return True

    def does_not_match(self, actual: Any) -> bool:
        raise NotImplementedError(
            "`expect(...).not_to(make_changes(...))` is not supported"
        )

    @property
    def failure_message(self) -> str:
        return FALLBACK_FAILURE_MESSAGE

    @property
    def description(self) -> str:
        descriptions = " and ".join(
            expected_change.description for expected_change in self.expected_changes
        )
        return _QUALIFIER.sub("", f"make changes {descriptions}")


def make_changes(*expected_changes: ChangeExpectation) -> MakeChanges:
    """
    Applied to an action, checks that running it once satisfies every
    expected change.
    """
    return MakeChanges(*expected_changes)


check_all_before_and_after = make_changes
check_all = make_changes
change_all = make_changes


__all__ = [
    "ChangeExpectation",
    "FALLBACK_FAILURE_MESSAGE",
    "MakeChanges",
    "ProbePair",
    "change_all",
    "check_all",
    "check_all_before_and_after",
    "make_changes",
    "normalize_change_expectation",
]
