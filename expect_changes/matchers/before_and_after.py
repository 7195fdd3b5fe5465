from __future__ import annotations

import logging
from typing import Any, Callable

from expect_changes.errors import ExpectationNotMet
from expect_changes.matchers.abstract import BlockMatcher, Phases
from expect_changes.utils.formatting import indent_multiline_message

logger = logging.getLogger(__name__)

Probe = Callable[[], Any]

BEFORE_PREFIX = "before making the change:"
AFTER_PREFIX = "after making the change:"


def run_probe(prefix: str, probe: Probe) -> None:
    """
    Run ``probe``. An assertion failure is re-raised with its message
    placed under ``prefix`` and indented, keeping the original traceback
    and recording the original failure as the cause.
    """
    try:
        probe()
    except AssertionError as e:
        logger.debug("Probe %r failed %s", probe, prefix.rstrip(":"))
        raise ExpectationNotMet.wrapping(
            f"{prefix}\n{indent_multiline_message(str(e))}", e
        ) from e


class BeforeAndAfter(BlockMatcher):
    """
    Checks a pair of related expectations around an action: one right
    before it runs and one right after. The probes are arbitrary callables
    that raise ``AssertionError`` (or ``ExpectationNotMet``) on failure.

    A failing probe is reported with the phase it failed in. When the
    before probe fails, neither the action nor the after probe runs.
    """

    def __init__(self, before_probe: Probe, after_probe: Probe) -> None:
        self.before_probe = before_probe
        self.after_probe = after_probe

    def phases(self) -> Phases:
        run_probe(BEFORE_PREFIX, self.before_probe)
        yield
        run_probe(AFTER_PREFIX, self.after_probe)
        return True

    def does_not_match(self, actual: Any) -> bool:
        raise NotImplementedError(
            "`expect(...).not_to(before_and_after(...))` is not supported, "
            "negate the probes instead"
        )

    @property
    def failure_message(self) -> str:
        # Probe failures raise with their own message, so this is only seen
        # when no action was given.
        return (
            "expected a block to check before and after, "
            "but was not given a block"
        )

    @property
    def description(self) -> str:
        return "before and after"


def before_and_after(before_probe: Probe, after_probe: Probe) -> BeforeAndAfter:
    """
    Applied to an action, checks ``before_probe`` before running it and
    ``after_probe`` after running it.
    """
    return BeforeAndAfter(before_probe, after_probe)


expect_before_and_after = before_and_after
check_before_and_after = before_and_after


__all__ = [
    "BeforeAndAfter",
    "Probe",
    "before_and_after",
    "check_before_and_after",
    "expect_before_and_after",
    "run_probe",
]
