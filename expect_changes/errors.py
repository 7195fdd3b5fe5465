from __future__ import annotations

from typing import Optional


class ExpectationNotMet(AssertionError):
    """
    Raised when an expectation fails. The message is reproduced verbatim,
    since test suites assert on the exact text.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    @classmethod
    def wrapping(cls, message: str, cause: BaseException) -> ExpectationNotMet:
        """
        Build a failure carrying ``message`` that keeps the traceback of
        ``cause`` and records it as ``__cause__``, so the original failing
        assertion can still be located.
        """
        failure = cls(message).with_traceback(cause.__traceback__)
        failure.__cause__ = cause
        return failure


class InvalidChangeExpectation(ValueError):
    """
    A change expectation passed to ``make_changes`` is malformed: there are
    no entries at all, or an entry is neither a matcher nor a pair of
    callables.
    """

    def __init__(self, reason: str, index: Optional[int] = None) -> None:
        self.reason = reason
        self.index = index
        if index is not None:
            reason = f"expected_changes[{index}]: {reason}"
        super().__init__(reason)


class MatcherUsageError(TypeError):
    """
    A matcher was used in a way it cannot support, such as a tolerance
    matcher without an expected value.
    """

    pass
