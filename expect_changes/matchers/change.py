from __future__ import annotations

import copy
import inspect
from array import array
from collections.abc import MutableMapping, MutableSequence, MutableSet
from typing import Any, Callable, Optional, Union

from expect_changes.errors import MatcherUsageError
from expect_changes.matchers.abstract import BlockMatcher, Phases, values_match
from expect_changes.utils.formatting import description_of
from expect_changes.utils.snippets import lambda_snippet

# Collections of these types can be mutated in place, so the before value
# is copied to keep the comparison meaningful.
_MUTABLE_CONTAINERS = (MutableSequence, MutableSet, MutableMapping, bytearray, array)

_MATCH_ANYTHING = object()


class ChangeDetails:
    """
    Evaluates the observed value before and after the action and keeps both
    results.
    """

    def __init__(
        self,
        receiver: Any = None,
        message: Optional[str] = None,
        value_function: Optional[Callable[[], Any]] = None,
    ) -> None:
        if value_function is None:
            if message is None:
                raise MatcherUsageError(
                    "change() requires either a callable or a receiver and an "
                    "attribute name"
                )
        elif message is not None:
            raise MatcherUsageError(
                "change() accepts a callable or a receiver and an attribute "
                "name, not both"
            )

        self.__receiver = receiver
        self.__message = message
        self.__value_function = value_function

        self.actual_before: Any = None
        self.actual_after: Any = None

    @property
    def value_representation(self) -> str:
        if self.__message is not None:
            receiver = self.__receiver
            if isinstance(receiver, type):
                return f"`{receiver.__name__}.{self.__message}`"
            return f"`{type(receiver).__name__}#{self.__message}`"

        assert self.__value_function is not None
        snippet = lambda_snippet(self.__value_function)
        if snippet is None:
            return "result"
        return f"`{snippet}`"

    def evaluate(self) -> Any:
        if self.__value_function is not None:
            value = self.__value_function()
        else:
            assert self.__message is not None
            value = getattr(self.__receiver, self.__message)
            if inspect.ismethod(value):
                value = value()

        if isinstance(value, _MUTABLE_CONTAINERS):
            return copy.copy(value)
        return value

    def before(self) -> None:
        self.actual_before = self.evaluate()

    def after(self) -> None:
        self.actual_after = self.evaluate()

    def changed(self) -> bool:
        return bool(self.actual_before != self.actual_after)

    def actual_delta(self) -> Any:
        return self.actual_after - self.actual_before


class Change(BlockMatcher):
    """
    Passes if the observed value changed while the action ran. Narrowed
    with ``by``, ``by_at_least``, ``by_at_most``, ``from_`` and ``to``.
    """

    def __init__(self, details: ChangeDetails) -> None:
        self._details = details
        self._given_a_block = True

    def by(self, expected_delta: Any) -> ChangeRelatively:
        return ChangeRelatively(
            self._details,
            expected_delta,
            "by",
            lambda actual: values_match(expected_delta, actual),
        )

    def by_at_least(self, minimum: Any) -> ChangeRelatively:
        return ChangeRelatively(
            self._details, minimum, "by at least", lambda actual: actual >= minimum
        )

    def by_at_most(self, maximum: Any) -> ChangeRelatively:
        return ChangeRelatively(
            self._details, maximum, "by at most", lambda actual: actual <= maximum
        )

    def from_(self, value: Any) -> ChangeFromValue:
        return ChangeFromValue(self._details, value)

    def to(self, value: Any) -> ChangeToValue:
        return ChangeToValue(self._details, value)

    def phases(self) -> Phases:
        self._given_a_block = True
        self._details.before()
        yield
        self._details.after()
        return self._details.changed()

    def _not_given_a_block(self) -> bool:
        self._given_a_block = False
        return False

    def does_not_match(self, actual: Any) -> bool:
        if not self.matches(actual):
            return self._given_a_block
        return False

    @property
    def failure_message(self) -> str:
        return (
            f"expected {self._details.value_representation} to have changed, "
            f"but {self.__positive_failure_reason()}"
        )

    @property
    def failure_message_when_negated(self) -> str:
        return (
            f"expected {self._details.value_representation} not to have "
            f"changed, but {self.__negative_failure_reason()}"
        )

    def __positive_failure_reason(self) -> str:
        if not self._given_a_block:
            return "was not given a block"
        return f"is still {description_of(self._details.actual_before)}"

    def __negative_failure_reason(self) -> str:
        if not self._given_a_block:
            return "was not given a block"
        return (
            f"did change from {description_of(self._details.actual_before)} "
            f"to {description_of(self._details.actual_after)}"
        )

    @property
    def description(self) -> str:
        return f"change {self._details.value_representation}"


class ChangeRelatively(BlockMatcher):
    """
    Passes if the observed value changed by an amount accepted by
    ``comparer``.
    """

    def __init__(
        self,
        details: ChangeDetails,
        expected_delta: Any,
        relativity: str,
        comparer: Callable[[Any], bool],
    ) -> None:
        self.__details = details
        self.__expected_delta = expected_delta
        self.__relativity = relativity
        self.__comparer = comparer
        self.__given_a_block = True

    def phases(self) -> Phases:
        self.__given_a_block = True
        self.__details.before()
        yield
        self.__details.after()
        return bool(self.__comparer(self.__details.actual_delta()))

    def _not_given_a_block(self) -> bool:
        self.__given_a_block = False
        return False

    def does_not_match(self, actual: Any) -> bool:
        chain = self.__relativity.replace(" ", "_")
        raise NotImplementedError(
            f"`expect(...).not_to(change(...).{chain}(...))` is not supported"
        )

    @property
    def failure_message(self) -> str:
        return (
            f"expected {self.__details.value_representation} to have changed "
            f"{self.__relativity} {description_of(self.__expected_delta)}, "
            f"but {self.__actual_change()}"
        )

    def __actual_change(self) -> str:
        if not self.__given_a_block:
            return "was not given a block"
        return f"was changed by {description_of(self.__details.actual_delta())}"

    @property
    def description(self) -> str:
        return (
            f"change {self.__details.value_representation} "
            f"{self.__relativity} {description_of(self.__expected_delta)}"
        )


class SpecificValuesChange(BlockMatcher):
    """
    Passes if the observed value changed, started from the expected before
    value and ended on the expected after value.
    """

    def __init__(
        self, details: ChangeDetails, expected_before: Any, expected_after: Any
    ) -> None:
        self._details = details
        self._expected_before = expected_before
        self._expected_after = expected_after
        self._given_a_block = True
        self._matches_before = False
        self._actual_before_description = ""

    def phases(self) -> Phases:
        self._given_a_block = True
        self._details.before()
        # Computed now, before an in-place mutation could alter the value.
        self._matches_before = _values_match(
            self._expected_before, self._details.actual_before
        )
        self._actual_before_description = description_of(self._details.actual_before)
        yield
        self._details.after()
        return (
            self._details.changed()
            and self._matches_before
            and _values_match(self._expected_after, self._details.actual_after)
        )

    def _not_given_a_block(self) -> bool:
        self._given_a_block = False
        return False

    def _change_description(self) -> str:
        raise NotImplementedError

    def _not_given_a_block_failure(self) -> str:
        return (
            f"expected {self._details.value_representation} to have changed "
            f"{self._change_description()}, but was not given a block"
        )

    def _before_value_failure(self) -> str:
        return (
            f"expected {self._details.value_representation} to have initially "
            f"been {description_of(self._expected_before)}, "
            f"but was {self._actual_before_description}"
        )

    @property
    def failure_message(self) -> str:
        if not self._given_a_block:
            return self._not_given_a_block_failure()
        if not self._matches_before:
            return self._before_value_failure()
        if not self._details.changed():
            return (
                f"expected {self._details.value_representation} to have changed "
                f"{self._change_description()}, but did not change"
            )
        return (
            f"expected {self._details.value_representation} to have changed to "
            f"{description_of(self._expected_after)}, "
            f"but is now {description_of(self._details.actual_after)}"
        )

    @property
    def description(self) -> str:
        return (
            f"change {self._details.value_representation} "
            f"{self._change_description()}"
        )


def _values_match(expected: Any, actual: Any) -> bool:
    return expected is _MATCH_ANYTHING or values_match(expected, actual)


class ChangeFromValue(SpecificValuesChange):
    def __init__(self, details: ChangeDetails, expected_before: Any) -> None:
        super().__init__(details, expected_before, _MATCH_ANYTHING)
        self.__description_suffix = ""

    def to(self, value: Any) -> ChangeFromValue:
        self._expected_after = value
        self.__description_suffix = f" to {description_of(value)}"
        return self

    def does_not_match(self, actual: Any) -> bool:
        if self.__description_suffix:
            raise NotImplementedError(
                "`expect(...).not_to(change(...).from_(...).to(...))` is not "
                "supported"
            )
        self.matches(actual)
        return (
            self._given_a_block
            and self._matches_before
            and not self._details.changed()
        )

    @property
    def failure_message_when_negated(self) -> str:
        if not self._given_a_block:
            return self._not_given_a_block_failure()
        if not self._matches_before:
            return self._before_value_failure()
        return (
            f"expected {self._details.value_representation} not to have "
            f"changed, but did change from {self._actual_before_description} "
            f"to {description_of(self._details.actual_after)}"
        )

    def _change_description(self) -> str:
        before = description_of(self._expected_before)
        return f"from {before}{self.__description_suffix}"


class ChangeToValue(SpecificValuesChange):
    def __init__(self, details: ChangeDetails, expected_after: Any) -> None:
        super().__init__(details, _MATCH_ANYTHING, expected_after)
        self.__description_suffix = ""

    def from_(self, value: Any) -> ChangeToValue:
        self._expected_before = value
        self.__description_suffix = f" from {description_of(value)}"
        return self

    def does_not_match(self, actual: Any) -> bool:
        raise NotImplementedError(
            "`expect(...).not_to(change(...).to(...))` is not supported"
        )

    def _change_description(self) -> str:
        after = description_of(self._expected_after)
        return f"to {after}{self.__description_suffix}"


def change(
    receiver: Union[Callable[[], Any], Any] = None, message: Optional[str] = None
) -> Change:
    """
    Observe a value around an action.

    ``change(obj, "attribute")`` reads an attribute (calling it when it is a
    bound method); ``change(lambda: expression)`` evaluates a callable.
    """
    if message is None and callable(receiver):
        return Change(ChangeDetails(value_function=receiver))
    return Change(ChangeDetails(receiver, message))


__all__ = [
    "Change",
    "ChangeDetails",
    "ChangeFromValue",
    "ChangeRelatively",
    "ChangeToValue",
    "SpecificValuesChange",
    "change",
]
