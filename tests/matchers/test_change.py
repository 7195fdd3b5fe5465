from array import array
from collections import deque
from types import SimpleNamespace
from typing import Any, Deque, List

import pytest

from expect_changes import ExpectationNotMet, MatcherUsageError, change, expect
from expect_changes.matchers.change import ChangeDetails


class Counter:
    total = 0

    def __init__(self) -> None:
        self.items: List[Any] = []

    def count(self) -> int:
        return len(self.items)


def test_change_by() -> None:
    counter = Counter()

    expect(lambda: counter.items.append(1)).to(change(counter, "count").by(1))

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(lambda: counter.items.append(1)).to(change(counter, "count").by(2))

    assert str(excinfo.value) == (
        "expected `Counter#count` to have changed by 2, but was changed by 1"
    )


def test_change_by_at_least_and_at_most() -> None:
    holder = SimpleNamespace(value=10)

    def add_five() -> None:
        holder.value += 5

    expect(add_five).to(change(lambda: holder.value).by_at_least(5))
    expect(add_five).to(change(lambda: holder.value).by_at_most(5))

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(add_five).to(change(lambda: holder.value).by_at_least(6))

    assert str(excinfo.value) == (
        "expected `holder.value` to have changed by at least 6, "
        "but was changed by 5"
    )

    matcher = change(lambda: holder.value).by_at_most(4)
    assert matcher.description == "change `holder.value` by at most 4"
    assert not matcher.matches(add_five)


def test_in_place_mutation_is_detected() -> None:
    items: List[int] = []

    expect(lambda: items.append(1)).to(change(lambda: items).from_([]).to([1]))


def test_in_place_mutation_of_other_collections_is_detected() -> None:
    queue: Deque[int] = deque()

    expect(lambda: queue.append(1)).to(change(lambda: queue))
    expect(lambda: queue.append(2)).to(
        change(lambda: queue).from_(deque([1])).to(deque([1, 2]))
    )

    with pytest.raises(ExpectationNotMet, match=r"but is still deque\(\[1, 2\]\)"):
        expect(lambda: None).to(change(lambda: queue))

    numbers = array("i")
    expect(lambda: numbers.append(1)).to(change(lambda: numbers))


def test_class_receiver() -> None:
    def bump() -> None:
        Counter.total += 1

    try:
        matcher = change(Counter, "total")
        assert matcher.description == "change `Counter.total`"
        expect(bump).to(matcher)
    finally:
        Counter.total = 0


def test_from_failures() -> None:
    holder = SimpleNamespace(value=1)

    def set_two() -> None:
        holder.value = 2

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(set_two).to(change(holder, "value").from_(0).to(2))

    assert str(excinfo.value) == (
        "expected `SimpleNamespace#value` to have initially been 0, but was 1"
    )

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(lambda: None).to(change(holder, "value").to(3).from_(2))

    assert str(excinfo.value) == (
        "expected `SimpleNamespace#value` to have changed to 3 from 2, "
        "but did not change"
    )


def test_descriptions() -> None:
    holder = SimpleNamespace(value=1)

    assert change(holder, "value").description == "change `SimpleNamespace#value`"
    assert (
        change(holder, "value").from_(1).to(2).description
        == "change `SimpleNamespace#value` from 1 to 2"
    )
    assert (
        change(holder, "value").to(2).description
        == "change `SimpleNamespace#value` to 2"
    )
    assert change(holder, "value").by(1).description == (
        "change `SimpleNamespace#value` by 1"
    )


def test_value_representation_fallback() -> None:
    holder = SimpleNamespace(a=1, b=2)

    def read() -> int:
        return int(holder.a)

    assert change(read).description == "change result"

    matchers = [change(lambda: holder.a), change(lambda: holder.b)]
    assert [m.description for m in matchers] == ["change result", "change result"]


def test_not_given_a_block() -> None:
    holder = SimpleNamespace(value=1)

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(5).to(change(holder, "value"))

    assert str(excinfo.value) == (
        "expected `SimpleNamespace#value` to have changed, "
        "but was not given a block"
    )

    with pytest.raises(ExpectationNotMet, match="was not given a block"):
        expect(5).to(change(holder, "value").by(1))

    with pytest.raises(ExpectationNotMet, match="was not given a block"):
        expect(5).to(change(holder, "value").from_(1))


def test_not_to_change() -> None:
    holder = SimpleNamespace(value=1)

    def set_two() -> None:
        holder.value = 2

    expect(lambda: None).not_to(change(holder, "value"))
    expect(lambda: None).not_to(change(holder, "value").from_(1))

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(set_two).not_to(change(holder, "value"))

    assert str(excinfo.value) == (
        "expected `SimpleNamespace#value` not to have changed, "
        "but did change from 1 to 2"
    )

    with pytest.raises(ExpectationNotMet) as excinfo:
        expect(lambda: None).not_to(change(holder, "value").from_(1))

    assert str(excinfo.value) == (
        "expected `SimpleNamespace#value` to have initially been 1, but was 2"
    )


@pytest.mark.parametrize(
    "chain",
    [
        lambda matcher: matcher.by(1),
        lambda matcher: matcher.to(1),
        lambda matcher: matcher.from_(1).to(2),
    ],
)
def test_unsupported_negations(chain: Any) -> None:
    holder = SimpleNamespace(value=1)

    with pytest.raises(NotImplementedError):
        expect(lambda: None).not_to(chain(change(holder, "value")))


def test_invalid_arguments() -> None:
    with pytest.raises(MatcherUsageError):
        change(5)

    with pytest.raises(MatcherUsageError):
        ChangeDetails(Counter(), "total", value_function=lambda: 1)
