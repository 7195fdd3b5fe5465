from expect_changes.matchers.abstract import And, BlockMatcher, Matcher
from expect_changes.matchers.before_and_after import (
    BeforeAndAfter,
    before_and_after,
    check_before_and_after,
    expect_before_and_after,
)
from expect_changes.matchers.change import change
from expect_changes.matchers.make_changes import (
    MakeChanges,
    change_all,
    check_all,
    check_all_before_and_after,
    make_changes,
)
from expect_changes.matchers.values import (
    a_value_within,
    be,
    be_within,
    eq,
    include,
)

__all__ = [
    "And",
    "BeforeAndAfter",
    "BlockMatcher",
    "MakeChanges",
    "Matcher",
    "a_value_within",
    "be",
    "be_within",
    "before_and_after",
    "change",
    "change_all",
    "check_all",
    "check_all_before_and_after",
    "check_before_and_after",
    "eq",
    "expect_before_and_after",
    "include",
    "make_changes",
]
