from expect_changes.assertions import (
    assert_changes,
    assert_does_not_change,
    expecting,
)
from expect_changes.errors import (
    ExpectationNotMet,
    InvalidChangeExpectation,
    MatcherUsageError,
)
from expect_changes.expectations import expect
from expect_changes.matchers import (
    a_value_within,
    be,
    be_within,
    before_and_after,
    change,
    change_all,
    check_all,
    check_all_before_and_after,
    check_before_and_after,
    eq,
    expect_before_and_after,
    include,
    make_changes,
)
from expect_changes.utils.formatting import configure_formatting

__all__ = [
    "ExpectationNotMet",
    "InvalidChangeExpectation",
    "MatcherUsageError",
    "a_value_within",
    "assert_changes",
    "assert_does_not_change",
    "be",
    "be_within",
    "before_and_after",
    "change",
    "change_all",
    "check_all",
    "check_all_before_and_after",
    "check_before_and_after",
    "configure_formatting",
    "eq",
    "expect",
    "expect_before_and_after",
    "expecting",
    "include",
    "make_changes",
]
