from __future__ import annotations

import re
from typing import Any, Optional

ELLIPSIS = "..."

_NON_BLANK = re.compile(r"\S")


def indent_multiline_message(message: str) -> str:
    """
    Indent every line that has visible content by three spaces. Blank lines
    pass through unchanged, and line endings are preserved.
    """
    return "".join(
        "   " + line if _NON_BLANK.search(line) else line
        for line in message.splitlines(keepends=True)
    )


class ObjectFormatter:
    """
    Renders values for failure messages. Long representations are shortened
    by eliding the middle so both ends stay readable.
    """

    def __init__(self, max_length: Optional[int] = 200) -> None:
        self.__max_length = max_length

    @property
    def max_length(self) -> Optional[int]:
        return self.__max_length

    def format(self, value: Any) -> str:
        # Local import: matchers depend on this module.
        from expect_changes.matchers.abstract import Matcher

        if isinstance(value, Matcher):
            return value.description
        if isinstance(value, type):
            return value.__name__

        formatted = repr(value)
        if self.__max_length is None or len(formatted) <= self.__max_length:
            return formatted

        half = max((self.__max_length - len(ELLIPSIS)) // 2, 0)
        return formatted[:half] + ELLIPSIS + formatted[len(formatted) - half :]


_object_formatter: Optional[ObjectFormatter] = None
_default_object_formatter = ObjectFormatter()


def configure_formatting(max_length: Optional[int], force: bool = False) -> None:
    """
    Formatting can generally only be configured once, unless force is passed
    on subsequent initializations. Passing ``None`` disables truncation.
    """
    global _object_formatter

    if not force:
        assert _object_formatter is None, "Formatting is already configured"

    if max_length is not None:
        assert max_length > len(ELLIPSIS), "max_length is too small"

    _object_formatter = ObjectFormatter(max_length)


def reset_formatting() -> None:
    global _object_formatter
    _object_formatter = None


def get_object_formatter() -> ObjectFormatter:
    if _object_formatter is None:
        return _default_object_formatter
    return _object_formatter


def description_of(value: Any) -> str:
    return get_object_formatter().format(value)


__all__ = [
    "ObjectFormatter",
    "configure_formatting",
    "description_of",
    "get_object_formatter",
    "indent_multiline_message",
]
