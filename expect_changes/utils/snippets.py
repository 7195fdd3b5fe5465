import linecache
import logging
import re
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

_LAMBDA = re.compile(r"\blambda\s*:")

_OPENING = "([{"
_CLOSING = ")]}"
_QUOTES = "'\""


def _body_of_lambda(line: str, start: int) -> Optional[str]:
    """
    Scan forward from the end of ``lambda:`` until the expression is closed
    by an unbalanced bracket, a top-level comma or the end of the line.
    """
    depth = 0
    quote: Optional[str] = None
    end = len(line)
    for index in range(start, len(line)):
        char = line[index]
        if quote is not None:
            if char == quote and line[index - 1] != "\\":
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char in _OPENING:
            depth += 1
        elif char in _CLOSING:
            if depth == 0:
                end = index
                break
            depth -= 1
        elif char == "," and depth == 0:
            end = index
            break
        elif char == "#":
            end = index
            break

    if quote is not None or depth != 0:
        # The lambda continues on the following line.
        return None

    body = line[start:end].strip()
    return body or None


def lambda_snippet(function: Callable[[], Any]) -> Optional[str]:
    """
    Return the source text of the body of a zero-argument lambda, e.g.
    ``thing.a`` for ``lambda: thing.a``.

    Only unambiguous cases are handled: the source line must be available
    and hold exactly one zero-argument lambda. Anything else returns
    ``None``.
    """
    if getattr(function, "__name__", None) != "<lambda>":
        return None

    code = getattr(function, "__code__", None)
    if code is None:
        return None

    line = linecache.getline(code.co_filename, code.co_firstlineno)
    matches = list(_LAMBDA.finditer(line))
    if len(matches) != 1:
        logger.debug(
            "Cannot extract lambda body from %s:%d (%d candidates)",
            code.co_filename,
            code.co_firstlineno,
            len(matches),
        )
        return None

    return _body_of_lambda(line, matches[0].end())
