from __future__ import annotations

import re
from functools import lru_cache

from sql_reporter.errors import InvalidPatternError

_DELIMITERS = frozenset("/#~!@%;")

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


def _split_delimited(pattern: str) -> tuple[str, str] | None:
    """Split ``/body/flags`` into body and flags, or None for a bare regex."""
    if len(pattern) < 2 or pattern[0] not in _DELIMITERS:
        return None
    end = pattern.rfind(pattern[0])
    if end == 0:
        return None
    flags = pattern[end + 1 :]
    if any(letter not in _FLAGS for letter in flags):
        return None
    return pattern[1:end], flags


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a query pattern, always case-insensitive.

    Accepts bare regexes (``^SELECT``) and delimited ones with trailing
    flags (``/^SELECT/i``, ``#.*#i``). A tail that is not made of known flag
    letters means the pattern is bare, so ``/api/users`` is a plain regex.
    """
    flags = re.IGNORECASE
    body = pattern
    delimited = _split_delimited(pattern)
    if delimited is not None:
        body, flag_letters = delimited
        for letter in flag_letters:
            flags |= _FLAGS[letter]

    try:
        return re.compile(body, flags)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def matches(pattern: str, text: str) -> bool:
    return compile_pattern(pattern).search(text) is not None
