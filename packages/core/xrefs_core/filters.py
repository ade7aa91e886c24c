"""Glob-style filters over fact names and edge kinds.

Dialect:
- ``?`` matches exactly one character other than ``/``
- ``*`` matches zero or more characters other than ``/``
- ``**`` matches any sequence of characters, ``/`` included
- every other character matches itself

Patterns match whole candidates. A list of patterns selects a candidate if
any one of them matches it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import TypeVar

ALL_FILTER = "**"

V = TypeVar("V")


@lru_cache(maxsize=1024)
def filter_to_regexp(pattern: str) -> re.Pattern[str]:
    """Compile a filter pattern to a regular expression.

    The result is meant to be used with ``fullmatch``; it carries no anchors
    of its own.
    """
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            if pattern.startswith("**", i):
                parts.append(".*")
                i += 2
                continue
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(ch))
        i += 1
    return re.compile("".join(parts), re.DOTALL)


@dataclass(frozen=True)
class FactFilter:
    """Compiled set of filter patterns, OR-ed together."""

    patterns: tuple[re.Pattern[str], ...]

    def matches(self, candidate: str) -> bool:
        return any(p.fullmatch(candidate) is not None for p in self.patterns)

    def select(self, mapping: Mapping[str, V]) -> dict[str, V]:
        """Return the entries of ``mapping`` whose keys match."""
        if not self.patterns:
            return {}
        return {k: v for k, v in mapping.items() if self.matches(k)}


def compile_filters(patterns: Iterable[str] | None) -> FactFilter:
    """Compile a list of filter patterns; an empty list selects nothing."""
    return FactFilter(tuple(filter_to_regexp(p) for p in patterns or ()))
