"""
URL glob and HTTP method matching for network expectations.

Glob syntax:
    **   any characters, including "/"
    *    any characters except "/"
    other characters match literally

A URL matches when either its full form or its form without the query
string matches, so `**/articles` covers `/api/articles?limit=10`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit, urlunsplit

ANY_METHOD = "*"


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a URL glob into an anchored regular expression."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


def strip_query(url: str) -> str:
    scheme, netloc, path, _query, _fragment = urlsplit(url)
    return urlunsplit((scheme, netloc, path, "", ""))


@dataclass(frozen=True)
class UrlPattern:
    """A method + URL glob pair."""

    method: str
    glob: str
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "_regex", glob_to_regex(self.glob))

    def matches_method(self, method: str) -> bool:
        return self.method == ANY_METHOD or self.method == method.upper()

    def matches_url(self, url: str) -> bool:
        return bool(self._regex.match(url) or self._regex.match(strip_query(url)))

    def matches(self, method: str, url: str) -> bool:
        return self.matches_method(method) and self.matches_url(url)

    def __str__(self) -> str:
        return f"{self.method} {self.glob}"
