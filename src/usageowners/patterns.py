from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from functools import lru_cache


class MatchMode(str, enum.Enum):
    """How a compiled pattern is applied to a path.

    SUBSTRING is the compatibility mode: the translated expression may match
    anywhere inside the path, so ``a.js`` also owns ``src/a.jsx``.
    ANCHORED requires the whole path to match, CODEOWNERS style.
    """

    SUBSTRING = "substring"
    ANCHORED = "anchored"


@dataclass(frozen=True)
class CompiledPattern:
    raw: str
    mode: MatchMode
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        if self.mode is MatchMode.SUBSTRING:
            return self.regex.search(path) is not None
        return self.regex.fullmatch(path) is not None


def _glob_to_regex(pat: str) -> str:
    """Translate an ownership glob to a regex.

    Supported:
      - ** (any characters, across directories)
      - *  (any characters within a segment)
      - ?  (single char within a segment)

    Everything else, including '/', '.' and '[', is literal.
    """
    out: list[str] = []
    i = 0
    L = len(pat)

    while i < L:
        c = pat[i]

        if c == "*":
            if i + 1 < L and pat[i + 1] == "*":
                # collapse consecutive *'s in a ** run
                while i + 1 < L and pat[i + 1] == "*":
                    i += 1
                out.append(".*")
            else:
                out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(c))

        i += 1

    return "".join(out)


def _anchored_regex(pat: str) -> str:
    # Trailing slash is shorthand for "this directory and everything under it"
    if pat.endswith("/"):
        pat = pat.rstrip("/") + "/**"

    body = _glob_to_regex(pat)

    # - If pattern contains '/', we match from repo root (start of path)
    # - If pattern has no '/', we treat it as a basename glob (matches any file basename)
    if "/" in pat:
        return body
    return r"(?:.*/)?" + body


@lru_cache(maxsize=4096)
def compile_pattern(pattern: str, mode: MatchMode = MatchMode.SUBSTRING) -> CompiledPattern:
    mode = MatchMode(mode)
    pat = pattern.lstrip("/")

    if mode is MatchMode.SUBSTRING:
        rx = _glob_to_regex(pat)
    else:
        rx = _anchored_regex(pat)

    return CompiledPattern(raw=pattern, mode=mode, regex=re.compile(rx))
