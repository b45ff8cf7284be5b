"""Path filters — ``/regex/flags`` when a pattern starts with a slash, shell glob otherwise."""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

_DELIMITED_RE = re.compile(r"^/(.*)/([a-zA-Z]*)$", re.DOTALL)

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


class PatternError(ValueError):
    """Raised when a regex path filter cannot be compiled."""


def is_regex(pattern: str) -> bool:
    return pattern.startswith("/")


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a ``/body/flags`` pattern into a Python regex."""
    m = _DELIMITED_RE.match(pattern)
    if m is None:
        raise PatternError(f"Regex filter is missing its closing '/': {pattern}")

    body, modifiers = m.group(1), m.group(2)
    flags = 0
    for char in modifiers:
        if char not in _REGEX_FLAGS:
            raise PatternError(f"Unsupported regex modifier {char!r} in {pattern}")
        flags |= _REGEX_FLAGS[char]

    try:
        return re.compile(body, flags)
    except re.error as exc:
        raise PatternError(f"Invalid regex filter {pattern}: {exc}") from exc


def pattern_matches(pattern: str, path: str) -> bool:
    if is_regex(pattern):
        return compile_pattern(pattern).search(path) is not None
    # fnmatch lets '*' cross '/' boundaries
    return fnmatchcase(path, pattern)


def path_matches(
    path: Path | str,
    patterns: Iterable[str],
    root: Optional[Path] = None,
) -> bool:
    """Return True if any pattern matches *path*.

    An empty pattern list matches everything. Patterns are tried in order and
    the first hit wins. When *root* is given, each pattern is also tried
    against the root-anchored (``/docs/readme.md``) and repo-relative
    (``docs/readme.md``) forms of the path.
    """
    patterns = list(patterns)
    if not patterns:
        return True

    candidates = [str(path)]
    if root is not None:
        try:
            relative = Path(path).relative_to(root)
        except ValueError:
            pass
        else:
            candidates.append("/" + relative.as_posix())
            candidates.append(relative.as_posix())

    for pattern in patterns:
        if any(pattern_matches(pattern, candidate) for candidate in candidates):
            return True
    return False
