#!/usr/bin/env python3
r"""Glob pattern matching for branches, tags and repository paths.

This module provides pattern matching functionality for ActionCheck:
- Glob translation to anchored regular expressions (*, **, ?, [...], {a,b})
- Compiled pattern caching
- Path normalization for consistent matching
- Best-effort matching: a malformed pattern never matches, never raises
- Multiple pattern support with OR logic and include/exclude combination

Example:
    >>> matches_pattern("src/**", "src/a/b/c.py")
    True
    >>> matcher = PatternMatcher()
    >>> matcher.add_glob_pattern("release/*")
    >>> matcher.matches("release/v1")
    True
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePath
from typing import Iterable, List, Optional, Pattern, Sequence, Union

SEPARATOR = "/"


class GlobSyntaxError(ValueError):
    """Raised internally when a glob pattern cannot be translated."""


def _translate_class(pattern: str, start: int) -> tuple:
    """Translate a ``[...]`` character class.

    Args:
        pattern: Full glob pattern
        start: Index of the opening bracket

    Returns:
        Tuple of (regex fragment, index after the closing bracket)

    Raises:
        GlobSyntaxError: If the class is never closed
    """
    i = start + 1
    negate = False
    if i < len(pattern) and pattern[i] in "!^":
        negate = True
        i += 1

    members: List[str] = []
    first = True
    while True:
        if i >= len(pattern):
            raise GlobSyntaxError(f"unterminated character class in {pattern!r}")
        char = pattern[i]
        if char == "]" and not first:
            break
        escaped = char == "\\"
        if escaped:
            i += 1
            if i >= len(pattern):
                raise GlobSyntaxError(f"trailing escape in {pattern!r}")
            char = pattern[i]
        if (
            char == "-"
            and not escaped
            and members
            and i + 1 < len(pattern)
            and pattern[i + 1] != "]"
        ):
            members.append("-")
        else:
            members.append(re.escape(char))
        first = False
        i += 1

    body = "".join(members)
    # A class never matches the separator, not even through a range
    if negate:
        return f"[^/{body}]", i + 1
    return f"(?!/)[{body}]", i + 1


def translate_glob(pattern: str) -> str:
    """Translate a glob pattern into an anchored regular expression.

    ``*`` matches within one path segment, ``**`` as a whole segment matches
    zero or more segments, ``?`` matches one non-separator character.

    Args:
        pattern: Glob pattern

    Returns:
        Regular expression source matching the whole candidate

    Raises:
        GlobSyntaxError: If the pattern is malformed
    """
    parts: List[str] = []
    brace_depth = 0
    i = 0
    n = len(pattern)

    while i < n:
        char = pattern[i]

        if char == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                segment_start = i == 0 or pattern[i - 1] == SEPARATOR
                j = i
                while j < n and pattern[j] == "*":
                    j += 1
                segment_end = j == n or pattern[j] == SEPARATOR

                if segment_start and segment_end:
                    if j == n and i == 0:
                        parts.append(".*")
                    elif j == n:
                        # "dir/**" also matches "dir" itself
                        parts.pop()
                        parts.append("(?:/.*)?")
                    else:
                        # "**/" matches zero or more leading segments
                        parts.append("(?:.*/)?")
                        j += 1
                    i = j
                    continue

                parts.append("[^/]*")
                i = j
                continue

            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            fragment, i = _translate_class(pattern, i)
            parts.append(fragment)
            continue
        elif char == "{":
            brace_depth += 1
            parts.append("(?:")
        elif char == "," and brace_depth:
            parts.append("|")
        elif char == "}" and brace_depth:
            brace_depth -= 1
            parts.append(")")
        elif char == "\\":
            i += 1
            if i >= n:
                raise GlobSyntaxError(f"trailing escape in {pattern!r}")
            parts.append(re.escape(pattern[i]))
        else:
            parts.append(re.escape(char))
        i += 1

    if brace_depth:
        raise GlobSyntaxError(f"unterminated brace group in {pattern!r}")

    return "".join(parts)


@lru_cache(maxsize=1024)
def compile_glob(pattern: str, case_sensitive: bool = True) -> Optional[Pattern]:
    """Compile glob pattern, returning None for malformed patterns.

    Args:
        pattern: Glob pattern
        case_sensitive: Whether matching preserves case

    Returns:
        Compiled regex, or None if the pattern is invalid
    """
    flags = re.DOTALL if case_sensitive else re.DOTALL | re.IGNORECASE
    try:
        return re.compile(translate_glob(pattern), flags)
    except (GlobSyntaxError, re.error):
        return None


def matches_pattern(pattern: str, candidate: str) -> bool:
    """Check if candidate matches glob pattern in full.

    Args:
        pattern: Glob pattern
        candidate: Branch, tag or path to test

    Returns:
        True if the whole candidate matches; False for invalid patterns
    """
    compiled = compile_glob(pattern)
    if compiled is None:
        return False
    return compiled.fullmatch(candidate) is not None


def matches_any(patterns: Iterable[str], candidate: str) -> bool:
    """Check if candidate matches any pattern.

    An empty pattern list matches nothing; callers decide what emptiness
    means at their use site.
    """
    return any(matches_pattern(pattern, candidate) for pattern in patterns)


def normalize_path(path: Union[str, PurePath]) -> str:
    """Normalize repository-relative path or path pattern.

    Converts separators, trims whitespace, and strips any leading ``./``
    segments and leading slashes.

    Args:
        path: Path or pattern to normalize

    Returns:
        Normalized path (may be empty)
    """
    if isinstance(path, PurePath):
        path = str(path)

    norm = path.strip().replace("\\", "/")
    while norm.startswith("./"):
        norm = norm[2:]
    return norm.lstrip("/")


def normalize_paths(paths: Iterable[str]) -> List[str]:
    """Normalize and deduplicate paths, keeping first-occurrence order."""
    seen = set()
    result = []
    for path in paths:
        norm = normalize_path(path)
        if not norm or norm in seen:
            continue
        seen.add(norm)
        result.append(norm)
    return result


@dataclass
class PatternEntry:
    """A single compiled pattern."""

    pattern: str
    compiled: Optional[Pattern] = None
    case_sensitive: bool = True

    @property
    def valid(self) -> bool:
        """Return True if the pattern compiled."""
        return self.compiled is not None

    def matches(self, candidate: str) -> bool:
        """Check if candidate matches; invalid entries never match."""
        return self.valid and self.compiled.fullmatch(candidate) is not None


class PatternMatcher:
    """Ordered set of glob patterns with OR logic.

    Features:
    - Case-sensitive matching by default
    - Compiled pattern caching
    - Malformed patterns kept but never matching
    """

    def __init__(self, patterns: Optional[Sequence[str]] = None, case_sensitive: bool = True):
        """Initialize pattern matcher.

        Args:
            patterns: Optional initial glob patterns
            case_sensitive: Whether patterns are case-sensitive
        """
        self._patterns: List[PatternEntry] = []
        self._case_sensitive = case_sensitive
        for pattern in patterns or []:
            self.add_glob_pattern(pattern)

    def add_glob_pattern(self, pattern: str) -> None:
        """Add glob pattern.

        Args:
            pattern: Glob pattern (e.g., "main", "release/**", "v*")
        """
        self._patterns.append(
            PatternEntry(
                pattern=pattern,
                compiled=compile_glob(pattern, self._case_sensitive),
                case_sensitive=self._case_sensitive,
            )
        )

    def matches(self, candidate: str) -> bool:
        """Check if candidate matches any pattern.

        Args:
            candidate: String to check

        Returns:
            True if candidate matches any pattern
        """
        return any(entry.matches(candidate) for entry in self._patterns)

    def matches_any_of(self, candidates: Iterable[str]) -> bool:
        """Check if any of several candidate spellings matches."""
        return any(self.matches(candidate) for candidate in candidates)

    def __bool__(self) -> bool:
        """Return True if any patterns are registered."""
        return bool(self._patterns)


class MultiMatcher:
    """Include and exclude pattern matchers combined.

    Evaluation order:
    1. If the candidate matches any exclude pattern, reject
    2. If there are no include patterns, accept
    3. Otherwise the candidate must match an include pattern
    """

    def __init__(
        self,
        include: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        case_sensitive: bool = True,
    ):
        """Initialize multi-matcher.

        Args:
            include: Include glob patterns
            exclude: Exclude glob patterns
            case_sensitive: Default case sensitivity
        """
        self._include = PatternMatcher(include, case_sensitive)
        self._exclude = PatternMatcher(exclude, case_sensitive)

    def matches(self, candidate: str) -> bool:
        """Check if candidate passes the include/exclude filter."""
        if self._exclude.matches(candidate):
            return False

        if not self._include:
            return True

        return self._include.matches(candidate)

    def filter(self, candidates: Iterable[str]) -> List[str]:
        """Return the candidates that pass, preserving order."""
        return [candidate for candidate in candidates if self.matches(candidate)]
