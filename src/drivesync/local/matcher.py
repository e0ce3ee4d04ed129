"""Skip-pattern matching for local paths."""

from __future__ import annotations

from typing import Optional, Sequence


def normalize_pattern(pattern: str) -> str:
    """Strip a single trailing '/*' so 'node_modules/*' behaves like 'node_modules'."""
    if pattern.endswith("/*"):
        return pattern[:-2]
    return pattern


def should_skip(path: str, patterns: Optional[Sequence[str]]) -> bool:
    """
    Return True if `path` is excluded by any of `patterns`.

    Matching is plain substring containment against the path with backslashes
    turned into forward slashes. A pattern matches when the path contains
    "/<pattern>" or "<pattern>/", or equals the pattern. No wildcard other than
    the stripped trailing "/*" is interpreted, and matches are not anchored
    to path components: "/b" is found in "a/bc/d", so pattern "b" excludes it.
    """
    if not patterns:
        return False

    normalized = path.replace("\\", "/")
    for pattern in patterns:
        clean = normalize_pattern(pattern)
        if f"/{clean}" in normalized or f"{clean}/" in normalized or normalized == clean:
            return True
    return False
