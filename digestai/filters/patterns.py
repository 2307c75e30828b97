"""File-name pattern matching for ignore rules.

Patterns are either an exact file name or a glob with a single ``*``:
``*suffix``, ``prefix*`` or ``prefix*suffix``. Matching is
case-insensitive. Patterns with more than one ``*`` never match.
"""

from __future__ import annotations

from collections.abc import Iterable

WILDCARD = "*"


def matches(file_name: str, pattern: str) -> bool:
    """Return True if *file_name* matches the ignore *pattern*."""
    name = file_name.lower()
    pat = pattern.lower()
    if name == pat:
        return True

    count = pat.count(WILDCARD)
    if count != 1:
        return False

    prefix, suffix = pat.split(WILDCARD)
    if not prefix:
        return name.endswith(suffix)
    if not suffix:
        return name.startswith(prefix)
    return (
        name.startswith(prefix)
        and name.endswith(suffix)
        and len(name) >= len(prefix) + len(suffix)
    )


def matches_any(file_name: str, patterns: Iterable[str]) -> bool:
    """Return True if any pattern in *patterns* matches *file_name*."""
    return any(matches(file_name, p) for p in patterns)
