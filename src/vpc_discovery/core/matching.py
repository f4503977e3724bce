"""Wildcard matching, tag lookup and EC2 filter builders."""

import re
from typing import Iterable, Optional

# Wildcards never match ':'
_NO_COLON = "[^:]"


def wildcard_to_regex(pattern: str) -> re.Pattern:
    """Compile a glob pattern ('*' any run, '?' one char) into an anchored regex"""
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(f"{_NO_COLON}*")
        elif char == "?":
            parts.append(_NO_COLON)
        else:
            parts.append(re.escape(char))
    return re.compile("^" + "".join(parts) + "$")


def wildcard_matches(pattern: str, value: Optional[str]) -> bool:
    """Return True if value matches the glob pattern.

    >>> wildcard_matches("test_*", "test_subnet_1")
    True
    >>> wildcard_matches("test_?", "test_12")
    False
    """
    if value is None:
        return False
    return wildcard_to_regex(pattern).match(value) is not None


def value_for_tag(tags: Optional[Iterable[dict]], key: str) -> Optional[str]:
    """Value of the first tag with the given key, or None"""
    return next((t.get("Value") for t in tags or [] if t.get("Key") == key), None)


def name_filter(name: str, values: Iterable[str]) -> dict:
    return {"Name": name, "Values": list(values)}


def tag_filter(key: str, values: Iterable[str]) -> dict:
    return name_filter(f"tag:{key}", values)


def vpc_filter(vpc_id: str) -> dict:
    return name_filter("vpc-id", [vpc_id])
