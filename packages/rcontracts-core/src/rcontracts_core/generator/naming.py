"""Identifier helpers for generated artifacts."""

from __future__ import annotations

import keyword
import re

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]+")


def to_snake_case(name: str) -> str:
    """Convert a contract name to a snake_case module stem.

    Example:
        >>> to_snake_case("UserProfile")
        'user_profile'
        >>> to_snake_case("HTTPStatus")
        'http_status'
    """
    spaced = _WORD_BOUNDARY.sub("_", name)
    return _NON_ALNUM.sub("_", spaced).strip("_").lower()


def to_pascal_case(key: str) -> str:
    """Convert a field name to a PascalCase type name fragment.

    Example:
        >>> to_pascal_case("lastActive")
        'LastActive'
        >>> to_pascal_case("first-name")
        'FirstName'
    """
    parts = [part for part in _NON_ALNUM.split(key) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def is_attribute_name(key: str) -> bool:
    """Return True if key can be written as a class-body annotation."""
    return key.isidentifier() and not keyword.iskeyword(key)
