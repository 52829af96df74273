"""Duration and percentage grammars for contract constraints.

Latency budgets and polling intervals use the short grammar (ms, s, m).
Freshness durations additionally accept hours and days. All parsers
return None for malformed input instead of raising.
"""

from __future__ import annotations

import re

LATENCY_PATTERN = re.compile(r"^(\d+)(ms|s|m)$")
DURATION_PATTERN = re.compile(r"^(\d+)(ms|s|m|h|d)$")
PERCENTAGE_PATTERN = re.compile(r"^\d+(\.\d+)?%$")

LATENCY_FORMAT_HINT = 'Use format like "100ms", "1s", or "1m"'
DURATION_FORMAT_HINT = 'Use format like "5m", "1h", or "1d"'
PERCENTAGE_FORMAT_HINT = 'Use format like "99.9%"'

_UNIT_MS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}


def _parse(value: object, pattern: re.Pattern[str]) -> int | None:
    if not isinstance(value, str):
        return None
    match = pattern.fullmatch(value)
    if match is None:
        return None
    return int(match.group(1)) * _UNIT_MS[match.group(2)]


def parse_latency_to_ms(value: object) -> int | None:
    """Parse a latency or polling interval string to milliseconds.

    Args:
        value: Duration string such as "100ms", "1s" or "5m".

    Returns:
        Milliseconds, or None if the value does not match the latency grammar.

    Example:
        >>> parse_latency_to_ms("2s")
        2000
        >>> parse_latency_to_ms("1h") is None
        True
    """
    return _parse(value, LATENCY_PATTERN)


def parse_duration_to_ms(value: object) -> int | None:
    """Parse a freshness duration string to milliseconds.

    Args:
        value: Duration string such as "5m", "1h" or "2d".

    Returns:
        Milliseconds, or None if the value does not match the duration grammar.
    """
    return _parse(value, DURATION_PATTERN)


def is_latency(value: object) -> bool:
    """Return True if value matches the latency grammar."""
    return parse_latency_to_ms(value) is not None


def is_duration(value: object) -> bool:
    """Return True if value matches the freshness duration grammar."""
    return parse_duration_to_ms(value) is not None


def is_percentage(value: object) -> bool:
    """Return True if value is a percentage string such as "99.9%"."""
    return isinstance(value, str) and PERCENTAGE_PATTERN.fullmatch(value) is not None
