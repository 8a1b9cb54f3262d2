"""Shared parsing helpers for config values and user-entered positions."""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_verse_number(value: object) -> int | None:
    """Parse a verse number from user input.

    Integers pass through unchanged (range checks happen at fetch time).
    Booleans, floats with a fractional part, blank strings and non-numeric
    text yield `None`.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or not value.is_integer():
            return None
        return int(value)

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None
    digits = normalized[1:] if normalized.startswith(("+", "-")) else normalized
    if not digits.isdecimal():
        return None
    return int(normalized)
