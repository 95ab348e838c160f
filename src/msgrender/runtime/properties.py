"""Formatter property validation and parsing.

Property bags come straight from token text, so every key and value is a
string. Keys are matched case-insensitively after trimming: the normalization
step is applied once, up front, and everything downstream works with the
canonical property names declared by the formatter family.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Iterable, Mapping

from msgrender.diagnostics import ErrorTemplate, PropertyValidationError

__all__ = [
    "normalize_key",
    "parse_bool",
    "parse_int",
    "parse_non_negative_int",
    "restrict_properties",
]

# Plain ASCII decimal integer; int() alone would also accept "1_000" and
# non-ASCII digits.
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

_BOOLEAN_VALUES: dict[str, bool] = {"true": True, "false": False}


def normalize_key(key: str) -> str:
    """Normalize a property key for case-insensitive comparison.

    Example:
        >>> normalize_key("  decimalPlaces ")
        'decimalplaces'
    """
    return key.strip().lower()


def restrict_properties(
    properties: Mapping[str, str] | None, allowed: Iterable[str]
) -> dict[str, str]:
    """Validate a property bag against an allow-list.

    Args:
        properties: Raw property bag (None or empty for no properties)
        allowed: Canonical property names accepted by the formatter family

    Returns:
        Mapping of canonical property name to trimmed value. When a bag
        spells the same property twice with different casing, the last
        spelling wins.

    Raises:
        TypeError: If a key or value is not a string
        PropertyValidationError: If any key is not in the allow-list
            (UNKNOWN_PROPERTY) or a value is blank (EMPTY_PROPERTY)

    Example:
        >>> restrict_properties({" ROUNDING ": "true"}, ["rounding"])
        {'rounding': 'true'}
    """
    if not properties:
        return {}

    canonical = {normalize_key(name): name for name in allowed}

    unknown: list[str] = []
    resolved: dict[str, str] = {}
    for key, value in properties.items():
        if not isinstance(key, str) or not isinstance(value, str):
            msg = (
                "Property keys and values must be str, got "
                f"{type(key).__name__}={type(value).__name__}"
            )
            raise TypeError(msg)
        name = canonical.get(normalize_key(key))
        if name is None:
            unknown.append(key)
            continue
        resolved[name] = value.strip()

    if unknown:
        raise PropertyValidationError(ErrorTemplate.unknown_properties(unknown, canonical.values()))

    for name, value in resolved.items():
        if not value:
            raise PropertyValidationError(ErrorTemplate.empty_property(name))

    return resolved


def parse_int(name: str, value: str) -> int:
    """Parse an integer property value.

    Raises:
        PropertyValidationError: If value is not a decimal integer
    """
    if not _INTEGER_PATTERN.fullmatch(value):
        raise PropertyValidationError(
            ErrorTemplate.invalid_property_value(name, value, "integer")
        )
    try:
        return int(value)
    except ValueError:
        # Digit strings beyond the interpreter's int conversion limit.
        raise PropertyValidationError(
            ErrorTemplate.invalid_property_value(name, value[:20] + "...", "integer")
        ) from None


def parse_non_negative_int(name: str, value: str, maximum: int | None = None) -> int:
    """Parse an integer property value that must be >= 0.

    Args:
        name: Canonical property name
        value: Raw property value
        maximum: Inclusive upper bound, or None for no bound

    Raises:
        PropertyValidationError: If value is not an integer
            (INVALID_PROPERTY_VALUE), or is negative or above maximum
            (PROPERTY_CONSTRAINT)
    """
    number = parse_int(name, value)
    if number < 0:
        raise PropertyValidationError(
            ErrorTemplate.property_constraint(name, number, "non-negative")
        )
    if maximum is not None and number > maximum:
        raise PropertyValidationError(
            ErrorTemplate.property_constraint(name, number, f"at most {maximum}")
        )
    return number


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean property value ("true"/"false", case-insensitive).

    Raises:
        PropertyValidationError: If value is neither true nor false
    """
    try:
        return _BOOLEAN_VALUES[value.strip().lower()]
    except KeyError:
        raise PropertyValidationError(
            ErrorTemplate.invalid_property_value(name, value, "true or false")
        ) from None
