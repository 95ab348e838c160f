"""Enumerations for msgrender type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum

__all__ = ["FormatterName", "NumberFamily", "VariableErrorKind"]


class FormatterName(StrEnum):
    """Names under which the standard formatters are registered.

    StrEnum provides automatic string conversion: str(FormatterName.DECIMAL) == "decimal"
    """

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    PERCENTAGE = "percentage"
    CURRENCY = "currency"
    DATE = "date"
    TIME = "time"


class NumberFamily(StrEnum):
    """CLDR number pattern family used by the decimal-family formatters."""

    DECIMAL = "decimal"
    """Plain number: 1,234.5"""

    PERCENT = "percent"
    """Percentage: 12%"""

    CURRENCY = "currency"
    """Monetary amount: $1,234.50"""


class VariableErrorKind(StrEnum):
    """Reason a variable could not be rendered.

    Allows a caller to determine the source of the problem without
    string-matching error messages.
    """

    UNDEFINED = "undefined"
    """Variable is not present in the value context."""

    TYPE_UNSUPPORTED = "type_unsupported"
    """Variable type is not supported by the token's explicit formatter."""

    NO_FORMATTER = "no_formatter"
    """No default formatter is registered for the variable's runtime type."""

    VALUE_MISSING = "value_missing"
    """Variable is None and the formatter defines no default value."""
