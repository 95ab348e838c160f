"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every msgrender
exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Template syntax errors (fragmentation)
        2000-2999: Token grammar errors
        3000-3999: Compilation errors (formatter lookup)
        4000-4999: Formatter property validation errors
        5000-5999: Formatting errors
        6000-6999: Render-time variable errors
    """

    # Template syntax errors (1000-1999)
    UNTERMINATED_TOKEN = 1001

    # Token grammar errors (2000-2999)
    EMPTY_TOKEN = 2001
    EMPTY_VARIABLE_NAME = 2002
    EMPTY_FORMATTER_NAME = 2003
    MALFORMED_PROPERTY = 2004

    # Compilation errors (3000-3999)
    UNKNOWN_FORMATTER = 3001

    # Property validation errors (4000-4999)
    UNKNOWN_PROPERTY = 4001
    EMPTY_PROPERTY = 4002
    INVALID_PROPERTY_VALUE = 4003
    PROPERTY_CONSTRAINT = 4004

    # Formatting errors (5000-5999)
    TYPE_MISMATCH = 5001
    VALUE_REQUIRED = 5002
    FORMATTING_FAILED = 5003

    # Render-time variable errors (6000-6999)
    VARIABLE_UNDEFINED = 6001
    VARIABLE_TYPE_UNSUPPORTED = 6002
    NO_FORMATTER_FOR_TYPE = 6003
    VARIABLE_VALUE_MISSING = 6004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        offset: Character offset in the template (None if not applicable)
        hint: Suggestion for fixing the error
        variable_name: Variable the error relates to (render errors)
        formatter_name: Formatter the error relates to
        property_name: Formatter property that failed validation
        expected_type: Expected value type(s) (format errors)
        received_type: Actual value type (format errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    offset: int | None = None
    hint: str | None = None
    variable_name: str | None = None
    formatter_name: str | None = None
    property_name: str | None = None
    expected_type: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[UNTERMINATED_TOKEN]: Opening '${' at offset 6 without a matching closing '}'
              --> offset 6
              = help: Close the token with '}' or escape the opening '${'

        Example with format context:
            error[VARIABLE_TYPE_UNSUPPORTED]: Variable 'price' type (str) is not supported ...
              = variable: price
              = formatter: DecimalFormatter
              = expected: Decimal, float, int
              = received: str

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
