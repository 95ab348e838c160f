"""msgrender exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information, so
callers can distinguish failures by type and code instead of matching
message strings.

Hierarchy:
    MessageError
    ├── TemplateSyntaxError       unterminated token (carries offset)
    ├── TokenGrammarError         malformed token body
    ├── UnknownFormatterError     explicit token names an unregistered formatter
    ├── PropertyValidationError   formatter property rejected
    └── FormatError               value could not be formatted
        └── VariableError         render-time variable failure (carries kind)

Python 3.13+. Zero external dependencies.
"""

from msgrender.enums import VariableErrorKind

from .codes import Diagnostic

__all__ = [
    "FormatError",
    "MessageError",
    "PropertyValidationError",
    "TemplateSyntaxError",
    "TokenGrammarError",
    "UnknownFormatterError",
    "VariableError",
]


class MessageError(Exception):
    """Base exception for all msgrender errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class TemplateSyntaxError(MessageError):
    """Template could not be split into fragments.

    Raised when a token prefix is never closed by a matching suffix.
    Compilation is all-or-nothing, so no Message is produced.
    """

    @property
    def offset(self) -> int | None:
        """Character offset of the failing token prefix."""
        return self.diagnostic.offset if self.diagnostic else None


class TokenGrammarError(MessageError):
    """Token body does not match `variable(;formatter(;key=value)*)?`.

    Examples:
    - Empty token: ${}
    - Empty variable name: ${ ;decimal}
    - Empty formatter name: ${price; }
    - Property without '=': ${price;decimal;rounding}
    """


class UnknownFormatterError(MessageError):
    """Explicit token names a formatter that is not registered."""

    @property
    def formatter_name(self) -> str | None:
        """Name of the unregistered formatter."""
        return self.diagnostic.formatter_name if self.diagnostic else None


class PropertyValidationError(MessageError):
    """Formatter property bag failed validation.

    Raised for unknown keys, empty values, unparsable values, and numeric
    constraint violations (e.g. negative decimalPlaces).
    """

    @property
    def property_name(self) -> str | None:
        """Name of the offending property, if a single one is at fault."""
        return self.diagnostic.property_name if self.diagnostic else None


class FormatError(MessageError):
    """Value could not be formatted.

    Raised by Formatter.format() when the value's runtime type is not
    supported, when the value is None and the formatter has no default,
    or when the locale data service rejects the value.
    """


class VariableError(FormatError):
    """Render-time failure tied to a specific variable.

    The kind attribute identifies the cause, allowing the caller to
    address the problem (supply the variable, convert its type, or
    register a default formatter).

    Attributes:
        kind: Reason for the failure
        variable_name: Variable that could not be rendered
    """

    def __init__(self, message: str | Diagnostic, *, kind: VariableErrorKind) -> None:
        """Initialize VariableError.

        Args:
            message: Error message string OR Diagnostic object
            kind: Reason the variable could not be rendered
        """
        super().__init__(message)
        self.kind = kind

    @property
    def variable_name(self) -> str | None:
        """Variable that could not be rendered."""
        return self.diagnostic.variable_name if self.diagnostic else None
