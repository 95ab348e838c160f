"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate", "describe_types"]


def describe_types(types: Iterable[type]) -> str:
    """Render a set of types as a stable, comma-separated list of names.

    Args:
        types: Types to describe

    Returns:
        Sorted type names, e.g. "Decimal, float, int"
    """
    return ", ".join(sorted(t.__name__ for t in types))


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps error wording testable and consistent, and documents every
    error case in one place.
    """

    # ------------------------------------------------------------------
    # Template syntax
    # ------------------------------------------------------------------

    @staticmethod
    def unterminated_token(offset: int, prefix: str, suffix: str) -> Diagnostic:
        """Token prefix without a matching suffix.

        Args:
            offset: Character offset of the token prefix
            prefix: Token prefix delimiter
            suffix: Token suffix delimiter

        Returns:
            Diagnostic for UNTERMINATED_TOKEN
        """
        msg = f"Opening '{prefix}' at offset {offset} without a matching closing '{suffix}'"
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_TOKEN,
            message=msg,
            offset=offset,
            hint=f"Close the token with '{suffix}' or escape the opening '{prefix}'",
        )

    # ------------------------------------------------------------------
    # Token grammar
    # ------------------------------------------------------------------

    @staticmethod
    def empty_token() -> Diagnostic:
        """Token has no contents.

        Returns:
            Diagnostic for EMPTY_TOKEN
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_TOKEN,
            message="Token cannot be empty",
            hint="A token must name at least a variable, e.g. ${name}",
        )

    @staticmethod
    def empty_variable_name(token: str) -> Diagnostic:
        """Token variable-name segment is blank.

        Args:
            token: Raw token contents

        Returns:
            Diagnostic for EMPTY_VARIABLE_NAME
        """
        msg = f"Variable name is empty in token '{token}'"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_VARIABLE_NAME,
            message=msg,
            hint="The first segment of a token is the variable name",
        )

    @staticmethod
    def empty_formatter_name(variable_name: str) -> Diagnostic:
        """Token has a formatter segment that is blank.

        Args:
            variable_name: Variable named by the token

        Returns:
            Diagnostic for EMPTY_FORMATTER_NAME
        """
        msg = f"Formatter name is empty (variable: {variable_name})"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_FORMATTER_NAME,
            message=msg,
            variable_name=variable_name,
            hint="Name a formatter after ';' or remove the separator",
        )

    @staticmethod
    def malformed_property(index: int, segment: str, variable_name: str) -> Diagnostic:
        """Property segment without a key/value separator.

        Args:
            index: 1-based position of the property within the token
            segment: Raw property segment
            variable_name: Variable named by the token

        Returns:
            Diagnostic for MALFORMED_PROPERTY
        """
        msg = f"Property {index} is invalid ({segment}); must be key=value pair"
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_PROPERTY,
            message=msg,
            variable_name=variable_name,
            hint="Write formatter properties as key=value",
        )

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    @staticmethod
    def unknown_formatter(formatter_name: str, variable_name: str) -> Diagnostic:
        """Explicit token names an unregistered formatter.

        Args:
            formatter_name: Formatter named by the token
            variable_name: Variable named by the token

        Returns:
            Diagnostic for UNKNOWN_FORMATTER
        """
        msg = f"Unknown formatter '{formatter_name}' (variable: {variable_name})"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FORMATTER,
            message=msg,
            variable_name=variable_name,
            formatter_name=formatter_name,
            hint="Register the formatter with register_named_formatter() before compiling",
        )

    # ------------------------------------------------------------------
    # Property validation
    # ------------------------------------------------------------------

    @staticmethod
    def unknown_properties(names: Iterable[str], allowed: Iterable[str]) -> Diagnostic:
        """Property bag contains keys outside the allow-list.

        Args:
            names: Unknown property names, as written
            allowed: Property names the formatter accepts

        Returns:
            Diagnostic for UNKNOWN_PROPERTY
        """
        unknown = sorted(names)
        accepted = sorted(allowed)
        label = "property" if len(unknown) == 1 else "properties"
        msg = f"Unknown {label}: {', '.join(unknown)}"
        hint = (
            f"Supported properties: {', '.join(accepted)}"
            if accepted
            else "This formatter accepts no properties"
        )
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_PROPERTY,
            message=msg,
            property_name=unknown[0] if len(unknown) == 1 else None,
            hint=hint,
        )

    @staticmethod
    def empty_property(name: str) -> Diagnostic:
        """Property defined without a value.

        Args:
            name: Property name

        Returns:
            Diagnostic for EMPTY_PROPERTY
        """
        msg = f"Property '{name}' is defined but is empty"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_PROPERTY,
            message=msg,
            property_name=name,
            hint="Assign a value or remove the property",
        )

    @staticmethod
    def invalid_property_value(name: str, value: str, expected: str) -> Diagnostic:
        """Property value could not be parsed.

        Args:
            name: Property name
            value: Raw property value
            expected: Description of the accepted values

        Returns:
            Diagnostic for INVALID_PROPERTY_VALUE
        """
        msg = f"Invalid property {name} value: {value}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PROPERTY_VALUE,
            message=msg,
            property_name=name,
            expected_type=expected,
        )

    @staticmethod
    def property_constraint(name: str, value: int, constraint: str) -> Diagnostic:
        """Property value parsed but violates a constraint.

        Args:
            name: Property name
            value: Parsed value
            constraint: Description of the violated constraint

        Returns:
            Diagnostic for PROPERTY_CONSTRAINT
        """
        msg = f"'{name}' must be {constraint}, got {value}"
        return Diagnostic(
            code=DiagnosticCode.PROPERTY_CONSTRAINT,
            message=msg,
            property_name=name,
        )

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    @staticmethod
    def type_mismatch(
        received: type, supported: Iterable[type], formatter_name: str
    ) -> Diagnostic:
        """Value type is not supported by the formatter.

        Args:
            received: Runtime type of the value
            supported: Types the formatter supports
            formatter_name: Formatter class name

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        msg = f"{received.__name__} is not supported by {formatter_name}"
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=msg,
            formatter_name=formatter_name,
            expected_type=describe_types(supported),
            received_type=received.__name__,
        )

    @staticmethod
    def value_required(formatter_name: str) -> Diagnostic:
        """Value is None and the formatter has no default.

        Args:
            formatter_name: Formatter class name

        Returns:
            Diagnostic for VALUE_REQUIRED
        """
        msg = f"Value cannot be None for {formatter_name}"
        return Diagnostic(
            code=DiagnosticCode.VALUE_REQUIRED,
            message=msg,
            formatter_name=formatter_name,
        )

    @staticmethod
    def formatting_failed(value: object, reason: str, formatter_name: str) -> Diagnostic:
        """Locale formatting service rejected the value.

        Args:
            value: Value being formatted
            reason: Underlying failure description
            formatter_name: Formatter class name

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        msg = f"Formatting failed for '{value}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=msg,
            formatter_name=formatter_name,
            received_type=type(value).__name__,
        )

    # ------------------------------------------------------------------
    # Render-time variables
    # ------------------------------------------------------------------

    @staticmethod
    def variable_undefined(variable_name: str) -> Diagnostic:
        """Variable missing from the value context.

        Args:
            variable_name: Variable name

        Returns:
            Diagnostic for VARIABLE_UNDEFINED
        """
        msg = f"Variable '{variable_name}' does not exist in context"
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_UNDEFINED,
            message=msg,
            variable_name=variable_name,
            hint=f"Pass '{variable_name}' in the context mapping",
        )

    @staticmethod
    def variable_type_unsupported(
        variable_name: str, received: type, supported: Iterable[type], formatter_name: str
    ) -> Diagnostic:
        """Variable type not supported by the token's explicit formatter.

        Args:
            variable_name: Variable name
            received: Runtime type of the value
            supported: Types the formatter supports
            formatter_name: Formatter class name

        Returns:
            Diagnostic for VARIABLE_TYPE_UNSUPPORTED
        """
        supported_names = describe_types(supported)
        msg = (
            f"Variable '{variable_name}' type ({received.__name__}) is not supported "
            f"by the formatter ({formatter_name}). Supported types are: {supported_names}"
        )
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_TYPE_UNSUPPORTED,
            message=msg,
            variable_name=variable_name,
            formatter_name=formatter_name,
            expected_type=supported_names,
            received_type=received.__name__,
        )

    @staticmethod
    def no_formatter_for_type(variable_name: str, received: type) -> Diagnostic:
        """No default formatter registered for the variable's type.

        Args:
            variable_name: Variable name
            received: Runtime type of the value

        Returns:
            Diagnostic for NO_FORMATTER_FOR_TYPE
        """
        msg = (
            f"Variable '{variable_name}' of type {received.__name__} "
            "does not have an associated formatter"
        )
        return Diagnostic(
            code=DiagnosticCode.NO_FORMATTER_FOR_TYPE,
            message=msg,
            variable_name=variable_name,
            received_type=received.__name__,
            hint=(
                "Register a default formatter for this type before compiling, "
                "or name a formatter explicitly in the token"
            ),
        )

    @staticmethod
    def variable_value_missing(variable_name: str, formatter_name: str | None) -> Diagnostic:
        """Variable is None and there is no default to render.

        Args:
            variable_name: Variable name
            formatter_name: Formatter class name, if one was resolved

        Returns:
            Diagnostic for VARIABLE_VALUE_MISSING
        """
        msg = f"Variable '{variable_name}' is None and has no default value"
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_VALUE_MISSING,
            message=msg,
            variable_name=variable_name,
            formatter_name=formatter_name,
        )
