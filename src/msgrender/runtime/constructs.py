"""Render constructs: the compiled steps of a Message.

A compiled Message is an ordered tuple of constructs, one per template
fragment. RenderConstruct is a closed union:

    LiteralConstruct         fixed text
    StaticFormatConstruct    variable + formatter resolved at compile time
    DynamicFormatConstruct   variable + type -> formatter snapshot; the
                             formatter is chosen at render time by the
                             value's exact runtime type

Constructs are frozen. DynamicFormatConstruct keeps a private copy of the
default-formatter registry taken at compile time, so later registrations
never change already-compiled messages.

Python 3.13+.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo
from types import MappingProxyType
from typing import assert_never

from babel import Locale

from msgrender.diagnostics import ErrorTemplate, FormatError, VariableError
from msgrender.enums import VariableErrorKind

from .formatters import Formatter

__all__ = [
    "DynamicFormatConstruct",
    "LiteralConstruct",
    "RenderConstruct",
    "StaticFormatConstruct",
    "check_construct",
    "render_construct",
]


@dataclass(frozen=True, slots=True)
class LiteralConstruct:
    """Fixed text, copied to the output unchanged.

    Attributes:
        text: Literal template text
    """

    text: str


@dataclass(frozen=True, slots=True)
class StaticFormatConstruct:
    """Variable rendered by a formatter named in the token.

    Attributes:
        variable_name: Variable to read from the value context
        formatter: Formatter resolved at compile time
    """

    variable_name: str
    formatter: Formatter


@dataclass(frozen=True, slots=True)
class DynamicFormatConstruct:
    """Variable rendered by the default formatter for its runtime type.

    Attributes:
        variable_name: Variable to read from the value context
        formatters: Read-only snapshot of type -> formatter bindings
    """

    variable_name: str
    formatters: Mapping[type, Formatter]

    def __post_init__(self) -> None:
        """Freeze a private copy of the bindings."""
        object.__setattr__(self, "formatters", MappingProxyType(dict(self.formatters)))


type RenderConstruct = LiteralConstruct | StaticFormatConstruct | DynamicFormatConstruct


def _lookup(context: Mapping[str, object], variable_name: str) -> object:
    if variable_name not in context:
        raise VariableError(
            ErrorTemplate.variable_undefined(variable_name), kind=VariableErrorKind.UNDEFINED
        )
    return context[variable_name]


def _select_formatter(
    construct: StaticFormatConstruct | DynamicFormatConstruct, value: object
) -> Formatter:
    """Pick the formatter for value, enforcing the construct's type rules."""
    name = construct.variable_name
    match construct:
        case StaticFormatConstruct(formatter=formatter):
            if value is not None and not formatter.supports(type(value)):
                raise VariableError(
                    ErrorTemplate.variable_type_unsupported(
                        name, type(value), formatter.supported_types, formatter.name
                    ),
                    kind=VariableErrorKind.TYPE_UNSUPPORTED,
                )
            return formatter
        case DynamicFormatConstruct(formatters=formatters):
            if value is None:
                raise VariableError(
                    ErrorTemplate.variable_value_missing(name, None),
                    kind=VariableErrorKind.VALUE_MISSING,
                )
            selected = formatters.get(type(value))
            if selected is None:
                raise VariableError(
                    ErrorTemplate.no_formatter_for_type(name, type(value)),
                    kind=VariableErrorKind.NO_FORMATTER,
                )
            return selected
        case _ as unreachable:
            assert_never(unreachable)


def _default_value(variable_name: str, formatter: Formatter) -> str:
    try:
        return formatter.default_value()
    except FormatError as e:
        raise VariableError(
            ErrorTemplate.variable_value_missing(variable_name, formatter.name),
            kind=VariableErrorKind.VALUE_MISSING,
        ) from e


def check_construct(construct: RenderConstruct, context: Mapping[str, object]) -> None:
    """Run the render-time variable checks without formatting.

    Raises:
        VariableError: If the construct could not be rendered for context
    """
    match construct:
        case LiteralConstruct():
            return
        case StaticFormatConstruct() | DynamicFormatConstruct():
            value = _lookup(context, construct.variable_name)
            formatter = _select_formatter(construct, value)
            if value is None:
                _default_value(construct.variable_name, formatter)
        case _ as unreachable:
            assert_never(unreachable)


def render_construct(
    construct: RenderConstruct,
    context: Mapping[str, object],
    locale: Locale,
    zone: tzinfo,
) -> str:
    """Render one construct's contribution to the output.

    Raises:
        VariableError: If the variable is undefined, None without a default,
            of an unsupported type, or has no default formatter
        FormatError: If the formatter rejects the value
    """
    match construct:
        case LiteralConstruct(text=text):
            return text
        case StaticFormatConstruct() | DynamicFormatConstruct():
            value = _lookup(context, construct.variable_name)
            formatter = _select_formatter(construct, value)
            if value is None:
                return _default_value(construct.variable_name, formatter)
            return formatter.format(locale, zone, value)
        case _ as unreachable:
            assert_never(unreachable)
