"""msgrender - locale-aware message templating.

Compiles templates with ``${...}`` placeholders into reusable, immutable
messages and renders them against a value context, a locale and a time zone.
Locale data (separators, currency symbols, date patterns) comes from Babel.

    >>> from msgrender import MessageFactory
    >>> factory = MessageFactory.create_default(locale="en-US")
    >>> message = factory.compile("Total: ${amount;currency;decimalPadding=2}")
    >>> message.render({"amount": 1234.5})
    'Total: $1,234.50'

Public API:
    MessageFactory - Compiler and formatter registry
    Message - Compiled, reusable template
    RenderContext - Shared default locale and zone
    Formatter, FormatterFactory - Extension points for custom formatters

Exceptions:
    MessageError - Base exception class
    TemplateSyntaxError - Unterminated token
    TokenGrammarError - Malformed token body
    UnknownFormatterError - Explicit token names an unregistered formatter
    PropertyValidationError - Formatter property rejected
    FormatError - Value could not be formatted
    VariableError - Render-time variable failure (see VariableErrorKind)

Submodules:
    msgrender.syntax - Scanner, fragments and token grammar
    msgrender.runtime - Formatters, factories, constructs and messages
    msgrender.diagnostics - Diagnostic codes, templates and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import (
    FormatError,
    MessageError,
    PropertyValidationError,
    TemplateSyntaxError,
    TokenGrammarError,
    UnknownFormatterError,
    VariableError,
)
from .enums import FormatterName, VariableErrorKind
from .runtime import (
    Formatter,
    FormatterFactory,
    Message,
    MessageFactory,
    RenderContext,
)
from .syntax import parse_template, parse_token

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("msgrender")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "FormatError",
    "Formatter",
    "FormatterFactory",
    "FormatterName",
    "Message",
    "MessageError",
    "MessageFactory",
    "PropertyValidationError",
    "RenderContext",
    "TemplateSyntaxError",
    "TokenGrammarError",
    "UnknownFormatterError",
    "VariableError",
    "VariableErrorKind",
    "__version__",
    "parse_template",
    "parse_token",
]
