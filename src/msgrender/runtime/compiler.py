"""MessageFactory: compiles templates into Messages.

The factory owns two registries:

    named formatters     name -> FormatterFactory, used by explicit tokens
                         (``${price;currency}``) at compile time
    default formatters   type -> Formatter, used by vague tokens
                         (``${price}``) at render time

Compilation is all-or-nothing: the template is split into fragments, every
token is parsed, explicit formatters are resolved and configured, and only
then is a Message returned. Vague tokens capture a snapshot of the default
registry, so registering a default formatter later never alters messages
compiled earlier.

Thread Safety:
    Registry reads and writes are guarded by an RLock. compile() works from
    copies taken under the lock, so registrations may happen concurrently
    with compilation.

Python 3.13+.
"""

import logging
from collections import UserString
from collections.abc import Mapping
from datetime import date, datetime, tzinfo
from decimal import Decimal
from threading import RLock
from types import MappingProxyType

from babel import Locale

from msgrender.constants import DEFAULT_LOCALE, DEFAULT_ZONE
from msgrender.diagnostics import ErrorTemplate, UnknownFormatterError
from msgrender.enums import FormatterName
from msgrender.syntax import (
    Fragmentator,
    FragmentVisitor,
    LiteralFragment,
    TokenDefinitionParser,
    TokenFragment,
)

from .constructs import (
    DynamicFormatConstruct,
    LiteralConstruct,
    RenderConstruct,
    StaticFormatConstruct,
)
from .factories import (
    CurrencyFormatterFactory,
    DateFormatterFactory,
    DecimalFormatterFactory,
    FormatterFactory,
    IntegerFormatterFactory,
    PercentageFormatterFactory,
    StringFormatterFactory,
    TimeFormatterFactory,
)
from .formatters import Formatter
from .message import Message, RenderContext

__all__ = ["MessageFactory"]

logger = logging.getLogger(__name__)


class _ConstructBuilder(FragmentVisitor[RenderConstruct]):
    """Maps fragments to render constructs against fixed registry copies."""

    def __init__(
        self,
        parser: TokenDefinitionParser,
        named_formatters: Mapping[str, FormatterFactory],
        default_formatters: Mapping[type, Formatter],
    ) -> None:
        self._parser = parser
        self._named_formatters = named_formatters
        self._default_formatters = default_formatters

    def visit_LiteralFragment(self, fragment: LiteralFragment) -> RenderConstruct:
        return LiteralConstruct(fragment.contents)

    def visit_TokenFragment(self, fragment: TokenFragment) -> RenderConstruct:
        definition = self._parser.parse(fragment.contents)
        if definition.formatter_name is None:
            return DynamicFormatConstruct(definition.variable_name, self._default_formatters)

        factory = self._named_formatters.get(definition.formatter_name)
        if factory is None:
            raise UnknownFormatterError(
                ErrorTemplate.unknown_formatter(
                    definition.formatter_name, definition.variable_name
                )
            )
        formatter = factory.create(definition.properties)
        return StaticFormatConstruct(definition.variable_name, formatter)


class MessageFactory:
    """Compiler and formatter registry for message templates.

    Example:
        >>> factory = MessageFactory.create_default(locale="en-US")
        >>> message = factory.compile("Mr. ${lastName} is ${age} years old.")
        >>> message.render({"lastName": "Holmes", "age": 60})
        'Mr. Holmes is 60 years old.'
    """

    __slots__ = (
        "_default_formatters",
        "_fragmentator",
        "_lock",
        "_named_formatters",
        "_parser",
        "_render_context",
    )

    def __init__(
        self,
        render_context: RenderContext | None = None,
        fragmentator: Fragmentator | None = None,
    ) -> None:
        """Create an empty factory (no formatters registered).

        Args:
            render_context: Default locale and zone shared by compiled
                messages (default: "en" / "UTC")
            fragmentator: Template splitter (default: ``${...}`` delimiters)
        """
        self._lock = RLock()
        self._render_context = (
            render_context
            if render_context is not None
            else RenderContext(DEFAULT_LOCALE, DEFAULT_ZONE)
        )
        self._fragmentator = fragmentator if fragmentator is not None else Fragmentator()
        self._parser = TokenDefinitionParser(self._fragmentator.escape_char)
        self._named_formatters: dict[str, FormatterFactory] = {}
        self._default_formatters: dict[type, Formatter] = {}

    @classmethod
    def create_default(
        cls,
        locale: Locale | str | None = None,
        zone: tzinfo | str | None = None,
    ) -> "MessageFactory":
        """Create a factory with the standard formatters registered.

        Named formatters: string, integer, decimal, percentage, currency,
        date, time.

        Default formatters:
            int                     -> integer
            float, Decimal          -> decimal
            date, datetime          -> date
            str, UserString         -> string

        Args:
            locale: Default render locale (default: "en")
            zone: Default render time zone (default: "UTC")

        Returns:
            Configured factory
        """
        context = RenderContext(
            DEFAULT_LOCALE if locale is None else locale,
            DEFAULT_ZONE if zone is None else zone,
        )
        factory = cls(context)

        factories: dict[FormatterName, FormatterFactory] = {
            FormatterName.STRING: StringFormatterFactory(),
            FormatterName.INTEGER: IntegerFormatterFactory(),
            FormatterName.DECIMAL: DecimalFormatterFactory(),
            FormatterName.PERCENTAGE: PercentageFormatterFactory(),
            FormatterName.CURRENCY: CurrencyFormatterFactory(),
            FormatterName.DATE: DateFormatterFactory(),
            FormatterName.TIME: TimeFormatterFactory(),
        }
        for name, formatter_factory in factories.items():
            factory.register_named_formatter(name, formatter_factory)

        integer = factories[FormatterName.INTEGER].create()
        decimal = factories[FormatterName.DECIMAL].create()
        date_formatter = factories[FormatterName.DATE].create()
        string = factories[FormatterName.STRING].create()

        defaults: dict[type, Formatter] = {
            int: integer,
            float: decimal,
            Decimal: decimal,
            date: date_formatter,
            datetime: date_formatter,
            str: string,
            UserString: string,
        }
        for value_type, formatter in defaults.items():
            factory.register_default_formatter(value_type, formatter)

        return factory

    @property
    def render_context(self) -> RenderContext:
        """Context shared by every message compiled from now on."""
        with self._lock:
            return self._render_context

    @render_context.setter
    def render_context(self, value: RenderContext) -> None:
        if value is None:
            msg = "RenderContext cannot be None"
            raise TypeError(msg)
        if not isinstance(value, RenderContext):
            msg = f"Expected RenderContext, got {type(value).__name__}"
            raise TypeError(msg)
        with self._lock:
            self._render_context = value

    @property
    def fragmentator(self) -> Fragmentator:
        """Template splitter in use."""
        return self._fragmentator

    @property
    def named_formatters(self) -> Mapping[str, FormatterFactory]:
        """Read-only copy of the named formatter registry."""
        with self._lock:
            return MappingProxyType(dict(self._named_formatters))

    @property
    def default_formatters(self) -> Mapping[type, Formatter]:
        """Read-only copy of the default formatter registry."""
        with self._lock:
            return MappingProxyType(dict(self._default_formatters))

    def register_named_formatter(self, name: str, factory: FormatterFactory) -> None:
        """Register (or replace) a formatter factory for explicit tokens.

        Args:
            name: Formatter name as written in tokens
            factory: Factory building the formatter from token properties

        Raises:
            TypeError: If name or factory is None or of the wrong type
            ValueError: If name is blank
        """
        if name is None or factory is None:
            msg = "Formatter name and factory are required"
            raise TypeError(msg)
        if not isinstance(name, str):
            msg = f"Formatter name must be str, got {type(name).__name__}"
            raise TypeError(msg)
        if not isinstance(factory, FormatterFactory):
            msg = f"Expected FormatterFactory, got {type(factory).__name__}"
            raise TypeError(msg)
        key = name.strip()
        if not key:
            msg = "Formatter name cannot be blank"
            raise ValueError(msg)
        with self._lock:
            self._named_formatters[key] = factory
        logger.debug("Registered named formatter %r -> %r", key, factory)

    def register_default_formatter(self, value_type: type, formatter: Formatter) -> None:
        """Register (or replace) the formatter for vague tokens of a type.

        Only messages compiled after this call see the new binding.

        Args:
            value_type: Exact runtime type of the values
            formatter: Formatter for that type

        Raises:
            TypeError: If value_type or formatter is None, value_type is not
                a type, or formatter does not support value_type
        """
        if value_type is None or formatter is None:
            msg = "Value type and formatter are required"
            raise TypeError(msg)
        if not isinstance(value_type, type):
            msg = f"Expected a type, got {type(value_type).__name__}"
            raise TypeError(msg)
        if not isinstance(formatter, Formatter):
            msg = f"Expected Formatter, got {type(formatter).__name__}"
            raise TypeError(msg)
        if not formatter.supports(value_type):
            msg = f"{formatter.name} does not support {value_type.__name__}"
            raise TypeError(msg)
        with self._lock:
            self._default_formatters[value_type] = formatter
        logger.debug("Registered default formatter %s -> %r", value_type.__name__, formatter)

    def compile(self, template: str) -> Message:
        """Compile a template into a reusable Message.

        Args:
            template: Template text

        Returns:
            Compiled message bound to the current render_context

        Raises:
            TypeError: If template is not a string
            TemplateSyntaxError: If a token is never closed
            TokenGrammarError: If a token body is malformed
            UnknownFormatterError: If an explicit token names an
                unregistered formatter
            PropertyValidationError: If a token's properties are rejected
        """
        fragments = self._fragmentator.parse(template)

        with self._lock:
            render_context = self._render_context
            named_formatters = dict(self._named_formatters)
            default_formatters = MappingProxyType(dict(self._default_formatters))

        builder = _ConstructBuilder(self._parser, named_formatters, default_formatters)
        constructs = fragments.visit(builder)

        logger.debug(
            "Compiled template (%d chars) into %d constructs", len(template), len(constructs)
        )
        return Message(render_context, template, constructs)

    def __repr__(self) -> str:
        """Return debug representation."""
        with self._lock:
            return (
                f"MessageFactory(named={sorted(self._named_formatters)}, "
                f"defaults={len(self._default_formatters)})"
            )
