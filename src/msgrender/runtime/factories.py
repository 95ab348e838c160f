"""Formatter factories.

A FormatterFactory builds a Formatter from the property bag of an explicit
token (``${price;decimal;decimalPlaces=3}``). It validates the bag against
the family's allow-list, parses each value, and applies defaults for the
properties the token leaves out.

Factories are stateless and reusable. Formatters are immutable, so tokens
with the same effective configuration share one formatter instance.

Python 3.13+.
"""

import functools
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import ClassVar

from msgrender.constants import (
    DECIMAL_PADDING_PROPERTY,
    DECIMAL_PLACES_PROPERTY,
    DEFAULT_DECIMAL_PADDING,
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_ROUNDING,
    MAX_DECIMAL_PLACES,
    ROUNDING_PROPERTY,
)

from .formatters import (
    CurrencyFormatter,
    DateFormatter,
    DecimalFamilyFormatter,
    DecimalFormatter,
    Formatter,
    IntegerFormatter,
    PercentageFormatter,
    StringFormatter,
    TimeFormatter,
)
from .properties import parse_bool, parse_non_negative_int, restrict_properties

__all__ = [
    "CurrencyFormatterFactory",
    "DateFormatterFactory",
    "DecimalFamilyFactory",
    "DecimalFormatterFactory",
    "FormatterFactory",
    "IntegerFormatterFactory",
    "PercentageFormatterFactory",
    "SharedFormatterFactory",
    "StringFormatterFactory",
    "TimeFormatterFactory",
]


class FormatterFactory(ABC):
    """Base class for formatter factories.

    Subclasses declare allowed_properties (canonical spelling) and implement
    create_formatter(), which receives the validated bag keyed by canonical
    name.
    """

    __slots__ = ()

    allowed_properties: ClassVar[tuple[str, ...]] = ()

    def create(self, properties: Mapping[str, str] | None = None) -> Formatter:
        """Build a formatter from a token property bag.

        Args:
            properties: Property bag; keys are matched case-insensitively
                after trimming. None or empty applies every default.

        Returns:
            Configured formatter

        Raises:
            PropertyValidationError: If a key is not allowed, a value is
                blank or unparsable, or a numeric constraint is violated
        """
        return self.create_formatter(restrict_properties(properties, self.allowed_properties))

    @abstractmethod
    def create_formatter(self, properties: Mapping[str, str]) -> Formatter:
        """Build a formatter from a validated property bag."""

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"{type(self).__name__}()"


class SharedFormatterFactory(FormatterFactory):
    """Factory for formatters that take no properties.

    Every create() call returns the same formatter instance.
    """

    __slots__ = ("_formatter",)

    def __init__(self, formatter: Formatter) -> None:
        self._formatter = formatter

    def create_formatter(self, properties: Mapping[str, str]) -> Formatter:
        return self._formatter


class StringFormatterFactory(SharedFormatterFactory):
    """Builds StringFormatter. Accepts no properties."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(StringFormatter())


class IntegerFormatterFactory(SharedFormatterFactory):
    """Builds IntegerFormatter. Accepts no properties."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(IntegerFormatter())


class DateFormatterFactory(SharedFormatterFactory):
    """Builds DateFormatter. Accepts no properties."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(DateFormatter())


class TimeFormatterFactory(SharedFormatterFactory):
    """Builds TimeFormatter. Accepts no properties."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(TimeFormatter())


@functools.lru_cache(maxsize=256)
def _shared_decimal_family_formatter[F: DecimalFamilyFormatter](
    formatter_class: type[F], places: int, padding: int, rounding: bool
) -> F:
    return formatter_class(places, padding, rounding)


class DecimalFamilyFactory(FormatterFactory):
    """Shared base for decimal, percentage and currency factories.

    Properties:
        decimalPlaces: Maximum fraction digits, integer 0..MAX_DECIMAL_PLACES
            (default 2)
        decimalPadding: Minimum fraction digits, integer 0..MAX_DECIMAL_PLACES
            (default 0); values above decimalPlaces are clamped to decimalPlaces
        rounding: "true" rounds half-up, "false" truncates (default false)
    """

    __slots__ = ()

    allowed_properties = (DECIMAL_PLACES_PROPERTY, DECIMAL_PADDING_PROPERTY, ROUNDING_PROPERTY)

    formatter_class: ClassVar[type[DecimalFamilyFormatter]]

    def create_formatter(self, properties: Mapping[str, str]) -> Formatter:
        places = DEFAULT_DECIMAL_PLACES
        padding = DEFAULT_DECIMAL_PADDING
        rounding = DEFAULT_ROUNDING

        if DECIMAL_PLACES_PROPERTY in properties:
            places = parse_non_negative_int(
                DECIMAL_PLACES_PROPERTY,
                properties[DECIMAL_PLACES_PROPERTY],
                MAX_DECIMAL_PLACES,
            )
        if DECIMAL_PADDING_PROPERTY in properties:
            padding = parse_non_negative_int(
                DECIMAL_PADDING_PROPERTY,
                properties[DECIMAL_PADDING_PROPERTY],
                MAX_DECIMAL_PLACES,
            )
        if ROUNDING_PROPERTY in properties:
            rounding = parse_bool(ROUNDING_PROPERTY, properties[ROUNDING_PROPERTY])

        return _shared_decimal_family_formatter(
            self.formatter_class, places, min(padding, places), rounding
        )


class DecimalFormatterFactory(DecimalFamilyFactory):
    """Builds DecimalFormatter."""

    __slots__ = ()

    formatter_class = DecimalFormatter


class PercentageFormatterFactory(DecimalFamilyFactory):
    """Builds PercentageFormatter."""

    __slots__ = ()

    formatter_class = PercentageFormatter


class CurrencyFormatterFactory(DecimalFamilyFactory):
    """Builds CurrencyFormatter."""

    __slots__ = ()

    formatter_class = CurrencyFormatter
