"""Value formatters.

A Formatter converts one value of a supported runtime type into a
locale-specific string. Formatters are immutable and stateless after
construction; a single instance is shared by every compiled Message that
references it, across threads.

Type Dispatch:
    Supported types are matched by exact runtime type (``type(value)``), not
    isinstance(). ``bool`` is therefore never accepted by the integer
    formatter, and ``datetime`` is listed explicitly where it is accepted
    even though it subclasses ``date``.

Families:
    StringFormatter       str, UserString           identity conversion
    IntegerFormatter      int                       locale-grouped integer
    DecimalFormatter      float, Decimal, int       locale decimal pattern
    PercentageFormatter   float, Decimal, int       locale percent pattern (x100)
    CurrencyFormatter     float, Decimal, int       locale currency pattern
    DateFormatter         date, datetime            short date, zone-adjusted
    TimeFormatter         time, datetime            short time, no zone conversion

Locale data (separators, symbols, date patterns) comes from Babel (CLDR).

Python 3.13+. Uses Babel for i18n.
"""

import functools
import logging
from abc import ABC, abstractmethod
from collections import UserString
from datetime import date, datetime, time, tzinfo
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, localcontext
from typing import ClassVar

from babel import Locale
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel.core import get_global

from msgrender.constants import (
    DEFAULT_DECIMAL_PADDING,
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_ROUNDING,
    FALLBACK_CURRENCY,
    MAX_DECIMAL_PLACES,
)
from msgrender.diagnostics import ErrorTemplate, FormatError
from msgrender.enums import NumberFamily
from msgrender.locale_utils import resolve_locale, resolve_zone

from .number_patterns import NumberPatterns

__all__ = [
    "CurrencyFormatter",
    "DateFormatter",
    "DecimalFamilyFormatter",
    "DecimalFormatter",
    "Formatter",
    "IntegerFormatter",
    "PercentageFormatter",
    "StringFormatter",
    "TimeFormatter",
    "resolve_currency",
]

logger = logging.getLogger(__name__)

# Babel and decimal failures surfaced as FORMATTING_FAILED.
_FORMATTING_ERRORS = (ValueError, TypeError, ArithmeticError, AttributeError, KeyError)

# Extra significant digits kept beyond the integer and fraction digits of a
# value so quantize() never runs out of precision.
_PRECISION_MARGIN = 4


class Formatter(ABC):
    """Base class for all value formatters.

    Subclasses declare their supported types and implement format_value().
    format() performs the shared argument checks, so format_value() always
    receives a Babel Locale, a tzinfo and a non-None value of a supported type.
    """

    __slots__ = ("_supported_types",)

    def __init__(self, *supported_types: type) -> None:
        """Initialize formatter.

        Args:
            *supported_types: Runtime types accepted by this formatter

        Raises:
            ValueError: If no type is given
        """
        if not supported_types:
            msg = f"{type(self).__name__} must support at least one type"
            raise ValueError(msg)
        self._supported_types = frozenset(supported_types)

    @property
    def supported_types(self) -> frozenset[type]:
        """Runtime types accepted by this formatter (fixed at construction)."""
        return self._supported_types

    @property
    def name(self) -> str:
        """Formatter name used in diagnostics."""
        return type(self).__name__

    def supports(self, value_type: type) -> bool:
        """Check whether values of exactly this type are accepted."""
        return value_type in self._supported_types

    def format(self, locale: Locale | str, zone: tzinfo | str, value: object) -> str:
        """Format value for locale and zone.

        Args:
            locale: Babel Locale or locale identifier
            zone: tzinfo or IANA zone identifier
            value: Value to format

        Returns:
            Formatted string

        Raises:
            TypeError: If locale or zone is None
            FormatError: If value is None and there is no default
                (VALUE_REQUIRED), its type is unsupported (TYPE_MISMATCH), or
                the locale data service rejects it (FORMATTING_FAILED)
        """
        babel_locale = resolve_locale(locale)
        tz = resolve_zone(zone)

        if value is None:
            return self.default_value()

        if type(value) not in self._supported_types:
            raise FormatError(
                ErrorTemplate.type_mismatch(type(value), self._supported_types, self.name)
            )

        try:
            return self.format_value(babel_locale, tz, value)
        except FormatError:
            raise
        except _FORMATTING_ERRORS as e:
            raise FormatError(ErrorTemplate.formatting_failed(value, str(e), self.name)) from e

    def default_value(self) -> str:
        """Provide the output for a None value.

        Raises:
            FormatError: Always, unless overridden (VALUE_REQUIRED)
        """
        raise FormatError(ErrorTemplate.value_required(self.name))

    @abstractmethod
    def format_value(self, locale: Locale, zone: tzinfo, value: object) -> str:
        """Format a validated value.

        Args:
            locale: Babel locale
            zone: Render time zone
            value: Non-None value of a supported type

        Returns:
            Formatted string
        """

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"{self.name}()"


class StringFormatter(Formatter):
    """Identity conversion of character-sequence values.

    None renders as the empty string.
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(str, UserString)

    def default_value(self) -> str:
        return ""

    def format_value(self, locale: Locale, zone: tzinfo, value: object) -> str:
        return str(value)


class IntegerFormatter(Formatter):
    """Locale-grouped integer formatting.

    Example:
        >>> IntegerFormatter().format("en_US", "UTC", 1234567)
        '1,234,567'
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(int)

    def format_value(self, locale: Locale, zone: tzinfo, value: object) -> str:
        number = Decimal(value)  # type: ignore[arg-type]
        pattern = NumberPatterns.get(locale, NumberFamily.DECIMAL, 0, 0)
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, _required_precision(number, 0))
            return babel_numbers.format_decimal(number, format=pattern, locale=locale)


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() gives the shortest repr, so 1.44 stays 1.44 and not
        # 1.4399999999999999467...
        return Decimal(str(value))
    return Decimal(value)  # type: ignore[arg-type]


def _required_precision(number: Decimal, places: int) -> int:
    if not number.is_finite():
        return 0
    return max(number.adjusted() + 1, 1) + places + _PRECISION_MARGIN


class DecimalFamilyFormatter(Formatter):
    """Shared base for decimal, percentage and currency formatters.

    The value is converted to Decimal (floats through their shortest string
    form), quantized to decimal_places with the configured rounding mode,
    and rendered through the locale's CLDR pattern for the family with
    min=decimal_padding / max=decimal_places fraction digits.

    Attributes:
        decimal_places: Maximum fraction digits
        decimal_padding: Minimum fraction digits, clamped to decimal_places
        rounding: True rounds half-up; False truncates toward zero
    """

    __slots__ = ("_decimal_padding", "_decimal_places", "_rounding")

    family: ClassVar[NumberFamily]

    def __init__(
        self,
        decimal_places: int = DEFAULT_DECIMAL_PLACES,
        decimal_padding: int = DEFAULT_DECIMAL_PADDING,
        rounding: bool = DEFAULT_ROUNDING,
    ) -> None:
        """Initialize decimal-family formatter.

        Args:
            decimal_places: Maximum fraction digits (0..MAX_DECIMAL_PLACES)
            decimal_padding: Minimum fraction digits (>= 0); values above
                decimal_places are clamped to decimal_places
            rounding: Round half-up (True) or truncate (False)

        Raises:
            ValueError: If decimal_places or decimal_padding is negative or
                above MAX_DECIMAL_PLACES
        """
        super().__init__(float, Decimal, int)
        if decimal_places < 0:
            msg = f"decimal_places must be non-negative, got {decimal_places}"
            raise ValueError(msg)
        if decimal_padding < 0:
            msg = f"decimal_padding must be non-negative, got {decimal_padding}"
            raise ValueError(msg)
        if max(decimal_places, decimal_padding) > MAX_DECIMAL_PLACES:
            msg = f"Fraction digits cannot exceed {MAX_DECIMAL_PLACES}"
            raise ValueError(msg)
        self._decimal_places = decimal_places
        self._decimal_padding = min(decimal_padding, decimal_places)
        self._rounding = rounding

    @property
    def decimal_places(self) -> int:
        """Maximum fraction digits."""
        return self._decimal_places

    @property
    def decimal_padding(self) -> int:
        """Minimum fraction digits (never exceeds decimal_places)."""
        return self._decimal_padding

    @property
    def rounding(self) -> bool:
        """True for half-up rounding, False for truncation."""
        return self._rounding

    def quantize(self, number: Decimal) -> Decimal:
        """Cut number to decimal_places using the configured rounding mode.

        Non-finite values (NaN, infinity) are returned unchanged.

        Example:
            >>> DecimalFormatter(2).quantize(Decimal("1.239"))
            Decimal('1.23')
            >>> DecimalFormatter(2, rounding=True).quantize(Decimal("1.235"))
            Decimal('1.24')
        """
        if not number.is_finite():
            return number
        mode = ROUND_HALF_UP if self._rounding else ROUND_DOWN
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, _required_precision(number, self._decimal_places))
            return number.quantize(Decimal(1).scaleb(-self._decimal_places), rounding=mode)

    def format_value(self, locale: Locale, zone: tzinfo, value: object) -> str:
        number = _to_decimal(value)
        pattern = NumberPatterns.get(
            locale, self.family, self._decimal_places, self._decimal_padding
        )
        with localcontext() as ctx:
            # Percent display values carry two extra integer digits.
            ctx.prec = max(ctx.prec, _required_precision(number, self._decimal_places) + 2)
            return self.format_number(locale, number, pattern)

    @abstractmethod
    def format_number(self, locale: Locale, number: Decimal, pattern: str) -> str:
        """Render number with the locale pattern for this family.

        Args:
            locale: Babel locale
            number: Unquantized value
            pattern: CLDR pattern with this formatter's fraction digits
        """

    def __repr__(self) -> str:
        """Return debug representation."""
        return (
            f"{self.name}(decimal_places={self._decimal_places}, "
            f"decimal_padding={self._decimal_padding}, rounding={self._rounding})"
        )


class DecimalFormatter(DecimalFamilyFormatter):
    """Plain decimal number.

    Example:
        >>> DecimalFormatter(3, 3).format("en_US", "UTC", 1.44)
        '1.440'
    """

    __slots__ = ()

    family = NumberFamily.DECIMAL

    def format_number(self, locale: Locale, number: Decimal, pattern: str) -> str:
        return babel_numbers.format_decimal(self.quantize(number), format=pattern, locale=locale)


class PercentageFormatter(DecimalFamilyFormatter):
    """Percentage: the displayed value is the value multiplied by 100.

    Rounding applies to the displayed (scaled) value, so 0.12345 with two
    places renders as 12.34%.

    Example:
        >>> PercentageFormatter(1).format("en_US", "UTC", 0.256)
        '25.6%'
    """

    __slots__ = ()

    family = NumberFamily.PERCENT

    def format_number(self, locale: Locale, number: Decimal, pattern: str) -> str:
        displayed = self.quantize(number.scaleb(2))
        # Babel applies the pattern's x100 scale itself.
        return babel_numbers.format_percent(displayed.scaleb(-2), format=pattern, locale=locale)


def _territory_currency(territory: str) -> str | None:
    currencies = babel_numbers.get_territory_currencies(territory)
    return currencies[0] if currencies else None


@functools.lru_cache(maxsize=128)
def resolve_currency(locale: Locale) -> str:
    """Determine the currency in use for a locale.

    Language-only locales are expanded through CLDR likely subtags
    ("de" -> "de_Latn_DE"). When no territory currency can be found the ISO
    4217 "no currency" code XXX is used.

    Results are cached per locale, so the fallback warning is logged once
    per locale rather than on every render.

    Example:
        >>> resolve_currency(Locale.parse("en_US"))
        'USD'
        >>> resolve_currency(Locale.parse("fr"))
        'EUR'
    """
    territory = locale.territory
    if territory is None:
        likely = get_global("likely_subtags").get(locale.language)
        if likely:
            territory = Locale.parse(likely).territory

    if territory:
        currency = _territory_currency(territory)
        if currency:
            return currency

    logger.warning(
        "No territory currency for locale %s; falling back to %s", locale, FALLBACK_CURRENCY
    )
    return FALLBACK_CURRENCY


class CurrencyFormatter(DecimalFamilyFormatter):
    """Monetary amount in the locale's own currency.

    The currency's own digit count (e.g. 0 for JPY) is not applied;
    decimal_places and decimal_padding always decide the fraction digits.

    Example:
        >>> CurrencyFormatter(2, 2).format("en_US", "UTC", 1234.5)
        '$1,234.50'
    """

    __slots__ = ()

    family = NumberFamily.CURRENCY

    def format_number(self, locale: Locale, number: Decimal, pattern: str) -> str:
        return babel_numbers.format_currency(
            self.quantize(number),
            resolve_currency(locale),
            format=pattern,
            locale=locale,
            currency_digits=False,
        )


class DateFormatter(Formatter):
    """Short, locale-specific calendar date.

    Aware datetimes are converted into the render zone before the date is
    taken, so an instant late in the evening UTC may render as the next day
    in Asia/Tokyo. Naive datetimes and dates are used as-is.

    Example:
        >>> DateFormatter().format("en_US", "UTC", date(2024, 3, 9))
        '3/9/24'
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(date, datetime)

    def format_value(self, locale: Locale, zone: tzinfo, value: object) -> str:
        if isinstance(value, datetime):
            if value.utcoffset() is not None:
                value = value.astimezone(zone)
            value = value.date()
        return babel_dates.format_date(
            value,  # type: ignore[arg-type]
            format="short",
            locale=locale,
        )


class TimeFormatter(Formatter):
    """Short, locale-specific time of day.

    The time of day is taken as already local: no zone conversion is
    applied, and any tzinfo on the value is ignored.
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(time, datetime)

    def format_value(self, locale: Locale, zone: tzinfo, value: object) -> str:
        if isinstance(value, datetime):
            local_time = value.time()
        else:
            local_time = value.replace(tzinfo=None)  # type: ignore[union-attr]
        return babel_dates.format_time(local_time, format="short", locale=locale)
