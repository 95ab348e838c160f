"""Per-locale number patterns for the decimal-family formatters.

Each locale's CLDR pattern (decimal, percent or currency) is rewritten so its
fraction part carries exactly the requested minimum and maximum digits:

    en, decimal,  places=3, padding=1   "#,##0.###"  ->  "#,##0.0##"
    fr, percent,  places=2, padding=0   "#,##0 %"    ->  "#,##0.## %"
    de, currency, places=0              "#,##0.00 ¤" ->  "#,##0 ¤"

Grouping, sign placement, currency-sign and percent-sign placement stay as
the locale defines them.

Rewritten patterns are cached per (locale, family, places, padding) in a
bounded LRU shared by every formatter. Many threads may render concurrently
for the same locale, so cache access is guarded by an RLock.

Python 3.13+. Uses Babel for CLDR data.
"""

import logging
import re
from collections import OrderedDict
from threading import RLock
from typing import ClassVar

from babel import Locale

from msgrender.constants import MAX_PATTERN_CACHE_SIZE
from msgrender.enums import NumberFamily

__all__ = ["NumberPatterns", "build_fraction", "rewrite_fraction"]

logger = logging.getLogger(__name__)

# Integer part of a CLDR number pattern, optionally followed by its fraction.
# Matches "#,##0", "#,##,##0" (Indian grouping), "0" with ".00", ".###" etc.
_NUMBER_PART = re.compile(r"(?P<integer>[#,]*0+)(?P<fraction>\.[0#]*)?")

# Used when a locale lacks a pattern for the requested family.
_FALLBACK_PATTERNS: dict[NumberFamily, str] = {
    NumberFamily.DECIMAL: "#,##0.###",
    NumberFamily.PERCENT: "#,##0%",
    NumberFamily.CURRENCY: "\xa4#,##0.00",
}

type _CacheKey = tuple[str, NumberFamily, int, int]


def build_fraction(places: int, padding: int) -> str:
    """Build the fraction part of a number pattern.

    Args:
        places: Maximum fraction digits
        padding: Minimum fraction digits (must not exceed places)

    Returns:
        "" when places is 0, else "." + padding zeros + optional digits

    Example:
        >>> build_fraction(3, 1)
        '.0##'
        >>> build_fraction(0, 0)
        ''
    """
    if places == 0:
        return ""
    return "." + "0" * padding + "#" * (places - padding)


def rewrite_fraction(pattern: str, places: int, padding: int) -> str:
    """Replace the fraction part of every sub-pattern in a CLDR pattern.

    Args:
        pattern: CLDR number pattern, possibly "positive;negative"
        places: Maximum fraction digits
        padding: Minimum fraction digits

    Returns:
        Rewritten pattern

    Example:
        >>> rewrite_fraction("\xa4#,##0.00;(\xa4#,##0.00)", 3, 3)
        '\xa4#,##0.000;(\xa4#,##0.000)'
    """
    fraction = build_fraction(places, padding)

    def replace(match: re.Match[str]) -> str:
        return match.group("integer") + fraction

    return ";".join(_NUMBER_PART.sub(replace, part, count=1) for part in pattern.split(";"))


def _locale_pattern(locale: Locale, family: NumberFamily) -> str:
    match family:
        case NumberFamily.DECIMAL:
            formats = locale.decimal_formats
            number_pattern = formats.get(None)
        case NumberFamily.PERCENT:
            formats = locale.percent_formats
            number_pattern = formats.get(None)
        case NumberFamily.CURRENCY:
            formats = locale.currency_formats
            number_pattern = formats.get("standard")

    if number_pattern is None or not hasattr(number_pattern, "pattern"):
        logger.debug("No %s pattern for locale %s; using fallback", family, locale)
        return _FALLBACK_PATTERNS[family]
    return str(number_pattern.pattern)


class NumberPatterns:
    """Cached, locale-specific number patterns.

    Class-level only; never instantiated.

    Cache Management:
        - NumberPatterns.clear_cache(): Clear all cached patterns
        - NumberPatterns.cache_size(): Get current cache size
        - NumberPatterns.cache_info(): Get detailed cache statistics

    Example:
        >>> from babel import Locale
        >>> NumberPatterns.get(Locale.parse("en_US"), NumberFamily.DECIMAL, 3, 3)
        '#,##0.000'
    """

    # OrderedDict provides LRU semantics with O(1) operations
    _cache: ClassVar[OrderedDict[_CacheKey, str]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the pattern cache.

        Use this method to free memory or reset state in tests.
        Thread-safe via RLock.
        """
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached patterns."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def cache_info(cls) -> dict[str, int | tuple[str, ...]]:
        """Get detailed cache statistics.

        Returns:
            Dictionary with cache statistics:
            - size: Current number of cached patterns
            - max_size: Maximum cache size
            - locales: Distinct cached locale codes (LRU order)
        """
        with cls._cache_lock:
            locales = tuple(dict.fromkeys(key[0] for key in cls._cache))
            return {
                "size": len(cls._cache),
                "max_size": MAX_PATTERN_CACHE_SIZE,
                "locales": locales,
            }

    @classmethod
    def get(cls, locale: Locale, family: NumberFamily, places: int, padding: int) -> str:
        """Get the number pattern for a locale and fraction configuration.

        Args:
            locale: Babel locale
            family: Pattern family (decimal, percent, currency)
            places: Maximum fraction digits (>= 0)
            padding: Minimum fraction digits (0 <= padding <= places)

        Returns:
            CLDR pattern string suitable for Babel's format_* functions
        """
        cache_key: _CacheKey = (str(locale), family, places, padding)

        with cls._cache_lock:
            if cache_key in cls._cache:
                # Move to end (mark as recently used)
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        # Build outside the lock; Babel locale data access is thread-safe.
        pattern = rewrite_fraction(_locale_pattern(locale, family), places, padding)
        logger.debug("Number pattern cache miss: %s -> %r", cache_key, pattern)

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]

            # Evict LRU if cache is full
            if len(cls._cache) >= MAX_PATTERN_CACHE_SIZE:
                cls._cache.popitem(last=False)

            cls._cache[cache_key] = pattern
            return pattern
