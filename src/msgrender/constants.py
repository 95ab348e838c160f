"""Shared constants for msgrender.

This module provides centralized configuration constants used across the
syntax and runtime packages. Placing constants here avoids circular imports
and provides a single source of truth.

Constants are grouped by domain:
- Template grammar: Token delimiters, splitters and the escape character
- Render defaults: Locale and zone used when none is supplied
- Decimal family defaults: Fraction digits and rounding
- Cache limits: Memory bounds for the number pattern cache

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Template grammar
    "DEFAULT_TOKEN_PREFIX",
    "DEFAULT_TOKEN_SUFFIX",
    "DEFAULT_ESCAPE_CHARACTER",
    "TOKEN_SPLITTER",
    "PROPERTY_SPLITTER",
    # Render defaults
    "DEFAULT_LOCALE",
    "DEFAULT_ZONE",
    # Decimal family defaults
    "DECIMAL_PLACES_PROPERTY",
    "DECIMAL_PADDING_PROPERTY",
    "ROUNDING_PROPERTY",
    "DEFAULT_DECIMAL_PLACES",
    "DEFAULT_DECIMAL_PADDING",
    "MAX_DECIMAL_PLACES",
    "DEFAULT_ROUNDING",
    "FALLBACK_CURRENCY",
    # Cache limits
    "MAX_PATTERN_CACHE_SIZE",
]

# ============================================================================
# TEMPLATE GRAMMAR
# ============================================================================

# Token delimiters: "Hello ${name}" -> token contents "name".
DEFAULT_TOKEN_PREFIX: str = "${"
DEFAULT_TOKEN_SUFFIX: str = "}"

# A delimiter directly preceded by this character is not a match.
# The escape character itself is kept in the resulting text.
DEFAULT_ESCAPE_CHARACTER: str = "\\"

# Token body: variable;formatter;key1=value1;key2=value2
TOKEN_SPLITTER: str = ";"
PROPERTY_SPLITTER: str = "="

# ============================================================================
# RENDER DEFAULTS
# ============================================================================

# Used by MessageFactory when no RenderContext is supplied.
DEFAULT_LOCALE: str = "en"
DEFAULT_ZONE: str = "UTC"

# ============================================================================
# DECIMAL FAMILY DEFAULTS
# ============================================================================

# Property names as written in templates. Lookups are case-insensitive.
DECIMAL_PLACES_PROPERTY: str = "decimalPlaces"
DECIMAL_PADDING_PROPERTY: str = "decimalPadding"
ROUNDING_PROPERTY: str = "rounding"

# Maximum fraction digits.
DEFAULT_DECIMAL_PLACES: int = 2

# Minimum fraction digits (zero-padded). Never exceeds decimal places.
DEFAULT_DECIMAL_PADDING: int = 0

# Upper bound for decimalPlaces and decimalPadding, checked at compile time.
MAX_DECIMAL_PLACES: int = 340

# False truncates (ROUND_DOWN), True rounds half-up.
DEFAULT_ROUNDING: bool = False

# ISO 4217 "no currency" code, used when a locale has no territory.
FALLBACK_CURRENCY: str = "XXX"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached number patterns, keyed by (locale, family, places, padding).
# 256 covers typical multi-region applications with a handful of
# distinct decimal configurations each.
MAX_PATTERN_CACHE_SIZE: int = 256
