"""Locale and time zone normalization.

Centralizes the conversion of caller-supplied locale and zone identifiers into
the objects the formatters consume. All normalization happens at the system
boundary (MessageFactory, RenderContext, Message.render) so the runtime only
ever sees Babel ``Locale`` and ``tzinfo`` instances.

Python 3.13+.
"""

from __future__ import annotations

import functools
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from babel import Locale, UnknownLocaleError

__all__ = [
    "get_babel_locale",
    "get_zone",
    "normalize_locale",
    "resolve_locale",
    "resolve_zone",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result.
    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        ValueError: If the locale is unknown or its format is invalid

    Example:
        >>> locale = get_babel_locale("en-US")
        >>> locale.language, locale.territory
        ('en', 'US')
    """
    normalized = normalize_locale(locale_code)
    try:
        return Locale.parse(normalized)
    except UnknownLocaleError as e:
        msg = f"Unknown locale identifier '{locale_code}': {e}"
        raise ValueError(msg) from None
    except ValueError as e:
        msg = f"Invalid locale format '{locale_code}': {e}"
        raise ValueError(msg) from None


@functools.lru_cache(maxsize=128)
def get_zone(zone_key: str) -> tzinfo:
    """Get a time zone for an IANA identifier with caching.

    Args:
        zone_key: IANA time zone key (e.g., "UTC", "Europe/Paris")

    Returns:
        ZoneInfo instance

    Raises:
        ValueError: If the zone key is unknown or malformed
    """
    try:
        return ZoneInfo(zone_key.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        msg = f"Unknown time zone '{zone_key}': {e}"
        raise ValueError(msg) from None


def resolve_locale(locale: Locale | str) -> Locale:
    """Normalize a locale argument to a Babel Locale.

    Args:
        locale: Babel Locale, or a BCP-47/POSIX locale identifier

    Returns:
        Babel Locale

    Raises:
        TypeError: If locale is None or of an unsupported type
        ValueError: If a locale identifier is unknown
    """
    if isinstance(locale, Locale):
        return locale
    if isinstance(locale, str):
        return get_babel_locale(locale)
    if locale is None:
        msg = "Locale is required"
        raise TypeError(msg)
    msg = f"Locale must be babel.Locale or str, got {type(locale).__name__}"
    raise TypeError(msg)


def resolve_zone(zone: tzinfo | str) -> tzinfo:
    """Normalize a zone argument to a tzinfo.

    Args:
        zone: tzinfo instance, or an IANA time zone identifier

    Returns:
        tzinfo instance

    Raises:
        TypeError: If zone is None or of an unsupported type
        ValueError: If a zone identifier is unknown
    """
    if isinstance(zone, tzinfo):
        return zone
    if isinstance(zone, str):
        return get_zone(zone)
    if zone is None:
        msg = "Zone is required"
        raise TypeError(msg)
    msg = f"Zone must be datetime.tzinfo or str, got {type(zone).__name__}"
    raise TypeError(msg)
