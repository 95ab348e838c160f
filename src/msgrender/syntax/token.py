"""Token grammar parsing.

Parses the body of a single token into a structured definition.

Grammar:
    token    := variable (';' formatter (';' property)*)?
    property := key '=' value

A token naming only a variable is *vague*: its formatter is chosen at render
time from the runtime type of the value. A token that also names a formatter
is *explicit*: the formatter is resolved once, at compile time.

Examples:
    ${distance}                                  vague
    ${distance;decimal}                          explicit, default properties
    ${distance;decimal;decimalPlaces=3;rounding=true}

Splitting honours the escape character, so ``\\;`` and ``\\=`` inside a
property value do not split it. Escape characters are kept verbatim.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from msgrender.constants import (
    DEFAULT_ESCAPE_CHARACTER,
    PROPERTY_SPLITTER,
    TOKEN_SPLITTER,
)
from msgrender.diagnostics import ErrorTemplate, TokenGrammarError

from .scanner import find_substring, split

__all__ = ["TokenDefinition", "TokenDefinitionParser", "parse_token"]


@dataclass(frozen=True, slots=True)
class TokenDefinition:
    """Structured token: variable binding, formatter and its properties.

    Attributes:
        variable_name: Variable to read from the value context (never empty)
        formatter_name: Named formatter, or None for a vague token
        properties: Formatter properties (read-only; keys and values trimmed)
    """

    variable_name: str
    formatter_name: str | None = None
    properties: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate and freeze the definition."""
        if not self.variable_name:
            msg = "TokenDefinition.variable_name cannot be empty"
            raise ValueError(msg)
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def is_explicit(self) -> bool:
        """True if the token names a formatter, False if vague."""
        return self.formatter_name is not None


class TokenDefinitionParser:
    """Parses raw token bodies into TokenDefinition objects.

    Stateless; a single instance may be shared across threads.

    Example:
        >>> parser = TokenDefinitionParser()
        >>> definition = parser.parse("price;decimal;decimalPlaces=3")
        >>> definition.variable_name, definition.formatter_name
        ('price', 'decimal')
        >>> dict(definition.properties)
        {'decimalPlaces': '3'}
    """

    __slots__ = ("_escape_char",)

    def __init__(self, escape_char: str = DEFAULT_ESCAPE_CHARACTER) -> None:
        """Create a parser.

        Args:
            escape_char: Escape character for ';' and '=' (default: backslash)
        """
        self._escape_char = escape_char

    def parse(self, token: str) -> TokenDefinition:
        """Parse a raw token body.

        Args:
            token: Token contents without prefix and suffix

        Returns:
            Parsed definition

        Raises:
            TypeError: If token is not a string
            TokenGrammarError: If the token is empty, its variable or
                formatter name is blank, or a property lacks '='
        """
        if not isinstance(token, str):
            msg = f"Token must be str, got {type(token).__name__}"
            raise TypeError(msg)
        if not token:
            raise TokenGrammarError(ErrorTemplate.empty_token())

        segments = split(token, TOKEN_SPLITTER, self._escape_char)

        variable_name = segments[0].strip()
        if not variable_name:
            raise TokenGrammarError(ErrorTemplate.empty_variable_name(token))

        if len(segments) == 1:
            return TokenDefinition(variable_name)

        formatter_name = segments[1].strip()
        if not formatter_name:
            raise TokenGrammarError(ErrorTemplate.empty_formatter_name(variable_name))

        properties: dict[str, str] = {}
        for index, segment in enumerate(segments[2:], start=1):
            pair = self._parse_property(segment)
            if pair is None:
                raise TokenGrammarError(
                    ErrorTemplate.malformed_property(index, segment, variable_name)
                )
            key, value = pair
            # Duplicate keys: last occurrence wins.
            properties[key] = value

        return TokenDefinition(variable_name, formatter_name, MappingProxyType(properties))

    def _parse_property(self, segment: str) -> tuple[str, str] | None:
        offset = find_substring(segment, PROPERTY_SPLITTER, 0, self._escape_char)
        if offset is None:
            return None
        key = segment[:offset].strip()
        value = segment[offset + len(PROPERTY_SPLITTER) :].strip()
        return key, value


_DEFAULT_PARSER = TokenDefinitionParser()


def parse_token(token: str) -> TokenDefinition:
    """Parse a raw token body with the default escape character.

    Convenience function for TokenDefinitionParser().parse().

    Args:
        token: Token contents without prefix and suffix

    Returns:
        Parsed definition

    Raises:
        TokenGrammarError: If the token does not match the grammar
    """
    return _DEFAULT_PARSER.parse(token)
