"""Template fragmentation.

Splits a template into an ordered stream of literal-text and token fragments.

Example:
    >>> fragments = parse_template("Hello Mr. ${name}, pleased to meet you.")
    >>> [type(f).__name__ for f in fragments]
    ['LiteralFragment', 'TokenFragment', 'LiteralFragment']
    >>> fragments[1].contents
    'name'

Grammar Notes:
    - Token delimiters default to ``${`` and ``}`` and are configurable.
    - The first unescaped suffix after a prefix closes the token; nesting
      and balanced-bracket counting are not supported.
    - Escaped delimiters stay in the text verbatim (``\\${`` is literal).

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from msgrender.constants import (
    DEFAULT_ESCAPE_CHARACTER,
    DEFAULT_TOKEN_PREFIX,
    DEFAULT_TOKEN_SUFFIX,
)
from msgrender.diagnostics import ErrorTemplate, TemplateSyntaxError

from .scanner import StringScanner

__all__ = [
    "Fragment",
    "FragmentVisitor",
    "Fragmentator",
    "Fragments",
    "LiteralFragment",
    "TokenFragment",
    "parse_template",
]


def _validate_range(start: int, end: int) -> None:
    if start < 0:
        msg = f"Fragment start must be >= 0, got {start}"
        raise ValueError(msg)
    if end < start:
        msg = f"Fragment end ({end}) must be >= start ({start})"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class LiteralFragment:
    """Plain text copied to the output as-is.

    Attributes:
        contents: Text of the fragment
        start: Offset of the first character (inclusive)
        end: Offset of the last character (inclusive)
    """

    contents: str
    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate offsets."""
        _validate_range(self.start, self.end)


@dataclass(frozen=True, slots=True)
class TokenFragment:
    """Placeholder to be resolved during rendering.

    The range covers the whole token including its delimiters, while
    contents holds only the text between them.

    Attributes:
        contents: Token body without prefix and suffix (e.g. "name;decimal")
        start: Offset of the prefix's first character (inclusive)
        end: Offset of the suffix's last character (inclusive)
    """

    contents: str
    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate offsets."""
        _validate_range(self.start, self.end)


type Fragment = LiteralFragment | TokenFragment


@dataclass(frozen=True, slots=True)
class Fragments:
    """Ordered fragment stream of a single template.

    Attributes:
        text: Original template
        fragments: Fragments in template order
    """

    text: str
    fragments: tuple[Fragment, ...]

    def __iter__(self) -> Iterator[Fragment]:
        """Iterate over fragments in template order."""
        return iter(self.fragments)

    def __len__(self) -> int:
        """Return the number of fragments."""
        return len(self.fragments)

    def __getitem__(self, index: int) -> Fragment:
        """Return the fragment at index."""
        return self.fragments[index]

    @property
    def tokens(self) -> tuple[TokenFragment, ...]:
        """Token fragments only, in template order."""
        return tuple(f for f in self.fragments if isinstance(f, TokenFragment))

    def visit[T](self, visitor: "FragmentVisitor[T]") -> list[T]:
        """Dispatch every fragment to visitor, in template order.

        Returns:
            One visitor result per fragment
        """
        return [visitor.visit(fragment) for fragment in self.fragments]


class FragmentVisitor[T]:
    """Base visitor for fragment streams.

    Follows the stdlib ast.NodeVisitor naming convention: override
    visit_LiteralFragment and visit_TokenFragment. Unhandled fragment
    types fall through to generic_visit(), which raises.

    Example:
        >>> class TokenCounter(FragmentVisitor[int]):
        ...     def visit_LiteralFragment(self, fragment):
        ...         return 0
        ...     def visit_TokenFragment(self, fragment):
        ...         return 1
        >>> sum(parse_template("${a} and ${b}").visit(TokenCounter()))
        2
    """

    def visit(self, fragment: Fragment) -> T:
        """Dispatch fragment to its visit_<ClassName> method."""
        method: Callable[[Fragment], T] = getattr(
            self, f"visit_{type(fragment).__name__}", self.generic_visit
        )
        return method(fragment)

    def generic_visit(self, fragment: Fragment) -> T:
        """Handle a fragment type with no dedicated visit method."""
        msg = f"{type(self).__name__} cannot visit {type(fragment).__name__}"
        raise NotImplementedError(msg)


class Fragmentator:
    """Splits templates into literal and token fragments.

    Instances are immutable and may be shared across threads; each parse()
    call uses its own scanner.

    Example:
        >>> fragmentator = Fragmentator("{{", "}}")
        >>> [f.contents for f in fragmentator.parse("Hi {{name}}!")]
        ['Hi ', 'name', '!']
    """

    __slots__ = ("_escape_char", "_prefix", "_suffix")

    def __init__(
        self,
        token_prefix: str = DEFAULT_TOKEN_PREFIX,
        token_suffix: str = DEFAULT_TOKEN_SUFFIX,
        escape_char: str = DEFAULT_ESCAPE_CHARACTER,
    ) -> None:
        """Create a fragmentator.

        Args:
            token_prefix: Marks the beginning of a token (default: "${")
            token_suffix: Marks the end of a token (default: "}")
            escape_char: Escape character (default: backslash)

        Raises:
            ValueError: If either delimiter is empty
        """
        if not token_prefix:
            msg = "Token prefix cannot be empty"
            raise ValueError(msg)
        if not token_suffix:
            msg = "Token suffix cannot be empty"
            raise ValueError(msg)
        if len(escape_char) != 1:
            msg = f"Escape character must be a single character, got {escape_char!r}"
            raise ValueError(msg)
        self._prefix = token_prefix
        self._suffix = token_suffix
        self._escape_char = escape_char

    @property
    def token_prefix(self) -> str:
        """Token prefix delimiter."""
        return self._prefix

    @property
    def token_suffix(self) -> str:
        """Token suffix delimiter."""
        return self._suffix

    @property
    def escape_char(self) -> str:
        """Escape character in effect."""
        return self._escape_char

    def parse(self, template: str) -> Fragments:
        """Split template into fragments.

        Args:
            template: Template text

        Returns:
            Fragments in template order (empty for an empty template)

        Raises:
            TypeError: If template is not a string
            TemplateSyntaxError: If a token prefix has no matching suffix
        """
        if not isinstance(template, str):
            msg = f"Template must be str, got {type(template).__name__}"
            raise TypeError(msg)

        if not template:
            return Fragments(template, ())

        fragments: list[Fragment] = []

        scanner = StringScanner(template, self._escape_char)
        current = 0

        while not scanner.consumed:
            token_start = scanner.find(self._prefix)

            # Text runs up to the next token, or to the end of the template.
            text_end = len(template) if token_start is None else token_start
            if text_end > current:
                fragments.append(
                    LiteralFragment(template[current:text_end], current, text_end - 1)
                )

            if token_start is None:
                break

            body_start = token_start + len(self._prefix)
            scanner.seek(body_start)
            token_end = scanner.find(self._suffix)
            if token_end is None:
                diagnostic = ErrorTemplate.unterminated_token(
                    token_start, self._prefix, self._suffix
                )
                raise TemplateSyntaxError(diagnostic)

            current = token_end + len(self._suffix)
            fragments.append(
                TokenFragment(template[body_start:token_end], token_start, current - 1)
            )
            scanner.seek(current)

        return Fragments(template, tuple(fragments))

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"Fragmentator(token_prefix={self._prefix!r}, token_suffix={self._suffix!r})"


_DEFAULT_FRAGMENTATOR = Fragmentator()


def parse_template(template: str) -> Fragments:
    """Split template into fragments using the default ``${...}`` delimiters.

    Convenience function for Fragmentator().parse().

    Args:
        template: Template text

    Returns:
        Fragments in template order

    Raises:
        TemplateSyntaxError: If a token prefix has no matching suffix
    """
    return _DEFAULT_FRAGMENTATOR.parse(template)
