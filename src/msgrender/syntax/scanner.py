"""Escape-aware substring scanning.

Provides the search and split primitive shared by the fragmentator and the
token grammar parser.

Python 3.13+. Zero external dependencies.

Escape Rule:
    A match directly preceded by the escape character (default backslash)
    is skipped, and the search resumes one character later. A match at
    offset 0 can never be escaped since no character precedes it.
    The escape character is NOT removed from the text; callers receive
    segments exactly as written.

Cursor State:
    StringScanner remembers the offset of its last match and starts each
    search one character after it. Repeated delimiter searches over the
    same text are therefore O(n) overall. When a search reaches the end of
    the text without a match, the scanner is consumed and every further
    search fails immediately.
"""

from msgrender.constants import DEFAULT_ESCAPE_CHARACTER

__all__ = ["StringScanner", "find_substring", "split"]


def _validate_escape_char(escape_char: str) -> None:
    if not isinstance(escape_char, str) or len(escape_char) != 1:
        msg = f"Escape character must be a single character, got {escape_char!r}"
        raise ValueError(msg)


def _validate_substring(substring: str) -> None:
    if not isinstance(substring, str):
        msg = f"Substring must be str, got {type(substring).__name__}"
        raise TypeError(msg)
    if not substring:
        msg = "Substring cannot be empty"
        raise ValueError(msg)


def _search(text: str, substring: str, offset: int, escape_char: str) -> int | None:
    """Locate the first unescaped occurrence of substring at or after offset.

    Inputs are not validated; callers must pass a non-empty substring and a
    non-negative offset.
    """
    while offset + len(substring) <= len(text):
        index = text.find(substring, offset)
        if index == -1:
            return None
        if index > 0 and text[index - 1] == escape_char:
            # Disqualified: the match is prefixed by the escape character.
            offset = index + 1
            continue
        return index
    return None


def find_substring(
    text: str,
    substring: str,
    offset: int = 0,
    escape_char: str = DEFAULT_ESCAPE_CHARACTER,
) -> int | None:
    """Find the first unescaped occurrence of substring in text.

    Args:
        text: Text to search within
        substring: Substring to look for (non-empty)
        offset: Offset to start searching at (0-based, non-negative)
        escape_char: Character that disqualifies a directly following match

    Returns:
        Offset of the match, or None if there is no unescaped occurrence

    Raises:
        TypeError: If text or substring is not a string
        ValueError: If substring is empty, offset is negative, or
            escape_char is not a single character

    Example:
        >>> find_substring("a\\\\;b;c", ";")
        4
        >>> find_substring("abc", ";") is None
        True
    """
    if not isinstance(text, str):
        msg = f"Text must be str, got {type(text).__name__}"
        raise TypeError(msg)
    _validate_substring(substring)
    _validate_escape_char(escape_char)
    if offset < 0:
        msg = f"Offset cannot be negative, got {offset}"
        raise ValueError(msg)
    return _search(text, substring, offset, escape_char)


def split(
    text: str,
    delimiter: str,
    escape_char: str = DEFAULT_ESCAPE_CHARACTER,
) -> list[str]:
    """Split text at every unescaped delimiter.

    Leading and trailing empty segments are preserved, so the result always
    has one more segment than there are unescaped delimiters. The only
    exception is empty text, which yields an empty list.

    Args:
        text: Text to split
        delimiter: Separator (non-empty)
        escape_char: Character that disqualifies a directly following delimiter

    Returns:
        Segments between delimiters, escape characters preserved

    Example:
        >>> split("A;B;C", ";")
        ['A', 'B', 'C']
        >>> split("A\\\\;B;C", ";")
        ['A\\\\;B', 'C']
        >>> split(";;", ";")
        ['', '', '']
        >>> split("", ";")
        []
    """
    if not isinstance(text, str):
        msg = f"Text must be str, got {type(text).__name__}"
        raise TypeError(msg)
    _validate_substring(delimiter)
    _validate_escape_char(escape_char)

    if not text:
        return []

    segments: list[str] = []
    start = 0
    while True:
        index = _search(text, delimiter, start, escape_char)
        if index is None:
            segments.append(text[start:])
            return segments
        segments.append(text[start:index])
        start = index + len(delimiter)


class StringScanner:
    """Stateful, escape-aware substring finder over a single text.

    Each find() begins one character after the previous match (offset 0 for
    the first search). A failed search moves the cursor to the end of the
    text and marks the scanner consumed.

    Example:
        >>> scanner = StringScanner("Hello ${name}!")
        >>> scanner.find("${")
        6
        >>> scanner.find("}")
        12
        >>> scanner.find("}") is None
        True
        >>> scanner.consumed
        True
    """

    __slots__ = ("_escape_char", "_offset", "_text")

    def __init__(self, text: str, escape_char: str = DEFAULT_ESCAPE_CHARACTER) -> None:
        """Create a scanner positioned before the first character.

        Args:
            text: Text to scan
            escape_char: Escape character (default: backslash)

        Raises:
            TypeError: If text is not a string
            ValueError: If escape_char is not a single character
        """
        if not isinstance(text, str):
            msg = f"Text must be str, got {type(text).__name__}"
            raise TypeError(msg)
        _validate_escape_char(escape_char)
        self._text = text
        self._escape_char = escape_char
        # -1: no search performed yet; len(text): consumed.
        self._offset = -1

    @property
    def text(self) -> str:
        """Text being scanned."""
        return self._text

    @property
    def escape_char(self) -> str:
        """Escape character in effect."""
        return self._escape_char

    @property
    def offset(self) -> int:
        """Offset of the last match (-1 before the first search)."""
        return self._offset

    @property
    def consumed(self) -> bool:
        """True once the cursor has reached the end of the text."""
        return self._offset == len(self._text)

    def find(self, substring: str) -> int | None:
        """Find the next unescaped occurrence of substring.

        Args:
            substring: Substring to look for (non-empty)

        Returns:
            Offset of the match, or None if not found (scanner becomes consumed)
        """
        _validate_substring(substring)
        if self.consumed:
            return None

        index = _search(self._text, substring, self._offset + 1, self._escape_char)
        self._offset = len(self._text) if index is None else index
        return index

    def seek(self, offset: int) -> None:
        """Position the cursor so the next search starts at offset.

        Used to step over multi-character delimiters. Seeking to or beyond
        the end of the text consumes the scanner.

        Args:
            offset: Offset where the next search begins (non-negative)

        Raises:
            ValueError: If offset is negative
        """
        if offset < 0:
            msg = f"Offset cannot be negative, got {offset}"
            raise ValueError(msg)
        self._offset = len(self._text) if offset >= len(self._text) else offset - 1

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"StringScanner(offset={self._offset}, length={len(self._text)})"
