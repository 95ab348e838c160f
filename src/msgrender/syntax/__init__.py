"""Template syntax package.

Provides escape-aware scanning, template fragmentation, and token grammar
parsing. Independent of the runtime, so tooling (linters, extractors) can
inspect templates without any formatter registered.

Python 3.13+. Zero external dependencies.
"""

from .fragments import (
    Fragment,
    Fragmentator,
    FragmentVisitor,
    Fragments,
    LiteralFragment,
    TokenFragment,
    parse_template,
)
from .scanner import StringScanner, find_substring, split
from .token import TokenDefinition, TokenDefinitionParser, parse_token

__all__ = [
    "Fragment",
    "FragmentVisitor",
    "Fragmentator",
    "Fragments",
    "LiteralFragment",
    "StringScanner",
    "TokenDefinition",
    "TokenDefinitionParser",
    "TokenFragment",
    "find_substring",
    "parse_template",
    "parse_token",
    "split",
]
