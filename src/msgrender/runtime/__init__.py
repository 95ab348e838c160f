"""msgrender runtime package.

Provides formatters, formatter factories, render constructs, compiled
messages, and the MessageFactory compiler. Depends on the syntax package
for template parsing.

Python 3.13+.
"""

from .compiler import MessageFactory
from .constructs import (
    DynamicFormatConstruct,
    LiteralConstruct,
    RenderConstruct,
    StaticFormatConstruct,
)
from .factories import (
    CurrencyFormatterFactory,
    DateFormatterFactory,
    DecimalFamilyFactory,
    DecimalFormatterFactory,
    FormatterFactory,
    IntegerFormatterFactory,
    PercentageFormatterFactory,
    SharedFormatterFactory,
    StringFormatterFactory,
    TimeFormatterFactory,
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
from .message import Message, RenderContext
from .number_patterns import NumberPatterns

__all__ = [
    "CurrencyFormatter",
    "CurrencyFormatterFactory",
    "DateFormatter",
    "DateFormatterFactory",
    "DecimalFamilyFactory",
    "DecimalFamilyFormatter",
    "DecimalFormatter",
    "DecimalFormatterFactory",
    "DynamicFormatConstruct",
    "Formatter",
    "FormatterFactory",
    "IntegerFormatter",
    "IntegerFormatterFactory",
    "LiteralConstruct",
    "Message",
    "MessageFactory",
    "NumberPatterns",
    "PercentageFormatter",
    "PercentageFormatterFactory",
    "RenderConstruct",
    "RenderContext",
    "SharedFormatterFactory",
    "StaticFormatConstruct",
    "StringFormatter",
    "StringFormatterFactory",
    "TimeFormatter",
    "TimeFormatterFactory",
]
