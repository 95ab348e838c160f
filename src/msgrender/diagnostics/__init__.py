"""Diagnostic system for msgrender errors.

Provides structured error diagnostics with codes, offsets and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    FormatError,
    MessageError,
    PropertyValidationError,
    TemplateSyntaxError,
    TokenGrammarError,
    UnknownFormatterError,
    VariableError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate, describe_types

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FormatError",
    "MessageError",
    "OutputFormat",
    "PropertyValidationError",
    "TemplateSyntaxError",
    "TokenGrammarError",
    "UnknownFormatterError",
    "VariableError",
    "describe_types",
]
