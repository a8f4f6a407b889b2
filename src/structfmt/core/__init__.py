"""Core data structures, escaping rules and exceptions shared by all formatters."""

from .exceptions import (
    FormatterException,
    SectionStackError,
    UnsupportedFormatError,
)
from .models import FormatterAttrs, Section, PendingScalar, Column, TableLayout

__all__ = [
    "FormatterException",
    "SectionStackError",
    "UnsupportedFormatError",
    "FormatterAttrs",
    "Section",
    "PendingScalar",
    "Column",
    "TableLayout",
]
