"""structfmt - write nested structured output as JSON, XML or text tables."""

from .core import FormatterAttrs, FormatterException, SectionStackError, UnsupportedFormatError
from .dumper import dump_value
from .formatters import (
    Formatter,
    FormatterFactory,
    JSONFormatter,
    OutputFormat,
    TableFormatter,
    XMLFormatter,
)

__version__ = "0.1.0"

__all__ = [
    "Formatter",
    "FormatterAttrs",
    "FormatterException",
    "FormatterFactory",
    "JSONFormatter",
    "OutputFormat",
    "SectionStackError",
    "TableFormatter",
    "UnsupportedFormatError",
    "XMLFormatter",
    "dump_value",
]
