"""
Structured-output formatters.

This package provides pluggable formatters that render a tree of sections
and scalar values as JSON, XML or plain-text tables.

Usage:
    from structfmt.formatters import FormatterFactory

    formatter = FormatterFactory.create("json-pretty")
    formatter.open_object_section("pool")
    formatter.dump_string("name", "rbd")
    formatter.close_section()
    formatter.flush(sys.stdout)
"""

from .base import OutputFormat, Formatter
from .factory import FormatterFactory

# Import formatters to trigger registration via decorators
from .json_formatter import JSONFormatter
from .xml_formatter import XMLFormatter
from .table_formatter import TableFormatter

__all__ = [
    "OutputFormat",
    "Formatter",
    "FormatterFactory",
    "JSONFormatter",
    "XMLFormatter",
    "TableFormatter",
]
