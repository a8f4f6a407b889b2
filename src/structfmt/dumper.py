"""Walk plain Python data through a formatter."""

from collections.abc import Mapping
from typing import Any

from .formatters.base import Formatter


def dump_value(formatter: Formatter, name: str, value: Any) -> None:
    """
    Dump a value and everything below it.

    Mappings become object sections, lists and tuples become array sections
    with anonymous members, None becomes the bare literal ``null`` and any
    other non-numeric value is dumped as its string form.

    Args:
        formatter: Formatter to write to
        name: Name of the value in its enclosing section
        value: Data to dump
    """
    if isinstance(value, Mapping):
        formatter.open_object_section(name)
        for key, item in value.items():
            dump_value(formatter, str(key), item)
        formatter.close_section()
    elif isinstance(value, (list, tuple)):
        formatter.open_array_section(name)
        for item in value:
            dump_value(formatter, "", item)
        formatter.close_section()
    elif isinstance(value, bool):
        formatter.dump_bool(name, value)
    elif isinstance(value, int):
        formatter.dump_int(name, value)
    elif isinstance(value, float):
        formatter.dump_float(name, value)
    elif value is None:
        formatter.dump_format_unquoted(name, "null")
    else:
        formatter.dump_string(name, str(value))
