"""
Formatter Factory with decorator-based registration.

This module provides a factory for creating formatters by name.
Formatters register themselves using the @FormatterFactory.register decorator;
one class may be registered under several names with different options.

Usage:
    from structfmt.formatters import FormatterFactory

    formatter = FormatterFactory.create("xml-pretty")
    formatter = FormatterFactory.create(user_choice, fallback="json")

Extension:
    To add a new format, add it to OutputFormat and decorate the class:

    @FormatterFactory.register(OutputFormat.NEW_FORMAT, pretty=True)
    class NewFormatter(Formatter):
        ...
"""

import logging
from typing import Any, Dict, Optional, Tuple, Type, Union

from ..config.settings import FormatterConfig
from ..core.exceptions import UnsupportedFormatError
from .base import Formatter, OutputFormat

logger = logging.getLogger(__name__)

FormatName = Union[OutputFormat, str]


class FormatterFactory:
    """
    Factory for creating formatters.

    Uses decorator-based registration to allow pluggable format support.
    No changes needed to factory when adding new formats.
    """

    _registry: Dict[OutputFormat, Tuple[Type[Formatter], Dict[str, Any]]] = {}

    @classmethod
    def register(cls, format_type: OutputFormat, **options: Any):
        """
        Decorator to register a formatter class for a format name.

        Usage:
            @FormatterFactory.register(OutputFormat.JSON_PRETTY, pretty=True)
            @FormatterFactory.register(OutputFormat.JSON)
            class JSONFormatter(Formatter):
                ...

        Args:
            format_type: The format name this registration answers to
            **options: Keyword arguments passed to the constructor

        Returns:
            Decorator function
        """
        def decorator(formatter_class: Type[Formatter]) -> Type[Formatter]:
            if format_type in cls._registry:
                existing = cls._registry[format_type][0].__name__
                raise UnsupportedFormatError(
                    f"Format {format_type.value} already registered by {existing}"
                )
            cls._registry[format_type] = (formatter_class, dict(options))
            return formatter_class
        return decorator

    @classmethod
    def create(
        cls,
        format_type: Optional[FormatName],
        default_type: Optional[FormatName] = None,
        fallback: Optional[FormatName] = None,
    ) -> Formatter:
        """
        Create a formatter for the named format.

        Args:
            format_type: Requested format name; empty means ``default_type``
            default_type: Used when no name was requested
                          (defaults to STRUCTFMT_DEFAULT_FORMAT)
            fallback: Used when the requested name is unknown

        Returns:
            New formatter instance

        Raises:
            UnsupportedFormatError: If the name is unknown and there is no
                                    usable fallback
        """
        requested = format_type or default_type or FormatterConfig.default_format
        resolved = cls._resolve(requested)

        if resolved is None:
            if fallback:
                logger.warning(
                    f"Unknown format '{_name(requested)}', falling back to '{_name(fallback)}'"
                )
                return cls.create(fallback)
            available = [f.value for f in cls._registry.keys()]
            raise UnsupportedFormatError(
                f"Unknown format: {_name(requested)}. Available: {available}",
                details={"format": _name(requested), "available": available},
            )

        formatter_class, options = cls._registry[resolved]
        logger.debug(f"Creating {formatter_class.__name__} for format {resolved.value}")
        return formatter_class(**options)

    @classmethod
    def get_available_formats(cls) -> list[OutputFormat]:
        """Get list of registered output formats."""
        return list(cls._registry.keys())

    @classmethod
    def is_registered(cls, format_type: FormatName) -> bool:
        """Check if a format name has a registered formatter."""
        return cls._resolve(format_type) is not None

    @classmethod
    def _resolve(cls, format_type: FormatName) -> Optional[OutputFormat]:
        try:
            resolved = OutputFormat(format_type)
        except ValueError:
            return None
        return resolved if resolved in cls._registry else None


def _name(format_type: FormatName) -> str:
    return format_type.value if isinstance(format_type, OutputFormat) else str(format_type)
