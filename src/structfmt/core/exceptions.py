"""Custom exceptions for the formatter package."""

from typing import Optional, Dict, Any


class FormatterException(Exception):
    """Base exception for all formatter errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class SectionStackError(FormatterException):
    """Raised when open/close calls are not properly nested."""
    pass


class UnsupportedFormatError(FormatterException):
    """Raised when a formatter is requested for an unknown format name."""
    pass
