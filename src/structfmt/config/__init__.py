"""Configuration module."""

from .settings import FormatterConfig

__all__ = ["FormatterConfig"]
