"""Formatter configuration settings.

Values are read from the environment; a project-level .env file is loaded
first when present.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).resolve().parents[3] / ".env"
if env_path.exists():
    load_dotenv(env_path)

# =============================================================================
# Formatter Configuration
# =============================================================================

# Format used when a caller asks for a formatter without naming one
DEFAULT_FORMAT = os.getenv("STRUCTFMT_DEFAULT_FORMAT", "json-pretty")

# Spaces per nesting level in pretty modes
JSON_INDENT = int(os.getenv("STRUCTFMT_JSON_INDENT", "4"))
XML_INDENT = int(os.getenv("STRUCTFMT_XML_INDENT", "1"))

# Joins section names into key paths in table key/value mode
KV_SEPARATOR = os.getenv("STRUCTFMT_KV_SEPARATOR", ".")

# =============================================================================
# Logging Configuration
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


class FormatterConfig:
    """Formatter configuration container."""

    default_format = DEFAULT_FORMAT
    json_indent = JSON_INDENT
    xml_indent = XML_INDENT
    kv_separator = KV_SEPARATOR
    log_level = LOG_LEVEL

    @classmethod
    def validate(cls) -> None:
        """Validate configuration settings."""
        from ..formatters.factory import FormatterFactory

        if cls.json_indent < 0:
            raise ValueError("STRUCTFMT_JSON_INDENT must not be negative")
        if cls.xml_indent < 0:
            raise ValueError("STRUCTFMT_XML_INDENT must not be negative")
        if not cls.kv_separator:
            raise ValueError("STRUCTFMT_KV_SEPARATOR must not be empty")
        if not FormatterFactory.is_registered(cls.default_format):
            raise ValueError(
                f"STRUCTFMT_DEFAULT_FORMAT '{cls.default_format}' is not a known format. "
                f"Available: {[f.value for f in FormatterFactory.get_available_formats()]}"
            )
