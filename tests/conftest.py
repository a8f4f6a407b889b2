"""Pytest configuration for test suite."""

import sys
from pathlib import Path

import pytest

# Get paths
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"

# Add src before any test imports so "structfmt.*" resolves without installing
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


ALL_FORMATS = ["json", "json-pretty", "xml", "xml-pretty", "table", "table-kv"]


@pytest.fixture(params=ALL_FORMATS)
def any_formatter(request):
    """A fresh formatter for each registered format name."""
    from structfmt.formatters import FormatterFactory

    return FormatterFactory.create(request.param)
