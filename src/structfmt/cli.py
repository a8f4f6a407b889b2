#!/usr/bin/env python
"""Command line tool: render a YAML or JSON document with a formatter."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config.settings import FormatterConfig
from .core.exceptions import UnsupportedFormatError
from .dumper import dump_value
from .formatters import FormatterFactory, XMLFormatter

logger = logging.getLogger(__name__)


class RenderRequest(BaseModel):
    """Validated command line request."""
    model_config = ConfigDict(str_strip_whitespace=True)

    format: str = Field(default_factory=lambda: FormatterConfig.default_format)
    root: str = Field(default="document", min_length=1)
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    dtd: bool = False

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower()
        if not FormatterFactory.is_registered(v):
            available = [f.value for f in FormatterFactory.get_available_formats()]
            raise ValueError(f"Invalid output format: {v}. Available: {available}")
        return v


def load_document(path: Optional[Path]) -> Any:
    """
    Load a YAML or JSON document.

    Args:
        path: Document path, or None to read stdin

    Returns:
        Parsed document
    """
    if path is None:
        return yaml.safe_load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def render(request: RenderRequest, data: Any) -> None:
    """Dump ``data`` with the requested formatter and write it out."""
    formatter = FormatterFactory.create(request.format)
    if request.dtd and isinstance(formatter, XMLFormatter):
        formatter.write_raw_data(XMLFormatter.XML_1_DTD + "\n")
    dump_value(formatter, request.root, data)

    if request.output_path is None:
        formatter.flush(sys.stdout)
        return

    request.output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(request.output_path, "wb") as f:
        formatter.flush(f)
    logger.info(f"Wrote {formatter.get_len()} chars to {request.output_path}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="structfmt",
        description="Render a YAML or JSON document as JSON, XML or a text table",
    )
    parser.add_argument("input", nargs="?", help="Path to YAML/JSON document (default: stdin)")
    parser.add_argument("--format", "-f",
                        help=f"Output format (default: {FormatterConfig.default_format})")
    parser.add_argument("--root", "-r", default="document",
                        help="Name of the top-level section (default: document)")
    parser.add_argument("--output", "-o", help="Output path (default: stdout)")
    parser.add_argument("--dtd", action="store_true",
                        help="Start XML output with the XML declaration")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=FormatterConfig.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        FormatterConfig.validate()
        request = RenderRequest(
            format=args.format or FormatterConfig.default_format,
            root=args.root,
            input_path=args.input,
            output_path=args.output,
            dtd=args.dtd,
        )
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        data = load_document(request.input_path)
    except (OSError, yaml.YAMLError) as e:
        print(f"Error: cannot read document: {e}", file=sys.stderr)
        return 1

    try:
        render(request, data)
    except UnsupportedFormatError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
