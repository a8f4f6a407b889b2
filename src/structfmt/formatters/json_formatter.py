"""
JSON formatter.

Writes JSON text directly from the open/dump/close call sequence. Each open
section counts its children so commas go between them; object children are
written as quoted keys, array children as bare values. The name given to a
top-level section is not written, since a JSON document has no enclosing key.
"""

import io
import math
from typing import Optional

from ..config.settings import FormatterConfig
from ..core.escaping import escape_json_str
from ..core.models import FormatterAttrs, Section
from .base import Formatter, OutputFormat
from .factory import FormatterFactory


@FormatterFactory.register(OutputFormat.JSON_PRETTY, pretty=True)
@FormatterFactory.register(OutputFormat.JSON)
class JSONFormatter(Formatter):
    """Formatter that writes compact or indented JSON."""

    def __init__(self, pretty: bool = False):
        super().__init__()
        self.pretty = pretty
        self.indent = FormatterConfig.json_indent
        self._ss = io.StringIO()

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON_PRETTY if self.pretty else OutputFormat.JSON

    def get_len(self) -> int:
        return self._ss.tell() + self._pending_len()

    def _open_section(self, section: Section) -> None:
        self._print_name(section.name)
        self._ss.write("[" if section.is_array else "{")

    def _close_section(self, section: Section) -> None:
        if self.pretty and section.size:
            self._ss.write("\n" + " " * (self.indent * len(self._sections)))
        self._ss.write("]" if section.is_array else "}")

    def _write_leaf(
        self,
        name: str,
        text: str,
        quoted: bool,
        ns: Optional[str] = None,
        attrs: Optional[FormatterAttrs] = None,
    ) -> None:
        self._print_name(name)
        if quoted:
            self._print_quoted_string(text)
        else:
            self._ss.write(text)

    def _write_raw(self, data: str) -> None:
        self._ss.write(data)

    def _render(self) -> str:
        text = self._ss.getvalue()
        if self.pretty and text:
            text += "\n"
        return text

    def _clear(self) -> None:
        self._ss = io.StringIO()

    def _float_text(self, d: float) -> str:
        # JSON has no literal for NaN or infinity
        if not math.isfinite(d):
            return "null"
        return super()._float_text(d)

    def _print_quoted_string(self, s: str) -> None:
        self._ss.write('"' + escape_json_str(s) + '"')

    def _print_name(self, name: str) -> None:
        if not self._sections:
            return
        entry = self._sections[-1]
        self._print_comma(entry)
        if not entry.is_array:
            if self.pretty:
                self._ss.write(" " * self.indent)
            self._print_quoted_string(name)
            self._ss.write(": " if self.pretty else ":")

    def _print_comma(self, entry: Section) -> None:
        depth = " " * (self.indent * (len(self._sections) - 1))
        if entry.size:
            self._ss.write(",\n" + depth if self.pretty else ",")
        elif self.pretty:
            self._ss.write("\n" + depth)
        if self.pretty and entry.is_array:
            self._ss.write(" " * self.indent)
