"""
XML formatter.

Every section becomes an element named after the section, and every leaf
becomes ``<name>value</name>``. Namespaces are written as an ``xmlns``
attribute on the element. Element content and attribute values are escaped
with escape_xml_str, which also strips characters XML 1.0 does not allow.

Element and attribute names go through xml_name: any character that is not
allowed in an XML name (spaces, ``&``, quotes, ``:`` and so on) becomes ``_``,
and a name that cannot start an XML name gets a leading ``_``. A dict key such
as ``10.0.0.1`` is written as ``<_10.0.0.1>``. Anonymous elements are named
``item``.
"""

import io
import logging
from typing import Optional

from ..config.settings import FormatterConfig
from ..core.escaping import escape_xml_str, xml_name
from ..core.models import FormatterAttrs, Section
from .base import Formatter, OutputFormat
from .factory import FormatterFactory

logger = logging.getLogger(__name__)

ANONYMOUS_TAG = "item"


@FormatterFactory.register(OutputFormat.XML_PRETTY, pretty=True)
@FormatterFactory.register(OutputFormat.XML)
class XMLFormatter(Formatter):
    """Formatter that writes compact or indented XML."""

    XML_1_DTD = '<?xml version="1.0" encoding="UTF-8"?>'

    def __init__(self, pretty: bool = False, lowercased: bool = False):
        """
        Initialize XML formatter.

        Args:
            pretty: Indent nested elements, one element per line
            lowercased: Lowercase all element names
        """
        super().__init__()
        self.pretty = pretty
        self.lowercased = lowercased
        self.indent = FormatterConfig.xml_indent
        self._ss = io.StringIO()

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.XML_PRETTY if self.pretty else OutputFormat.XML

    def open_array_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        self._open(name, is_array=True, attrs=attrs)

    def open_object_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        self._open(name, is_array=False, attrs=attrs)

    def dump_string_with_attrs(self, name: str, s: str, attrs: FormatterAttrs) -> None:
        self._leaf(name, s, quoted=True, attrs=attrs)

    def get_len(self) -> int:
        return self._ss.tell() + self._pending_len()

    def get_attrs_str(self, attrs: Optional[FormatterAttrs]) -> str:
        """Render attributes as ` name="value"` pairs for an opening tag."""
        if not attrs:
            return ""
        seen = set()
        out = []
        for name, value in attrs:
            name = xml_name(name)
            if name in seen:
                logger.warning(f"Dropping duplicate XML attribute '{name}'")
                continue
            seen.add(name)
            out.append(f' {name}="{escape_xml_str(value)}"')
        return "".join(out)

    def get_xml_name(self, name: str) -> str:
        e = name or ANONYMOUS_TAG
        if self.lowercased:
            e = e.lower()
        return xml_name(e)

    def _open_section(self, section: Section) -> None:
        self._print_spaces()
        self._ss.write(self._start_tag(section.name, section.ns, section.attrs))
        if self.pretty:
            self._ss.write("\n")

    def _close_section(self, section: Section) -> None:
        self._print_spaces()
        self._ss.write(f"</{self.get_xml_name(section.name)}>")
        if self.pretty:
            self._ss.write("\n")

    def _write_leaf(
        self,
        name: str,
        text: str,
        quoted: bool,
        ns: Optional[str] = None,
        attrs: Optional[FormatterAttrs] = None,
    ) -> None:
        self._print_spaces()
        self._ss.write(self._start_tag(name, ns, attrs))
        self._ss.write(f"{escape_xml_str(text)}</{self.get_xml_name(name)}>")
        if self.pretty:
            self._ss.write("\n")

    def _write_raw(self, data: str) -> None:
        self._ss.write(data)

    def _render(self) -> str:
        return self._ss.getvalue()

    def _clear(self) -> None:
        self._ss = io.StringIO()

    def _start_tag(
        self,
        name: str,
        ns: Optional[str],
        attrs: Optional[FormatterAttrs],
    ) -> str:
        pairs = list(attrs) if attrs else []
        if ns:
            pairs.append(("xmlns", ns))
        return f"<{self.get_xml_name(name)}{self.get_attrs_str(FormatterAttrs(pairs))}>"

    def _print_spaces(self) -> None:
        if self.pretty:
            self._ss.write(" " * (self.indent * len(self._sections)))
