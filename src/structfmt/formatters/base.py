"""
Base classes and types for structured-output formatters.

This module defines the abstract base class Formatter and the OutputFormat
enum used by all concrete formatters.

Design Pattern: Template Method + Strategy
    - Formatter owns the section stack and the pending stream value
    - Concrete formatters render openings, closings and leaves
    - FormatterFactory creates the appropriate strategy from a format name

Callers build output incrementally::

    f = FormatterFactory.create("json")
    f.open_object_section("osd")
    f.dump_int("id", 3)
    f.dump_string("state", "up")
    f.close_section()
    f.flush(sys.stdout)
"""

import io
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import IO, List, Optional, Union

from ..core.exceptions import SectionStackError
from ..core.escaping import format_float
from ..core.models import FormatterAttrs, PendingScalar, Section

logger = logging.getLogger(__name__)

Sink = Union[IO[str], IO[bytes], bytearray]


class OutputFormat(str, Enum):
    """Supported output format names."""

    JSON = "json"
    JSON_PRETTY = "json-pretty"
    XML = "xml"
    XML_PRETTY = "xml-pretty"
    TABLE = "table"
    TABLE_KV = "table-kv"

    @property
    def display_name(self) -> str:
        """Get human-readable format name."""
        names = {
            self.JSON: "JSON (compact)",
            self.JSON_PRETTY: "JSON (indented)",
            self.XML: "XML (compact)",
            self.XML_PRETTY: "XML (indented)",
            self.TABLE: "Plain-text table",
            self.TABLE_KV: "Key/value lines",
        }
        return names.get(self, self.value.upper())


class Formatter(ABC):
    """
    Abstract base class for all formatters.

    A formatter receives a sequence of open/dump/close calls and renders
    them in its own syntax. Sections must be strictly nested. A value
    written through dump_stream is committed as a string leaf as soon as
    any other formatter method is called, or at flush time.

    Instances are not thread-safe; use one formatter per output.
    """

    def __init__(self):
        self._sections: List[Section] = []
        self._pending: Optional[PendingScalar] = None

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """Get the output format this formatter produces."""
        pass

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def open_array_section(self, name: str) -> None:
        self._open(name, is_array=True)

    def open_array_section_in_ns(self, name: str, ns: str) -> None:
        self._open(name, is_array=True, ns=ns)

    def open_object_section(self, name: str) -> None:
        self._open(name, is_array=False)

    def open_object_section_in_ns(self, name: str, ns: str) -> None:
        self._open(name, is_array=False, ns=ns)

    def open_array_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        """Open an array section; formatters without attribute support drop attrs."""
        self.open_array_section(name)

    def open_object_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        """Open an object section; formatters without attribute support drop attrs."""
        self.open_object_section(name)

    def close_section(self) -> None:
        """
        Close the innermost open section.

        Raises:
            SectionStackError: If no section is open
        """
        if not self._sections:
            raise SectionStackError("close_section called with no open section")
        self._finish_pending()
        section = self._sections.pop()
        self._close_section(section)

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def dump_unsigned(self, name: str, u: int) -> None:
        u = int(u)
        if u < 0:
            raise ValueError(f"dump_unsigned got negative value {u} for '{name}'")
        self._leaf(name, str(u), quoted=False)

    def dump_int(self, name: str, s: int) -> None:
        self._leaf(name, str(int(s)), quoted=False)

    def dump_float(self, name: str, d: float) -> None:
        self._leaf(name, self._float_text(d), quoted=False)

    def dump_string(self, name: str, s: str) -> None:
        self._leaf(name, s, quoted=True)

    def dump_bool(self, name: str, b: bool) -> None:
        self.dump_format_unquoted(name, "%s", "true" if b else "false")

    def dump_string_with_attrs(self, name: str, s: str, attrs: FormatterAttrs) -> None:
        """Dump a string leaf; formatters without attribute support drop attrs."""
        self.dump_string(name, s)

    def dump_stream(self, name: str) -> io.StringIO:
        """
        Get a text stream whose contents become the string value of ``name``.

        The value is committed when the next formatter method runs.
        """
        self._finish_pending()
        self._pending = PendingScalar(name=name or "")
        return self._pending.stream

    def dump_format(self, name: str, fmt: str, *args) -> None:
        """Dump a string leaf built with printf-style ``fmt % args``."""
        self._leaf(name, fmt % args, quoted=True)

    def dump_format_ns(self, name: str, ns: str, fmt: str, *args) -> None:
        self._leaf(name, fmt % args, quoted=True, ns=ns)

    def dump_format_unquoted(self, name: str, fmt: str, *args) -> None:
        """Like dump_format, but the value is emitted as a bare literal."""
        self._leaf(name, fmt % args, quoted=False)

    # ------------------------------------------------------------------
    # Buffer
    # ------------------------------------------------------------------

    def write_raw_data(self, data: Union[str, bytes]) -> None:
        """Append pre-rendered text verbatim, outside of section tracking."""
        self._finish_pending()
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        self._write_raw(data)

    @abstractmethod
    def get_len(self) -> int:
        """
        Get the length of the accumulated output.

        Text written to a dump_stream value that has not been committed yet
        is counted as written, before any quoting or escaping.
        """
        pass

    def flush(self, sink: Sink) -> None:
        """
        Write the rendered output to a text stream, binary stream or bytearray.

        State is kept; call reset() to start a new document.

        Raises:
            SectionStackError: If sections are still open
        """
        if self._sections:
            open_names = [s.name for s in self._sections]
            raise SectionStackError(
                f"Cannot flush with {len(open_names)} open section(s)",
                details={"open_sections": open_names},
            )
        self._finish_pending()

        text = self._render()
        if isinstance(sink, bytearray):
            sink.extend(text.encode("utf-8"))
        elif _is_binary(sink):
            sink.write(text.encode("utf-8"))
        else:
            sink.write(text)
        logger.debug(f"Flushed {len(text)} chars of {self.format_type.value} output")

    def getvalue(self) -> str:
        """Render the output to a string (same checks as flush)."""
        out = io.StringIO()
        self.flush(out)
        return out.getvalue()

    def reset(self) -> None:
        """Discard all output and state."""
        self._sections.clear()
        self._pending = None
        self._clear()
        logger.debug(f"Reset {self.__class__.__name__}")

    # ------------------------------------------------------------------
    # Hooks for concrete formatters
    # ------------------------------------------------------------------

    @abstractmethod
    def _open_section(self, section: Section) -> None:
        """Render the opening of ``section``; it is pushed afterwards."""
        pass

    @abstractmethod
    def _close_section(self, section: Section) -> None:
        """Render the closing of ``section``; it has already been popped."""
        pass

    @abstractmethod
    def _write_leaf(
        self,
        name: str,
        text: str,
        quoted: bool,
        ns: Optional[str] = None,
        attrs: Optional[FormatterAttrs] = None,
    ) -> None:
        """Render one scalar leaf under the current section."""
        pass

    @abstractmethod
    def _write_raw(self, data: str) -> None:
        pass

    @abstractmethod
    def _render(self) -> str:
        """Produce the final output text."""
        pass

    @abstractmethod
    def _clear(self) -> None:
        """Drop format-specific buffers and layout state."""
        pass

    def _float_text(self, d: float) -> str:
        return format_float(d)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @property
    def _parent(self) -> Optional[Section]:
        return self._sections[-1] if self._sections else None

    def _open(
        self,
        name: str,
        is_array: bool,
        ns: Optional[str] = None,
        attrs: Optional[FormatterAttrs] = None,
    ) -> None:
        self._finish_pending()
        section = Section(name=name or "", is_array=is_array, ns=ns, attrs=attrs)
        parent = self._parent
        self._open_section(section)
        if parent is not None:
            parent.size += 1
        self._sections.append(section)

    def _leaf(
        self,
        name: str,
        text: str,
        quoted: bool,
        ns: Optional[str] = None,
        attrs: Optional[FormatterAttrs] = None,
    ) -> None:
        self._finish_pending()
        parent = self._parent
        self._write_leaf(name or "", text, quoted, ns, attrs)
        if parent is not None:
            parent.size += 1

    def _pending_len(self) -> int:
        return len(self._pending.getvalue()) if self._pending is not None else 0

    def _finish_pending(self) -> None:
        if self._pending is None:
            return
        pending, self._pending = self._pending, None
        self._leaf(pending.name, pending.getvalue(), quoted=True)


def _is_binary(sink: Sink) -> bool:
    # file objects that are not io subclasses still report a "wb"/"w+b" mode
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(sink, "mode", "")
    return isinstance(mode, str) and "b" in mode
