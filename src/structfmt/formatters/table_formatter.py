"""
Table formatter.

Turns the open/dump/close call sequence into plain-text tables, or into
``path=value`` lines in key/value mode.

Tabular mode:
    The first array opened while no table is being filled becomes the
    controlling array of a new table. Each section opened directly inside
    it is one row; a scalar dumped directly inside it is a row of its own.
    Leaves further down in a row are flattened into that row under the
    names of the sections between the row and the leaf, joined with the
    configured separator (``addr.ip``). A name repeated within one row gets
    an occurrence counter (``addr.ip[1]``).

    Leaves dumped outside any controlling array go into a single-row summary
    table. Tables are rendered in the order they were started.

Key/value mode:
    Each leaf is written immediately as one line; the path is made of the
    open section names, with positional indexes for anonymous members of
    arrays.

In both modes names and values go through escape_table_str before they are
measured or written: backslash, newline, carriage return and tab appear as
``\\\\``, ``\\n``, ``\\r`` and ``\\t``, so one value never spans two lines.
"""

import io
from typing import List, Optional, Sequence, Union

from ..config.settings import FormatterConfig
from ..core.escaping import escape_table_str
from ..core.models import Column, FormatterAttrs, Section, TableLayout
from .base import Formatter, OutputFormat
from .factory import FormatterFactory

ANONYMOUS_COLUMN = "value"


@FormatterFactory.register(OutputFormat.TABLE_KV, keyval=True)
@FormatterFactory.register(OutputFormat.TABLE)
class TableFormatter(Formatter):
    """Formatter that writes aligned text tables or key/value lines."""

    def __init__(self, keyval: bool = False):
        super().__init__()
        self.keyval = keyval
        self.separator = FormatterConfig.kv_separator
        self._clear()

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.TABLE_KV if self.keyval else OutputFormat.TABLE

    def open_array_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        self._open(name, is_array=True, attrs=attrs)

    def open_object_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        self._open(name, is_array=False, attrs=attrs)

    def dump_string_with_attrs(self, name: str, s: str, attrs: FormatterAttrs) -> None:
        self._leaf(name, s, quoted=True, attrs=attrs)

    def get_len(self) -> int:
        if self.keyval:
            return self._lines.tell() + self._pending_len()
        return len(self._render()) + self._pending_len()

    def get_attrs_str(self, attrs: Optional[FormatterAttrs]) -> str:
        """Render attributes as an inline ``(name="value", ...)`` annotation."""
        if not attrs:
            return ""
        return "(" + ", ".join(f'{name}="{value}"' for name, value in attrs) + ")"

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _open_section(self, section: Section) -> None:
        depth = len(self._sections)
        section.key = self._segment(section.name, self._parent)
        if self.keyval:
            return

        if self._control_depth is None:
            if section.is_array:
                self._control_depth = depth
                self._table = TableLayout()
                self._segments.append(self._table)
                self._summary = None
        elif depth == self._control_depth + 1:
            self._row_depth = depth
            self._table.new_row()

    def _close_section(self, section: Section) -> None:
        depth = len(self._sections)
        if depth == self._row_depth:
            self._row_depth = None
        if depth == self._control_depth:
            self._control_depth = None
            self._table = None

    def _write_leaf(
        self,
        name: str,
        text: str,
        quoted: bool,
        ns: Optional[str] = None,
        attrs: Optional[FormatterAttrs] = None,
    ) -> None:
        if ns:
            text = f"{ns}.{text}"
        annotation = self.get_attrs_str(self._take_attrs(attrs))
        if annotation:
            text = f"{text} {annotation}"
        text = escape_table_str(text)

        if self.keyval:
            self._lines.write(f"{escape_table_str(self._kv_path(name))}={text}\n")
            return

        if self._control_depth is not None:
            table = self._table
            if self._row_depth is None:
                # scalar directly inside the controlling array
                table.new_row()
                base = self._control_depth
            else:
                base = self._row_depth
        else:
            if self._summary is None:
                self._summary = TableLayout()
                self._segments.append(self._summary)
            table = self._summary
            base = 0

        table.place(self._column_key(name, base), text)

    def _write_raw(self, data: str) -> None:
        if self.keyval:
            self._lines.write(data)
        else:
            self._segments.append(data)

    def _render(self) -> str:
        if self.keyval:
            return self._lines.getvalue()

        out = []
        previous_table = False
        for segment in self._segments:
            if isinstance(segment, str):
                out.append(segment)
                previous_table = False
                continue
            if segment.is_empty:
                continue
            if previous_table:
                out.append("\n")
            out.append(self._render_table(segment))
            previous_table = True
        return "".join(out)

    def _clear(self) -> None:
        self._lines = io.StringIO()
        self._segments: List[Union[TableLayout, str]] = []
        self._table: Optional[TableLayout] = None
        self._summary: Optional[TableLayout] = None
        self._control_depth: Optional[int] = None
        self._row_depth: Optional[int] = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _segment(self, name: str, parent: Optional[Section]) -> str:
        if name:
            return name
        if self.keyval and parent is not None and parent.is_array:
            return str(parent.size)
        return ""

    def _kv_path(self, name: str) -> str:
        parts = [s.key for s in self._sections if s.key]
        leaf = self._segment(name, self._parent)
        if leaf:
            parts.append(leaf)
        return self.separator.join(parts) or ANONYMOUS_COLUMN

    def _column_key(self, name: str, base: int) -> str:
        parts = [s.key for s in self._sections[base + 1:] if s.key]
        if name:
            parts.append(name)
        elif not parts:
            parent = self._parent
            parts.append(parent.name if parent is not None and parent.name else ANONYMOUS_COLUMN)
        return escape_table_str(self.separator.join(parts))

    def _take_attrs(self, attrs: Optional[FormatterAttrs]) -> Optional[FormatterAttrs]:
        # section attributes annotate the first cell written below them
        pairs = []
        for section in self._sections:
            if section.attrs:
                pairs.extend(section.attrs)
                section.attrs = None
        if attrs:
            pairs.extend(attrs)
        return FormatterAttrs(pairs) if pairs else None

    def _render_table(self, table: TableLayout) -> str:
        columns = [table.columns[name] for name in table.column_order]
        border = "+" + "".join("-" * (c.display_width + 3) + "+" for c in columns)

        lines = [border, self._row_line(columns, [c.name for c in columns]), border]
        for row in table.rows:
            lines.append(self._row_line(columns, [row.get(c.name, "") for c in columns]))
        lines.append(border)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _row_line(columns: Sequence[Column], cells: Sequence[str]) -> str:
        return "|" + "".join(
            f" {cell:<{column.display_width + 2}}|" for column, cell in zip(columns, cells)
        )
