"""Core data models shared by the formatters."""

import io
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass
class FormatterAttrs:
    """Ordered (name, value) attribute pairs attached to a section or string leaf."""
    attrs: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_flat(cls, *items: str) -> "FormatterAttrs":
        """
        Build attributes from alternating names and values.

        Example:
            FormatterAttrs.from_flat("id", "3", "state", "up")

        Raises:
            ValueError: If a name is missing its value
        """
        if len(items) % 2:
            raise ValueError(
                f"Attributes need name/value pairs, got {len(items)} items"
            )
        return cls(list(zip(items[0::2], items[1::2])))

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.attrs)

    def __len__(self) -> int:
        return len(self.attrs)


@dataclass
class Section:
    """One open scope on a formatter's section stack."""
    name: str
    is_array: bool = False
    size: int = 0  # children emitted so far
    ns: Optional[str] = None
    attrs: Optional[FormatterAttrs] = None
    key: Optional[str] = None  # path segment, table formatter only


@dataclass
class PendingScalar:
    """String value being written through a stream returned by dump_stream."""
    name: str
    stream: io.StringIO = field(default_factory=io.StringIO)

    def getvalue(self) -> str:
        return self.stream.getvalue()


@dataclass
class Column:
    """A discovered table column."""
    name: str
    width: int = 0
    occurrences: int = 0  # times the key was placed in the current row

    def observe(self, text: str) -> None:
        if len(text) > self.width:
            self.width = len(text)

    @property
    def display_width(self) -> int:
        return max(self.width, len(self.name))


@dataclass
class TableLayout:
    """
    Columns and rows accumulated for one table.

    Columns keep first-seen order. Each row maps column name to cell text;
    a column missing from a row renders as a blank cell.
    """
    columns: Dict[str, Column] = field(default_factory=dict)
    column_order: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    def new_row(self) -> Dict[str, str]:
        for column in self.columns.values():
            column.occurrences = 0
        row: Dict[str, str] = {}
        self.rows.append(row)
        return row

    def place(self, key: str, text: str) -> str:
        """
        Put a cell into the current row.

        A key already used in the current row gets an occurrence counter
        appended (``key[1]``, ``key[2]``...).

        Returns:
            The column name the cell was stored under
        """
        if not self.rows:
            self.new_row()

        column = self.columns.get(key) or self._add_column(key)
        name = f"{key}[{column.occurrences}]" if column.occurrences else key
        column.occurrences += 1

        target = self.columns.get(name) or self._add_column(name)
        target.observe(text)
        self.rows[-1][name] = text
        return name

    @property
    def is_empty(self) -> bool:
        return not any(self.rows)

    def _add_column(self, name: str) -> Column:
        column = Column(name=name)
        self.columns[name] = column
        self.column_order.append(name)
        return column
