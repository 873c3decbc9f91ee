"""
Fixed-width text reports.

Used for detection explanations and assignee ranking tables, both printed by
the scripts and logged at DEBUG.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

ELLIPSIS = "..."


def truncate_display(text: str, max_len: int) -> str:
    """
    Shorten text to ``max_len`` characters, marking the cut with an ellipsis.

    Example:
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    if len(text) <= max_len:
        return text
    return text[: max(0, max_len - len(ELLIPSIS))] + ELLIPSIS


@dataclass(frozen=True)
class Column:
    """
    One fixed-width column.

    align takes format-spec alignment characters: '<', '>' or '^'.
    Floats are rendered with ``precision`` decimals when it is set.
    """

    name: str
    width: int
    align: str = "<"
    precision: Optional[int] = None

    def header(self) -> str:
        return format(self.name, f"{self.align}{self.width}")

    def cell(self, value: Any) -> str:
        if self.precision is not None and isinstance(value, float):
            value = format(value, f".{self.precision}f")
        return format(truncate_display(str(value), self.width), f"{self.align}{self.width}")


class TableFormatter:
    """
    Line-by-line report builder.

    Every add_* method returns the formatter so calls can be chained; render()
    joins the accumulated lines.
    """

    def __init__(self, columns: Sequence[Column] = (), total_width: int = 100):
        self.columns = tuple(columns)
        self.total_width = total_width
        self.lines: list[str] = []

    def _rule(self, char: str) -> str:
        return char * self.total_width

    def add_section_header(self, title: str) -> "TableFormatter":
        self.lines.extend([self._rule("="), title, self._rule("=")])
        return self

    def add_table_header(self) -> "TableFormatter":
        self.lines.append(" ".join(column.header() for column in self.columns).rstrip())
        self.lines.append(self._rule("-"))
        return self

    def add_row(self, values: Sequence[Any]) -> "TableFormatter":
        """
        Append one table row.

        Raises:
            ValueError: If the row does not have one value per column
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Row has {len(values)} values for {len(self.columns)} columns")
        cells = (column.cell(value) for column, value in zip(self.columns, values))
        self.lines.append(" ".join(cells).rstrip())
        return self

    def add_key_value(self, key: str, value: Any, indent: int = 2) -> "TableFormatter":
        self.lines.append(f"{' ' * indent}{key}: {value}")
        return self

    def add_blank_line(self) -> "TableFormatter":
        return self.add_text("")

    def add_text(self, text: str) -> "TableFormatter":
        self.lines.append(text)
        return self

    def render(self) -> str:
        return "\n".join(self.lines)
