"""Output formatters for CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from math import isnan
from typing import Callable, Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

EMPTY_MESSAGE = "No data available."


def format_cell(value: object) -> str:
    """Render one value for a table cell.

    Missing values print as ``-``; ``NaN`` is kept visible so malformed
    uploads can be spotted.
    """

    if value is None:
        return "-"
    if isinstance(value, float):
        if isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
        return f"{value:.2f}"
    return str(value)


def _json_value(value: object) -> object:
    if isinstance(value, float) and isnan(value):
        return None
    return value


def _resolve_columns(rows: Sequence[Mapping[str, object]], columns: Sequence[str] | None) -> list[str]:
    if columns:
        return list(columns)
    if rows:
        return list(rows[0].keys())
    return []


class OutputFormatter:
    """Base class for CLI output formatters."""

    name: str

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Rich table with numeric columns right-aligned."""

    name: str = "table"
    no_color: bool = False

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        resolved = _resolve_columns(rows, columns)

        table = Table(box=SIMPLE, show_lines=False)
        for column in resolved:
            numeric = bool(rows) and all(isinstance(row.get(column), (int, float)) for row in rows)
            table.add_column(
                column,
                header_style="" if self.no_color else "bold",
                justify="right" if numeric else "left",
            )
        for row in rows:
            table.add_row(*(format_cell(row.get(column)) for column in resolved))

        if resolved:
            console.print(table)
        if not rows:
            console.print(EMPTY_MESSAGE)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """One JSON object per row; ``NaN`` becomes ``null``."""

    name: str = "jsonl"

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        for row in rows:
            keys = columns or list(row.keys())
            record = {key: _json_value(row.get(key)) for key in keys}
            stream.write(json.dumps(record, ensure_ascii=False, default=str))
            stream.write("\n")
        stream.flush()


FORMATTERS: dict[str, Callable[[bool], OutputFormatter]] = {
    "table": lambda no_color: TableFormatter(no_color=no_color),
    "jsonl": lambda no_color: JSONLFormatter(),
}


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    factory = FORMATTERS.get(name.strip().lower())
    if factory is None:
        msg = f"Unsupported format '{name}'. Available formats: {', '.join(FORMATTERS)}."
        raise ValueError(msg)
    return factory(no_color)
