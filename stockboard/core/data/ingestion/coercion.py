"""Per-cell type coercion."""

from __future__ import annotations

from collections.abc import Mapping
from math import isfinite

from stockboard.core.models import Cell, Number, RawRow, Text


def coerce(cell: str) -> Cell:
    """Return :class:`Number` when ``cell`` parses as a finite number, else :class:`Text`."""

    value = cell.strip()
    if value == "":
        return Text("")
    # float() also accepts digit-group underscores, which are not numeric CSV cells
    if "_" in value:
        return Text(value)
    try:
        number = float(value)
    except ValueError:
        return Text(value)
    if not isfinite(number):
        return Text(value)
    return Number(number, text=value)


def coerce_row(row: Mapping[str, str]) -> RawRow:
    return {key: coerce(value) for key, value in row.items()}


__all__ = ["coerce", "coerce_row"]
