"""Tagged cell values produced by CSV type coercion."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class Text:
    """A cell that did not parse as a finite number."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class Number:
    """A cell holding a finite number.

    ``text`` keeps the trimmed source cell so string columns such as dates
    round-trip unchanged; it does not take part in equality.
    """

    value: float
    text: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.text is not None:
            return self.text
        if self.value.is_integer():
            return str(int(self.value))
        return str(self.value)


Cell = Text | Number

RawRow = dict[str, Cell]


def cell_to_python(cell: Cell) -> str | float:
    """Unwrap a cell for serialisation."""

    return cell.value


__all__ = ["Cell", "Number", "RawRow", "Text", "cell_to_python"]
