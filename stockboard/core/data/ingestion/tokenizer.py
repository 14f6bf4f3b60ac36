"""Comma-separated text tokenizer and the CSV parse boundary.

Cells are split on a literal comma. Quoted fields and escaped commas are not
supported, and duplicate header names collide with the last column winning.
"""

from __future__ import annotations

from loguru import logger

from stockboard.core.data.ingestion.coercion import coerce_row
from stockboard.core.exceptions import EmptyInputError
from stockboard.core.models import ParsedCSV, TokenizedCSV

_DELIMITER = ","


def _split_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip() != ""]


def tokenize(text: str) -> TokenizedCSV:
    """Split ``text`` into a header and one string row per remaining line.

    Raises:
        EmptyInputError: no non-empty lines remain.
    """

    lines = _split_lines(text)
    if not lines:
        raise EmptyInputError()

    headers = tuple(cell.strip() for cell in lines[0].split(_DELIMITER))

    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        values = line.split(_DELIMITER)
        row: dict[str, str] = {}
        for index, header in enumerate(headers):
            row[header] = values[index].strip() if index < len(values) else ""
        rows.append(row)

    return TokenizedCSV(headers=headers, rows=rows)


def parse_csv(text: str, *, source: str | None = None) -> ParsedCSV:
    """Tokenize and coerce ``text``; empty input yields an empty dataset."""

    try:
        tokenized = tokenize(text)
    except EmptyInputError as error:
        logger.bind(error_code=error.error_code, source=source).warning("CSV input has no parsable lines")
        return ParsedCSV()

    return ParsedCSV(
        headers=tokenized.headers,
        rows=[coerce_row(row) for row in tokenized.rows],
    )


__all__ = ["parse_csv", "tokenize"]
