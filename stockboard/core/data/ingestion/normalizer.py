"""Turn coerced CSV rows into typed, date-ordered series."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from math import nan
from typing import TypeVar

from stockboard.core.data.ingestion.coercion import coerce
from stockboard.core.models import Cell, HistoricalPricePoint, Number, PredictionPoint, Text

_FALLBACK_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%d %b %Y", "%b %d, %Y")

_PointT = TypeVar("_PointT", HistoricalPricePoint, PredictionPoint)


def _as_cell(value: object) -> Cell:
    if isinstance(value, (Text, Number)):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Number(float(value))
    return coerce("" if value is None else str(value))


def to_float(value: object) -> float:
    """Numeric value of a cell; anything non-numeric becomes ``NaN``."""

    cell = _as_cell(value)
    if isinstance(cell, Number):
        return cell.value
    return nan


def to_text(value: object) -> str:
    return str(_as_cell(value))


def parse_calendar_date(value: str) -> datetime | None:
    """Parse ``value`` as a calendar date, returning ``None`` when it is not one."""

    text = value.strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in _FALLBACK_DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        else:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def _date_sort_key(point: HistoricalPricePoint | PredictionPoint) -> tuple[bool, datetime]:
    parsed = parse_calendar_date(point.date)
    # unparseable dates go last, keeping their relative order
    return (parsed is None, parsed or datetime.min)


def sort_by_date(points: Iterable[_PointT]) -> list[_PointT]:
    """Stable ascending sort by calendar date."""

    return sorted(points, key=_date_sort_key)


def to_historical_points(rows: Sequence[Mapping[str, object]]) -> list[HistoricalPricePoint]:
    """Build ascending historical points; non-numeric prices become ``NaN``."""

    points = [
        HistoricalPricePoint(
            date=to_text(row.get("date")),
            open=to_float(row.get("open")),
            high=to_float(row.get("high")),
            low=to_float(row.get("low")),
            close=to_float(row.get("close")),
            volume=to_float(row.get("volume")),
        )
        for row in rows
    ]
    return sort_by_date(points)


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    cell = _as_cell(value)
    if isinstance(cell, Text) and cell.value == "":
        return None
    return to_float(cell)


def to_prediction_points(rows: Sequence[Mapping[str, object]]) -> list[PredictionPoint]:
    """Build ascending prediction points; ``actual`` is ``None`` when absent or blank."""

    points = [
        PredictionPoint(
            date=to_text(row.get("date")),
            actual=_optional_float(row.get("actual")),
            predicted=to_float(row.get("predicted")),
            lower_bound=to_float(row.get("lowerBound")),
            upper_bound=to_float(row.get("upperBound")),
        )
        for row in rows
    ]
    return sort_by_date(points)


__all__ = [
    "parse_calendar_date",
    "sort_by_date",
    "to_float",
    "to_historical_points",
    "to_prediction_points",
    "to_text",
]
