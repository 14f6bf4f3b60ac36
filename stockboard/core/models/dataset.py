"""Normalized dataset models consumed by the presentation layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from stockboard.core.models.cells import RawRow


class DatasetFormat(str, Enum):
    """Result of classifying a parsed CSV dataset."""

    HISTORICAL = "historical"
    PREDICTION = "prediction"
    UNKNOWN = "unknown"


HISTORICAL_FIELDS: tuple[str, ...] = ("date", "open", "high", "low", "close", "volume")
PREDICTION_FIELDS: tuple[str, ...] = ("date", "predicted", "lowerBound", "upperBound")


@dataclass(slots=True, frozen=True)
class TokenizedCSV:
    """Header and raw string rows split out of CSV text."""

    headers: tuple[str, ...]
    rows: list[dict[str, str]]


@dataclass(slots=True, frozen=True)
class ParsedCSV:
    """Header and type-coerced rows."""

    headers: tuple[str, ...] = ()
    rows: list[RawRow] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.headers


@dataclass(slots=True, frozen=True)
class HistoricalPricePoint:
    """Daily OHLCV record."""

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class PredictionPoint:
    """Forecast record; ``actual`` is set for realized points only."""

    date: str
    predicted: float
    lower_bound: float
    upper_bound: float
    actual: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "actual": self.actual,
            "predicted": self.predicted,
            "lowerBound": self.lower_bound,
            "upperBound": self.upper_bound,
        }


@dataclass(slots=True, frozen=True)
class StockQuote:
    """Fundamentals snapshot for a single symbol."""

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    market_cap: float
    volume: float
    pe: float
    eps: float
    dividend: float
    dividend_yield: float
    beta: float


__all__ = [
    "DatasetFormat",
    "HISTORICAL_FIELDS",
    "HistoricalPricePoint",
    "PREDICTION_FIELDS",
    "ParsedCSV",
    "PredictionPoint",
    "StockQuote",
    "TokenizedCSV",
]
