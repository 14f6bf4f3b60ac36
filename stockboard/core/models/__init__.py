"""Data models."""

from stockboard.core.models.cells import Cell, Number, RawRow, Text, cell_to_python
from stockboard.core.models.dataset import (
    HISTORICAL_FIELDS,
    PREDICTION_FIELDS,
    DatasetFormat,
    HistoricalPricePoint,
    ParsedCSV,
    PredictionPoint,
    StockQuote,
    TokenizedCSV,
)

__all__ = [
    "Cell",
    "DatasetFormat",
    "HISTORICAL_FIELDS",
    "HistoricalPricePoint",
    "Number",
    "PREDICTION_FIELDS",
    "ParsedCSV",
    "PredictionPoint",
    "RawRow",
    "StockQuote",
    "Text",
    "TokenizedCSV",
    "cell_to_python",
]
