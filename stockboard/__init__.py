"""stockboard - CSV dataset ingestion for a stock dashboard.

Parses uploaded or fetched CSV text into typed price and prediction series and
serves them per symbol from an in-memory store.
"""

from stockboard.core.data import DatasetStore, create_store
from stockboard.core.data.ingestion import classify, coerce, parse_csv, tokenize
from stockboard.core.exceptions import EmptyInputError, FetchError, ShapeMismatchError, StockboardError
from stockboard.core.models import (
    DatasetFormat,
    HistoricalPricePoint,
    Number,
    PredictionPoint,
    Text,
)
from stockboard.core.services import DatasetUploader, UploadMode, UploadResult, UploadStatus

__version__ = "0.1.0"

__all__ = [
    "DatasetFormat",
    "DatasetStore",
    "DatasetUploader",
    "EmptyInputError",
    "FetchError",
    "HistoricalPricePoint",
    "Number",
    "PredictionPoint",
    "ShapeMismatchError",
    "StockboardError",
    "Text",
    "UploadMode",
    "UploadResult",
    "UploadStatus",
    "classify",
    "coerce",
    "create_store",
    "parse_csv",
    "tokenize",
]
