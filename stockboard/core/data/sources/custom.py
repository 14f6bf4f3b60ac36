"""In-memory source holding user uploaded series."""

from __future__ import annotations

from collections.abc import Sequence
from threading import Lock

from stockboard.core.data.sources.base import DataSource
from stockboard.core.models import HistoricalPricePoint, PredictionPoint


class CustomDatasetSource(DataSource):
    """Thread-safe map from symbol to the uploaded series of each kind.

    There is no removal: once a series is stored for a symbol it stays until the
    source is discarded.
    """

    name = "custom"

    def __init__(self) -> None:
        self._historical: dict[str, tuple[HistoricalPricePoint, ...]] = {}
        self._prediction: dict[str, tuple[PredictionPoint, ...]] = {}
        self._lock = Lock()

    def put_historical(self, symbol: str, points: Sequence[HistoricalPricePoint]) -> None:
        with self._lock:
            self._historical[symbol] = tuple(points)

    def put_prediction(self, symbol: str, points: Sequence[PredictionPoint]) -> None:
        with self._lock:
            self._prediction[symbol] = tuple(points)

    def has_historical(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._historical

    def has_prediction(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._prediction

    async def historical(self, symbol: str) -> list[HistoricalPricePoint] | None:
        with self._lock:
            series = self._historical.get(symbol)
        return None if series is None else list(series)

    async def prediction(self, symbol: str) -> list[PredictionPoint] | None:
        with self._lock:
            series = self._prediction.get(symbol)
        return None if series is None else list(series)
