"""Default datasets read through a fetch collaborator."""

from __future__ import annotations

from time import perf_counter

from loguru import logger

from stockboard.core.data.fetch import CSVFetcher
from stockboard.core.data.ingestion import (
    has_historical_shape,
    has_prediction_shape,
    parse_csv,
    to_historical_points,
    to_prediction_points,
)
from stockboard.core.data.sources.base import DataSource
from stockboard.core.exceptions import FetchError
from stockboard.core.models import HistoricalPricePoint, ParsedCSV, PredictionPoint
from stockboard.core.monitoring import MetricsCollector, get_metrics_collector


class RemoteCSVSource(DataSource):
    """Loads ``historical/{symbol}.csv`` and ``predictions/{symbol}.csv`` style resources.

    Fetch failures are logged and reported as "no data".
    """

    name = "remote"

    def __init__(
        self,
        fetcher: CSVFetcher,
        *,
        historical_path: str = "historical/{symbol}.csv",
        prediction_path: str = "predictions/{symbol}.csv",
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.historical_path = historical_path
        self.prediction_path = prediction_path
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    async def _load(self, path: str, symbol: str) -> ParsedCSV | None:
        start = perf_counter()
        try:
            text = await self.fetcher.fetch_text(path)
        except FetchError as error:
            self.metrics.observe_fetch(self.fetcher.name, perf_counter() - start, success=False)
            logger.bind(symbol=symbol, error_code=error.error_code, status_code=error.status_code).error(
                f"Error loading {path}: {error.message}"
            )
            return None
        self.metrics.observe_fetch(self.fetcher.name, perf_counter() - start)
        return parse_csv(text, source=path)

    async def historical(self, symbol: str) -> list[HistoricalPricePoint] | None:
        path = self.historical_path.format(symbol=symbol)
        parsed = await self._load(path, symbol)
        if parsed is None:
            return None
        if not has_historical_shape(parsed.rows):
            logger.bind(symbol=symbol).warning(f"{path} does not contain historical price columns")
            return None
        return to_historical_points(parsed.rows)

    async def prediction(self, symbol: str) -> list[PredictionPoint] | None:
        path = self.prediction_path.format(symbol=symbol)
        parsed = await self._load(path, symbol)
        if parsed is None:
            return None
        if not has_prediction_shape(parsed.rows):
            logger.bind(symbol=symbol).warning(f"{path} does not contain prediction columns")
            return None
        return to_prediction_points(parsed.rows)
