"""Per-symbol dataset store backed by an ordered list of data sources."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from loguru import logger

from stockboard.core.data.ingestion import (
    missing_fields,
    to_historical_points,
    to_prediction_points,
)
from stockboard.core.data.sources import CustomDatasetSource, DataSource
from stockboard.core.exceptions import ShapeMismatchError
from stockboard.core.models import DatasetFormat, HistoricalPricePoint, PredictionPoint

DEFAULT_HISTORY_LIMIT = 90


class DatasetStore:
    """Resolves historical and prediction series for a symbol.

    The custom source is always consulted first, followed by ``fallbacks`` in
    order; the first source that has data wins and an empty list is returned
    when none do. Setting custom data for a symbol is one-way: it shadows every
    fallback for that symbol and kind until the store is discarded.
    """

    def __init__(
        self,
        fallbacks: Sequence[DataSource] = (),
        *,
        custom: CustomDatasetSource | None = None,
    ) -> None:
        self.custom = custom or CustomDatasetSource()
        self._sources: tuple[DataSource, ...] = (self.custom, *fallbacks)

    @property
    def sources(self) -> tuple[DataSource, ...]:
        return self._sources

    def set_historical(self, symbol: str, rows: Sequence[Mapping[str, object]]) -> list[HistoricalPricePoint]:
        """Store ``rows`` as the custom historical series for ``symbol``.

        Raises:
            ShapeMismatchError: the first row lacks a historical column; the
                store is left unchanged.
        """

        _require_shape(rows, DatasetFormat.HISTORICAL)
        points = to_historical_points(rows)
        self.custom.put_historical(symbol, points)
        logger.bind(symbol=symbol).info(f"Custom historical dataset set with {len(points)} points")
        return points

    def set_prediction(self, symbol: str, rows: Sequence[Mapping[str, object]]) -> list[PredictionPoint]:
        """Store ``rows`` as the custom prediction series for ``symbol``.

        Raises:
            ShapeMismatchError: the first row lacks a prediction column; the
                store is left unchanged.
        """

        _require_shape(rows, DatasetFormat.PREDICTION)
        points = to_prediction_points(rows)
        self.custom.put_prediction(symbol, points)
        logger.bind(symbol=symbol).info(f"Custom prediction dataset set with {len(points)} points")
        return points

    def has_custom_historical(self, symbol: str) -> bool:
        return self.custom.has_historical(symbol)

    def has_custom_prediction(self, symbol: str) -> bool:
        return self.custom.has_prediction(symbol)

    async def get_historical(self, symbol: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[HistoricalPricePoint]:
        """Return the first ``limit`` points of the ascending historical series.

        The slice is taken from the start of the series (earliest dates), not
        the most recent ``limit`` days.
        """

        if limit < 0:
            raise ValueError("limit must be non-negative")
        for source in self._sources:
            series = await source.historical(symbol)
            if series is not None:
                logger.bind(symbol=symbol).debug(f"Historical series served by {source.name}")
                return series[:limit]
        logger.bind(symbol=symbol).info("No historical data available")
        return []

    async def get_prediction(self, symbol: str) -> list[PredictionPoint]:
        """Return the ascending prediction series, or ``[]`` when no source has one."""

        for source in self._sources:
            series = await source.prediction(symbol)
            if series is not None:
                logger.bind(symbol=symbol).debug(f"Prediction series served by {source.name}")
                return series
        logger.bind(symbol=symbol).info("No prediction data available")
        return []


def _require_shape(rows: Sequence[Mapping[str, object]], kind: DatasetFormat) -> None:
    missing = missing_fields(rows, kind)
    if missing:
        raise ShapeMismatchError(
            f"Invalid {kind.value} data format",
            kind=kind.value,
            missing_fields=missing,
            details={"rows": len(rows)},
        )


__all__ = ["DEFAULT_HISTORY_LIMIT", "DatasetStore"]
