"""Data source interface consulted by the dataset store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockboard.core.models import HistoricalPricePoint, PredictionPoint


class DataSource(ABC):
    """A provider of per-symbol series.

    Implementations return series in ascending date order, or ``None`` when they
    have nothing for the symbol so the next source is consulted.
    """

    name: str = "source"

    @abstractmethod
    async def historical(self, symbol: str) -> list[HistoricalPricePoint] | None:
        """Return the historical series for ``symbol`` or ``None``."""

    @abstractmethod
    async def prediction(self, symbol: str) -> list[PredictionPoint] | None:
        """Return the prediction series for ``symbol`` or ``None``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
