"""Random-walk demo series for the built-in mock quotes.

The prediction series is cosmetic: realized closes jittered by noise plus a
trend extrapolated from the quote's daily change.
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from math import sqrt

from stockboard.core.data.sources.base import DataSource
from stockboard.core.models import HistoricalPricePoint, PredictionPoint, StockQuote

MOCK_STOCKS: dict[str, StockQuote] = {
    "AAPL": StockQuote("AAPL", "Apple Inc.", 187.45, 1.23, 0.66, 2.94e12, 59_328_000, 30.8, 6.08, 0.96, 0.51, 1.28),
    "MSFT": StockQuote("MSFT", "Microsoft Corporation", 418.32, -2.15, -0.51, 3.11e12, 21_472_000, 35.9, 11.65, 3.00, 0.72, 0.95),
    "GOOGL": StockQuote("GOOGL", "Alphabet Inc.", 172.92, 0.87, 0.51, 2.14e12, 19_876_000, 26.4, 6.55, 0, 0, 1.06),
    "AMZN": StockQuote("AMZN", "Amazon.com, Inc.", 186.21, -0.43, -0.23, 1.92e12, 35_621_000, 52.3, 3.56, 0, 0, 1.22),
    "TSLA": StockQuote("TSLA", "Tesla, Inc.", 177.58, 4.32, 2.49, 5.65e11, 108_532_000, 50.7, 3.50, 0, 0, 2.01),
}

_ACTUAL_WINDOW = 30


def generate_historical_data(
    symbol: str,
    days: int = 90,
    *,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[HistoricalPricePoint]:
    """Generate ``days + 1`` daily bars ending today; unknown symbols yield ``[]``."""

    quote = MOCK_STOCKS.get(symbol)
    if quote is None:
        return []
    rng = rng or random.Random()
    today = today or date.today()

    price = quote.price * 0.7
    volatility = quote.beta * 0.01
    points: list[HistoricalPricePoint] = []
    for offset in range(days, -1, -1):
        daily_change = (rng.random() - 0.5) * volatility * price
        open_ = price
        close = price + daily_change
        high = max(open_, close) * (1 + rng.random() * 0.02)
        low = min(open_, close) * (1 - rng.random() * 0.02)
        volume = float(int(quote.volume * (0.5 + rng.random())))
        points.append(
            HistoricalPricePoint(
                date=(today - timedelta(days=offset)).isoformat(),
                open=open_,
                high=high,
                low=low,
                close=close,
                volume=volume,
            )
        )
        price = close
    return points


def generate_prediction_data(
    symbol: str,
    days: int = 30,
    *,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[PredictionPoint]:
    """Generate 30 realized points followed by ``days`` forecast points."""

    rng = rng or random.Random()
    today = today or date.today()
    history = generate_historical_data(symbol, rng=rng, today=today)
    quote = MOCK_STOCKS.get(symbol)
    if not history or quote is None:
        return []

    predictions: list[PredictionPoint] = []
    for bar in history[-_ACTUAL_WINDOW:]:
        margin = quote.beta * 0.02 * bar.close
        predictions.append(
            PredictionPoint(
                date=bar.date,
                actual=bar.close,
                predicted=bar.close * (1 + (rng.random() * 0.04 - 0.02)),
                lower_bound=bar.close - margin,
                upper_bound=bar.close + margin,
            )
        )

    growth = quote.change_percent / 100
    predicted = history[-1].close
    for step in range(1, days + 1):
        predicted = predicted * (1 + growth + (rng.random() * 0.02 - 0.01))
        margin = quote.beta * 0.04 * predicted * sqrt(step / 10)
        predictions.append(
            PredictionPoint(
                date=(today + timedelta(days=step)).isoformat(),
                predicted=predicted,
                lower_bound=predicted - margin,
                upper_bound=predicted + margin,
            )
        )
    return predictions


class MockDataSource(DataSource):
    """Serves generated series for symbols in :data:`MOCK_STOCKS`."""

    name = "mock"

    def __init__(self, *, seed: int | None = None, history_days: int = 365, forecast_days: int = 30) -> None:
        self._rng = random.Random(seed)
        self.history_days = history_days
        self.forecast_days = forecast_days

    async def historical(self, symbol: str) -> list[HistoricalPricePoint] | None:
        return generate_historical_data(symbol, self.history_days, rng=self._rng) or None

    async def prediction(self, symbol: str) -> list[PredictionPoint] | None:
        return generate_prediction_data(symbol, self.forecast_days, rng=self._rng) or None
