"""Chart-facing derivations over normalized series."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from math import isnan

import pandas as pd

from stockboard.core.models import HistoricalPricePoint, PredictionPoint

TIME_RANGE_DAYS: dict[str, int] = {
    "1M": 30,
    "3M": 90,
    "6M": 180,
    "1Y": 365,
    "All": 365 * 2,
}


@dataclass(slots=True, frozen=True)
class MovingAveragePoint:
    date: str
    value: float | None


@dataclass(slots=True, frozen=True)
class PredictionSummary:
    """Headline numbers shown above the forecast chart."""

    divider_date: str | None
    last_actual: float
    last_predicted: float
    change: float
    percent_change: float


def days_for_range(time_range: str) -> int:
    try:
        return TIME_RANGE_DAYS[time_range]
    except KeyError as exc:
        raise ValueError(f"unknown time range {time_range!r}; expected one of {', '.join(TIME_RANGE_DAYS)}") from exc


def moving_average(points: Sequence[HistoricalPricePoint], period: int) -> list[MovingAveragePoint]:
    """Simple moving average of closes.

    The first ``period - 1`` points have no value; a window containing ``NaN``
    averages to ``NaN``.
    """

    if period <= 0:
        raise ValueError("period must be positive")
    if not points:
        return []
    closes = pd.Series([point.close for point in points], dtype="float64")
    averages = closes.rolling(window=period, min_periods=period).mean()
    result: list[MovingAveragePoint] = []
    for index, point in enumerate(points):
        value = None if index < period - 1 else float(averages.iloc[index])
        result.append(MovingAveragePoint(date=point.date, value=value))
    return result


def price_domain(points: Sequence[HistoricalPricePoint]) -> tuple[float, float]:
    """Y-axis bounds padded 5% around the close range; ``(0, 0)`` when empty."""

    if not points:
        return (0.0, 0.0)
    closes = pd.Series([point.close for point in points], dtype="float64")
    if closes.isna().any():
        return (float("nan"), float("nan"))
    return (float(closes.min()) * 0.95, float(closes.max()) * 1.05)


def prediction_summary(points: Sequence[PredictionPoint]) -> PredictionSummary:
    """Compare the last realized price with the final forecast.

    The first point without ``actual`` marks where the forecast starts. When
    every point is realized there is no divider and the last actual is taken
    from the end of the series.
    """

    boundary = next((index for index, point in enumerate(points) if point.actual is None), None)
    divider_date = points[boundary].date if boundary is not None else None

    last_actual_index = (boundary if boundary is not None else len(points)) - 1
    last_actual = 0.0
    if last_actual_index >= 0:
        actual = points[last_actual_index].actual
        if actual is not None and not isnan(actual):
            last_actual = actual

    last_predicted = points[-1].predicted if points else 0.0
    if isnan(last_predicted):
        last_predicted = 0.0
    change = last_predicted - last_actual
    percent_change = (change / last_actual) * 100 if last_actual else 0.0
    return PredictionSummary(
        divider_date=divider_date,
        last_actual=last_actual,
        last_predicted=last_predicted,
        change=change,
        percent_change=percent_change,
    )


__all__ = [
    "MovingAveragePoint",
    "PredictionSummary",
    "TIME_RANGE_DAYS",
    "days_for_range",
    "moving_average",
    "price_domain",
    "prediction_summary",
]
