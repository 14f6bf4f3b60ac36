from __future__ import annotations

import random
from datetime import date
from pathlib import Path

import pytest

from stockboard.core.config import DataConfig
from stockboard.core.data import DatasetStore, DirectoryCSVFetcher, create_store
from stockboard.core.data.fetch import CSVFetcher
from stockboard.core.data.sources import (
    MockDataSource,
    RemoteCSVSource,
    generate_historical_data,
    generate_prediction_data,
)
from stockboard.core.exceptions import FetchError
from stockboard.core.monitoring import MetricsCollector


class FailingFetcher(CSVFetcher):
    name = "failing"

    async def fetch_text(self, path: str) -> str:
        raise FetchError("Failed to load CSV file: 500", resource=path, status_code=500)


def _write(root: Path, relative: str, text: str) -> None:
    target = root / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


@pytest.mark.asyncio
async def test_remote_source_reads_and_sorts_default_dataset(tmp_path: Path, historical_csv: str, metrics: MetricsCollector) -> None:
    _write(tmp_path, "historical/AAPL.csv", historical_csv)
    source = RemoteCSVSource(DirectoryCSVFetcher(tmp_path))

    series = await source.historical("AAPL")

    assert series is not None
    assert [point.date for point in series] == ["2025-01-01", "2025-01-02"]
    assert metrics.registry.get_sample_value("stockboard_fetch_requests_total", {"source": "directory"}) == 1.0


@pytest.mark.asyncio
async def test_remote_source_fetch_failure_degrades_to_empty_store(metrics: MetricsCollector) -> None:
    store = DatasetStore([RemoteCSVSource(FailingFetcher())])

    assert await store.get_historical("AAPL") == []
    assert await store.get_prediction("AAPL") == []
    assert metrics.registry.get_sample_value("stockboard_fetch_failures_total", {"source": "failing"}) == 2.0


@pytest.mark.asyncio
async def test_remote_source_ignores_wrong_shape(tmp_path: Path, metrics: MetricsCollector) -> None:
    _write(tmp_path, "predictions/AAPL.csv", "date,close\n2025-01-01,1\n")
    source = RemoteCSVSource(DirectoryCSVFetcher(tmp_path))

    assert await source.prediction("AAPL") is None


@pytest.mark.asyncio
async def test_remote_source_uses_configured_paths(tmp_path: Path, prediction_csv: str, metrics: MetricsCollector) -> None:
    _write(tmp_path, "forecasts/aapl-latest.csv", prediction_csv)
    source = RemoteCSVSource(DirectoryCSVFetcher(tmp_path), prediction_path="forecasts/{symbol}-latest.csv")

    series = await source.prediction("aapl")

    assert series is not None
    assert len(series) == 2


def test_generated_history_is_a_daily_walk_ending_today() -> None:
    today = date(2025, 4, 11)

    points = generate_historical_data("AAPL", 10, rng=random.Random(7), today=today)

    assert len(points) == 11
    assert points[0].date == "2025-04-01"
    assert points[-1].date == "2025-04-11"
    assert all(point.low <= min(point.open, point.close) for point in points)
    assert all(point.high >= max(point.open, point.close) for point in points)


def test_generated_history_unknown_symbol_is_empty() -> None:
    assert generate_historical_data("ZZZZ") == []
    assert generate_prediction_data("ZZZZ") == []


def test_generated_predictions_have_realized_then_forecast_points() -> None:
    today = date(2025, 4, 11)

    points = generate_prediction_data("TSLA", 5, rng=random.Random(1), today=today)

    assert len(points) == 35
    assert all(point.actual is not None for point in points[:30])
    assert all(point.actual is None for point in points[30:])
    assert points[30].date == "2025-04-12"
    assert all(point.lower_bound < point.upper_bound for point in points)


@pytest.mark.asyncio
async def test_mock_source_only_serves_known_symbols() -> None:
    source = MockDataSource(seed=3, history_days=20)

    history = await source.historical("MSFT")

    assert history is not None and len(history) == 21
    assert await source.historical("ZZZZ") is None


@pytest.mark.asyncio
async def test_create_store_orders_remote_before_mock(tmp_path: Path, historical_csv: str, metrics: MetricsCollector) -> None:
    _write(tmp_path, "historical/AAPL.csv", historical_csv)
    store = create_store(DataConfig(data_dir=str(tmp_path)), include_mock=True)

    assert [source.name for source in store.sources] == ["custom", "remote", "mock"]
    assert len(await store.get_historical("AAPL")) == 2
    assert len(await store.get_historical("MSFT", 500)) == 366


def test_create_store_without_configured_data_has_only_custom_source() -> None:
    store = create_store()

    assert [source.name for source in store.sources] == ["custom"]
