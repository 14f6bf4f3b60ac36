"""Pytest configuration for the stockboard test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from prometheus_client import CollectorRegistry

from stockboard.core.monitoring import MetricsCollector, configure_metrics_collector

HISTORICAL_CSV = """date,open,high,low,close,volume
2025-01-02,100,105,99,104,1000000
2025-01-01,98,101,97,100,900000
"""

PREDICTION_CSV = """date,predicted,lowerBound,upperBound,actual
2025-04-11,187.10,185.00,189.20,187.45
2025-04-12,188.76,186.89,190.63,
"""


@pytest.fixture
def historical_csv() -> str:
    return HISTORICAL_CSV


@pytest.fixture
def prediction_csv() -> str:
    return PREDICTION_CSV


@pytest.fixture
def metrics() -> Iterator[MetricsCollector]:
    """Install an isolated metrics collector for the duration of a test."""

    collector = MetricsCollector(registry=CollectorRegistry())
    configure_metrics_collector(collector)
    yield collector
    configure_metrics_collector(None)
