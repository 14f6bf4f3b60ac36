"""Ordered data sources for the dataset store."""

from stockboard.core.data.sources.base import DataSource
from stockboard.core.data.sources.custom import CustomDatasetSource
from stockboard.core.data.sources.mock import (
    MOCK_STOCKS,
    MockDataSource,
    generate_historical_data,
    generate_prediction_data,
)
from stockboard.core.data.sources.remote import RemoteCSVSource

__all__ = [
    "CustomDatasetSource",
    "DataSource",
    "MOCK_STOCKS",
    "MockDataSource",
    "RemoteCSVSource",
    "generate_historical_data",
    "generate_prediction_data",
]
