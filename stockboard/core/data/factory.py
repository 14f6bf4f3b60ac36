"""Build fetchers and stores from configuration."""

from __future__ import annotations

from stockboard.core.config import DataConfig
from stockboard.core.data.fetch import CSVFetcher, DirectoryCSVFetcher, HttpCSVFetcher
from stockboard.core.data.sources import DataSource, MockDataSource, RemoteCSVSource
from stockboard.core.data.store import DatasetStore


def create_fetcher(config: DataConfig) -> CSVFetcher | None:
    """Return the fetcher for ``config``; a local ``data_dir`` wins over ``base_url``."""

    if config.data_dir:
        return DirectoryCSVFetcher(config.data_dir)
    if config.base_url:
        return HttpCSVFetcher(config.base_url, timeout=config.timeout)
    return None


def create_store(config: DataConfig | None = None, *, include_mock: bool = False) -> DatasetStore:
    """Build a store consulting custom data, then the configured default datasets, then mock data."""

    config = config or DataConfig()
    fallbacks: list[DataSource] = []
    fetcher = create_fetcher(config)
    if fetcher is not None:
        fallbacks.append(
            RemoteCSVSource(
                fetcher,
                historical_path=config.historical_path,
                prediction_path=config.prediction_path,
            )
        )
    if include_mock:
        fallbacks.append(MockDataSource())
    return DatasetStore(fallbacks)


__all__ = ["create_fetcher", "create_store"]
