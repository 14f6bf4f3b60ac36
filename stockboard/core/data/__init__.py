"""Dataset ingestion, sources and the per-symbol store."""

from stockboard.core.data.factory import create_fetcher, create_store
from stockboard.core.data.fetch import CSVFetcher, DirectoryCSVFetcher, HttpCSVFetcher
from stockboard.core.data.store import DEFAULT_HISTORY_LIMIT, DatasetStore

__all__ = [
    "CSVFetcher",
    "DEFAULT_HISTORY_LIMIT",
    "DatasetStore",
    "DirectoryCSVFetcher",
    "HttpCSVFetcher",
    "create_fetcher",
    "create_store",
]
