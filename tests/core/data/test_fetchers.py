from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from stockboard.core.data import DirectoryCSVFetcher, HttpCSVFetcher
from stockboard.core.exceptions import FetchError


def _transport(status: int, body: str = "") -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text=body, request=request)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_http_fetcher_returns_body_for_success() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text="date,close\n2025-01-01,1\n")

    fetcher = HttpCSVFetcher("https://data.example.com/data", transport=httpx.MockTransport(handler))

    text = await fetcher.fetch_text("/historical/AAPL.csv")

    assert text.startswith("date,close")
    assert seen == ["https://data.example.com/data/historical/AAPL.csv"]


@pytest.mark.asyncio
async def test_http_fetcher_raises_fetch_error_on_status() -> None:
    fetcher = HttpCSVFetcher("https://data.example.com", transport=_transport(404))

    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch_text("historical/NOPE.csv")

    assert exc_info.value.status_code == 404
    assert exc_info.value.details["resource"] == "historical/NOPE.csv"
    assert "404" in exc_info.value.message


@pytest.mark.asyncio
async def test_http_fetcher_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = HttpCSVFetcher("https://data.example.com", transport=httpx.MockTransport(handler))

    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch_text("stocks.csv")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_http_fetcher_requires_base_url() -> None:
    with pytest.raises(ValueError):
        HttpCSVFetcher("")


@pytest.mark.asyncio
async def test_directory_fetcher_reads_relative_paths(tmp_path: Path) -> None:
    (tmp_path / "historical").mkdir()
    (tmp_path / "historical" / "AAPL.csv").write_text("date,close\n", encoding="utf-8")
    fetcher = DirectoryCSVFetcher(tmp_path)

    assert await fetcher.fetch_text("/historical/AAPL.csv") == "date,close\n"


@pytest.mark.asyncio
async def test_directory_fetcher_missing_file(tmp_path: Path) -> None:
    fetcher = DirectoryCSVFetcher(tmp_path)

    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch_text("historical/AAPL.csv")

    assert exc_info.value.status_code == 404
