"""Fetch collaborators returning raw CSV text for a resource path."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

import httpx
from loguru import logger

from stockboard.core.exceptions import FetchError


class CSVFetcher(ABC):
    """Returns raw CSV text for a relative resource path."""

    name: str = "fetcher"

    @abstractmethod
    async def fetch_text(self, path: str) -> str:
        """Return the resource body.

        Raises:
            FetchError: the resource could not be read.
        """


class HttpCSVFetcher(CSVFetcher):
    """Fetches CSV resources relative to a base URL with httpx."""

    name = "http"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url cannot be empty")
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._transport = transport

    async def fetch_text(self, path: str) -> str:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(path.lstrip("/"))
            except httpx.HTTPError as exc:
                raise FetchError(f"Failed to load CSV file: {exc}", resource=path) from exc

        if not response.is_success:
            raise FetchError(
                f"Failed to load CSV file: {response.status_code}",
                resource=path,
                status_code=response.status_code,
            )
        logger.debug(f"Fetched {path} ({len(response.content)} bytes)")
        return response.text


class DirectoryCSVFetcher(CSVFetcher):
    """Reads CSV resources from a local directory."""

    name = "directory"

    def __init__(self, root: str | Path, *, encoding: str = "utf-8") -> None:
        self.root = Path(root)
        self.encoding = encoding

    async def fetch_text(self, path: str) -> str:
        target = self.root / path.lstrip("/")
        if not target.is_file():
            raise FetchError(f"Failed to load CSV file: {target} not found", resource=path, status_code=404)
        try:
            return await asyncio.to_thread(target.read_text, encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(f"Failed to load CSV file: {exc}", resource=path) from exc


__all__ = ["CSVFetcher", "DirectoryCSVFetcher", "HttpCSVFetcher"]
