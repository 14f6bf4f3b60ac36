"""Fundamentals loading and number formatting for quote cards."""

from __future__ import annotations

import re
from math import nan

from loguru import logger

from stockboard.core.data.fetch import CSVFetcher
from stockboard.core.data.ingestion import tokenize
from stockboard.core.exceptions import EmptyInputError, FetchError
from stockboard.core.models import StockQuote

POPULAR_STOCKS: tuple[str, ...] = ("AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "META", "NVDA", "JPM", "V", "WMT")

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def convert_to_number(value: str | None) -> float:
    """Lenient numeric conversion used for the fundamentals file.

    Empty cells are ``0``; otherwise the leading numeric prefix is used
    (``"12.5%"`` is ``12.5``) and anything without one is ``NaN``.
    """

    if not value:
        return 0.0
    text = value.lstrip()
    if text.startswith(("Infinity", "+Infinity")):
        return float("inf")
    if text.startswith("-Infinity"):
        return float("-inf")
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return nan
    return float(match.group(0))


def _quote_from_row(row: dict[str, str]) -> StockQuote:
    return StockQuote(
        symbol=row["symbol"],
        name=row.get("name", ""),
        price=convert_to_number(row.get("price")),
        change=convert_to_number(row.get("change")),
        change_percent=convert_to_number(row.get("changePercent")),
        market_cap=convert_to_number(row.get("marketCap")),
        volume=convert_to_number(row.get("volume")),
        pe=convert_to_number(row.get("pe")),
        eps=convert_to_number(row.get("eps")),
        dividend=convert_to_number(row.get("dividend")),
        dividend_yield=convert_to_number(row.get("dividendYield")),
        beta=convert_to_number(row.get("beta")),
    )


async def load_stock_quotes(
    fetcher: CSVFetcher,
    path: str = "stocks.csv",
    *,
    symbols: tuple[str, ...] = POPULAR_STOCKS,
) -> dict[str, StockQuote]:
    """Load quotes for ``symbols`` from the fundamentals CSV.

    A missing or empty file yields ``{}``.
    """

    try:
        text = await fetcher.fetch_text(path)
        tokenized = tokenize(text)
    except (FetchError, EmptyInputError) as error:
        logger.bind(error_code=error.error_code).error(f"Error loading stock data: {error.message}")
        return {}

    quotes: dict[str, StockQuote] = {}
    for row in tokenized.rows:
        if row.get("symbol") in symbols:
            quotes[row["symbol"]] = _quote_from_row(row)
    return quotes


def format_large_number(num: float) -> str:
    """Abbreviate with T/B/M suffixes, otherwise group thousands."""

    if num >= 1e12:
        return f"{num / 1e12:.2f}T"
    if num >= 1e9:
        return f"{num / 1e9:.2f}B"
    if num >= 1e6:
        return f"{num / 1e6:.2f}M"
    if float(num).is_integer():
        return f"{int(num):,}"
    return f"{num:,.3f}".rstrip("0").rstrip(".")


def format_percentage(value: float) -> str:
    formatted = f"{value:.2f}%"
    return f"+{formatted}" if value >= 0 else formatted


__all__ = [
    "POPULAR_STOCKS",
    "convert_to_number",
    "format_large_number",
    "format_percentage",
    "load_stock_quotes",
]
