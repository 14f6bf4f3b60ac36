"""Quote listing command."""

from __future__ import annotations

import asyncio

import typer

from stockboard.core.data import create_fetcher
from stockboard.core.data.sources import MOCK_STOCKS
from stockboard.core.exceptions import ErrorCode
from stockboard.core.models import StockQuote
from stockboard.core.services import format_large_number, format_percentage, load_stock_quotes

from .constants import FETCH_EXIT_CODE
from .utils import command_output, fail

QUOTE_COLUMNS = ["symbol", "name", "price", "change", "changePercent", "marketCap", "volume", "pe", "eps", "beta"]


def register(app: typer.Typer) -> None:
    app.command("quotes", help="List fundamentals for the popular symbols")(quotes_command)


def quotes_command(
    ctx: typer.Context,
    mock: bool = typer.Option(False, "--mock", help="Use the built-in demo quotes."),
) -> None:
    with command_output(ctx) as (formatter, stream, options):
        if mock:
            quotes = dict(MOCK_STOCKS)
        else:
            fetcher = create_fetcher(options.config.data)
            if fetcher is None:
                fail("No data source configured; pass --data-dir or --base-url.", ErrorCode.CONFIGURATION_ERROR.value)
            quotes = asyncio.run(load_stock_quotes(fetcher, options.config.data.quotes_path))
            if not quotes:
                fail("No stock data available.", ErrorCode.FETCH_ERROR.value, exit_code=FETCH_EXIT_CODE)

        formatter.render([_quote_row(quote) for quote in quotes.values()], stream=stream, columns=QUOTE_COLUMNS)


def _quote_row(quote: StockQuote) -> dict[str, object]:
    return {
        "symbol": quote.symbol,
        "name": quote.name,
        "price": quote.price,
        "change": quote.change,
        "changePercent": format_percentage(quote.change_percent),
        "marketCap": format_large_number(quote.market_cap),
        "volume": format_large_number(quote.volume),
        "pe": quote.pe,
        "eps": quote.eps,
        "beta": quote.beta,
    }
