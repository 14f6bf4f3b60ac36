"""Dataset command implementations for the stockboard CLI."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from loguru import logger

from stockboard.core.config import DataConfig
from stockboard.core.data import DatasetStore, create_store
from stockboard.core.data.ingestion import classify, parse_csv
from stockboard.core.exceptions import ErrorCode, StockboardError
from stockboard.core.models import cell_to_python
from stockboard.core.services import (
    DatasetUploader,
    UploadMode,
    days_for_range,
    moving_average,
)

from .constants import SYSTEM_EXIT_CODE
from .utils import command_output, fail

dataset_app = typer.Typer(help="Inspect and display datasets.")

HISTORICAL_COLUMNS = ["date", "open", "high", "low", "close", "volume"]
PREDICTION_COLUMNS = ["date", "actual", "predicted", "lowerBound", "upperBound"]
MOVING_AVERAGE_PERIODS = (20, 50)
KINDS = ("historical", "prediction")


def register(app: typer.Typer) -> None:
    """Register the dataset command group on the provided application."""

    app.add_typer(dataset_app, name="dataset", help="Parse, classify and show price datasets")


def get_store(config: DataConfig, *, include_mock: bool) -> DatasetStore:
    """Factory hook for obtaining a :class:`DatasetStore`."""

    return create_store(config, include_mock=include_mock)


@dataset_app.command("inspect")
def inspect_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="CSV file to inspect."),
    show_rows: bool = typer.Option(False, "--rows", help="Print parsed rows instead of a summary."),
) -> None:
    """Parse a CSV file and report its detected format."""

    with command_output(ctx) as (formatter, stream, _):
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            fail(f"Unable to read '{file}': {exc}", ErrorCode.FILE_READ_ERROR.value, exc=exc)

        parsed = parse_csv(text, source=str(file))
        if show_rows:
            rows = [{key: cell_to_python(cell) for key, cell in row.items()} for row in parsed.rows]
            formatter.render(rows, stream=stream, columns=list(dict.fromkeys(parsed.headers)))
            return

        summary = {
            "file": str(file),
            "format": classify(parsed.rows).value,
            "rows": len(parsed.rows),
            "columns": len(parsed.headers),
            "headers": ",".join(parsed.headers),
        }
        formatter.render([summary], stream=stream)


@dataset_app.command("show")
def show_command(
    ctx: typer.Context,
    symbol: str = typer.Argument(..., help="Ticker symbol, e.g. AAPL."),
    kind: str = typer.Option("historical", "--kind", help="Series to show (historical or prediction)."),
    historical_file: Path | None = typer.Option(None, "--historical-file", help="Upload a custom historical CSV first."),
    prediction_file: Path | None = typer.Option(None, "--prediction-file", help="Upload a custom prediction CSV first."),
    days: int | None = typer.Option(None, "--days", min=0, help="Number of historical points to return."),
    time_range: str | None = typer.Option(None, "--range", help="Time range (1M, 3M, 6M, 1Y, All)."),
    mock: bool = typer.Option(False, "--mock", help="Fall back to generated demo data."),
    with_ma: bool = typer.Option(False, "--with-ma", help="Add 20 and 50 point moving averages."),
) -> None:
    """Show the active historical or prediction series for a symbol."""

    with command_output(ctx) as (formatter, stream, options):
        normalized_kind = kind.strip().lower()
        if normalized_kind not in KINDS:
            fail(f"Unsupported kind '{kind}'. Available kinds: {', '.join(KINDS)}.", "INVALID_KIND")

        try:
            limit = _resolve_limit(days, time_range, options.config.data.default_days)
        except ValueError as exc:
            fail(str(exc), "INVALID_RANGE", exc=exc)

        store = get_store(options.config.data, include_mock=mock)
        uploads = [(historical_file, UploadMode.HISTORICAL), (prediction_file, UploadMode.PREDICTION)]
        try:
            rows, columns = asyncio.run(_collect(store, symbol, normalized_kind, limit, uploads, with_ma))
        except StockboardError as exc:
            fail(exc.message, exc.error_code, exit_code=SYSTEM_EXIT_CODE, details=exc.details, exc=exc)
        formatter.render(rows, stream=stream, columns=columns)


def _resolve_limit(days: int | None, time_range: str | None, default_days: int) -> int:
    if days is not None:
        return days
    if time_range is not None:
        return days_for_range(time_range)
    return default_days


async def _upload_all(store: DatasetStore, symbol: str, uploads: list[tuple[Path | None, UploadMode]]) -> None:
    uploader = DatasetUploader(store)
    for path, mode in uploads:
        if path is None:
            continue
        result = await uploader.upload_file(symbol, path, mode)
        if not result.applied:
            fail(
                result.title,
                result.error_code or "UPLOAD_FAILED",
                details={"description": result.description, "file": str(path)},
            )
        logger.bind(symbol=symbol).info(f"{result.title}: {result.description}")


async def _collect(
    store: DatasetStore,
    symbol: str,
    kind: str,
    limit: int,
    uploads: list[tuple[Path | None, UploadMode]],
    with_ma: bool,
) -> tuple[list[dict[str, object]], list[str]]:
    await _upload_all(store, symbol, uploads)

    if kind == "prediction":
        predictions = await store.get_prediction(symbol)
        return [point.to_dict() for point in predictions], list(PREDICTION_COLUMNS)

    history = await store.get_historical(symbol, limit)
    rows = [point.to_dict() for point in history]
    columns = list(HISTORICAL_COLUMNS)
    if with_ma:
        for period in MOVING_AVERAGE_PERIODS:
            column = f"ma{period}"
            for row, average in zip(rows, moving_average(history, period), strict=True):
                row[column] = average.value
            columns.append(column)
    return rows, columns
