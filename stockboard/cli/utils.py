"""Helpers shared across CLI commands."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Mapping, NoReturn, TextIO

import typer

from stockboard.core.config import StockboardConfig

from .constants import VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter


@dataclass(slots=True)
class CLIOptions:
    """Global options stored on the Typer context by the app callback."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False
    config: StockboardConfig = field(default_factory=StockboardConfig)


def get_cli_options(ctx: typer.Context) -> CLIOptions:
    ctx.ensure_object(dict)
    data = ctx.obj or {}
    return CLIOptions(
        format=str(data.get("format", "table")),
        output_path=data.get("output_path"),
        no_color=bool(data.get("no_color", False)),
        config=data.get("config") or StockboardConfig(),
    )


@contextmanager
def command_output(ctx: typer.Context) -> Iterator[tuple[OutputFormatter, TextIO, CLIOptions]]:
    """Yield the formatter, destination stream and options for a command.

    ``--output`` files are opened for writing and closed when the block exits,
    including when the command aborts with :class:`typer.Exit`.
    """

    options = get_cli_options(ctx)
    try:
        formatter = create_formatter(options.format, no_color=options.no_color)
    except ValueError as exc:
        fail(str(exc), "INVALID_FORMAT", exc=exc)

    if options.output_path is None:
        yield formatter, sys.stdout, options
        return

    try:
        stream = open(options.output_path, "w", encoding="utf-8")
    except OSError as exc:
        fail(f"Unable to open '{options.output_path}': {exc}", "OUTPUT_WRITE_ERROR", exc=exc)
    with stream:
        yield formatter, stream, options


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a JSON error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = dict(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def fail(
    message: str,
    code: str,
    *,
    exit_code: int = VALIDATION_EXIT_CODE,
    details: Mapping[str, object] | None = None,
    exc: BaseException | None = None,
) -> NoReturn:
    """Emit an error payload and abort the command with ``exit_code``."""

    emit_error(message, code, details=details)
    raise typer.Exit(code=exit_code) from exc


__all__ = ["CLIOptions", "command_output", "emit_error", "fail", "get_cli_options"]
