"""Entry point for the stockboard command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from stockboard.core.config import ConfigManager, StockboardConfig
from stockboard.core.exceptions import ConfigurationError
from stockboard.core.logging import configure_logging

from .dataset import register as register_dataset_commands
from .formatters import create_formatter
from .quotes import register as register_quote_commands


def _load_config(config_path: Path | None, data_dir: Path | None, base_url: str | None) -> StockboardConfig:
    overrides: dict[str, object] = {}
    if data_dir is not None:
        overrides["data_dir"] = str(data_dir)
    if base_url is not None:
        overrides["base_url"] = base_url
    try:
        manager = ConfigManager(config_path)
        if overrides:
            manager.update_config(data=overrides)
    except ConfigurationError as exc:
        raise typer.BadParameter(exc.message, param_hint="--config") from exc
    return manager.get_config()


def _setup_logging(level: str | None, config: StockboardConfig) -> None:
    try:
        configure_logging(
            level=level or config.logging.level,
            file_output=config.logging.file is not None,
            file_path=config.logging.file,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


def create_app() -> typer.Typer:
    """Build the Typer application with every command group registered."""

    app = typer.Typer(add_completion=False, help="Stock dashboard dataset tools")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option("table", "--format", "-f", help="Output format (table or jsonl).", show_default=True),
        output: Path | None = typer.Option(None, "--output", "-o", help="Write results to this file."),
        log_level: str | None = typer.Option(
            None, "--log-level", help="Minimum level of JSON logs on stderr; overrides the configured level."
        ),
        no_color: bool = typer.Option(False, "--no-color", help="Plain table output."),
        config_path: Path | None = typer.Option(None, "--config", help="TOML file, default ~/.stockboard/config.toml."),
        data_dir: Path | None = typer.Option(
            None, "--data-dir", help="Directory holding historical/, predictions/ and stocks.csv."
        ),
        base_url: str | None = typer.Option(None, "--base-url", help="Base URL serving the default datasets."),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        config = _load_config(config_path, data_dir, base_url)
        _setup_logging(log_level, config)
        ctx.obj.update({"format": normalized_format, "output_path": output, "no_color": no_color, "config": config})

    register_dataset_commands(app)
    register_quote_commands(app)
    return app


app = create_app()
