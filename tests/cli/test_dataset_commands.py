from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stockboard.cli import dataset as dataset_module
from stockboard.cli.main import create_app
from stockboard.core.data import DatasetStore


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def isolated_store(monkeypatch: pytest.MonkeyPatch) -> DatasetStore:
    store = DatasetStore()
    monkeypatch.setattr(dataset_module, "get_store", lambda config, include_mock: store)
    return store


def _base_args(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "absent.toml")]


def _read_jsonl(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_inspect_reports_detected_format(runner: CliRunner, tmp_path: Path, historical_csv: str) -> None:
    csv_path = tmp_path / "aapl.csv"
    csv_path.write_text(historical_csv, encoding="utf-8")
    out = tmp_path / "out.jsonl"

    result = runner.invoke(create_app(), [*_base_args(tmp_path), "--format", "jsonl", "--output", str(out), "dataset", "inspect", str(csv_path)])

    assert result.exit_code == 0, result.output
    summary = _read_jsonl(out)[0]
    assert summary["format"] == "historical"
    assert summary["rows"] == 2
    assert summary["columns"] == 6


def test_inspect_rows_coerces_cells(runner: CliRunner, tmp_path: Path) -> None:
    csv_path = tmp_path / "mixed.csv"
    csv_path.write_text("symbol,price,note\nAAPL,187.45,\nMSFT,1_000,n/a\n", encoding="utf-8")
    out = tmp_path / "rows.jsonl"

    result = runner.invoke(
        create_app(),
        [*_base_args(tmp_path), "--format", "jsonl", "--output", str(out), "dataset", "inspect", str(csv_path), "--rows"],
    )

    assert result.exit_code == 0, result.output
    assert _read_jsonl(out) == [
        {"symbol": "AAPL", "price": 187.45, "note": ""},
        {"symbol": "MSFT", "price": "1_000", "note": "n/a"},
    ]


def test_inspect_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(create_app(), [*_base_args(tmp_path), "dataset", "inspect", str(tmp_path / "nope.csv")])

    assert result.exit_code == 2
    assert "FILE_READ_ERROR" in result.output


def test_show_uploaded_historical_series(
    runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore, historical_csv: str
) -> None:
    csv_path = tmp_path / "aapl.csv"
    csv_path.write_text(historical_csv, encoding="utf-8")
    out = tmp_path / "series.jsonl"

    result = runner.invoke(
        create_app(),
        [*_base_args(tmp_path), "--format", "jsonl", "--output", str(out), "dataset", "show", "AAPL", "--historical-file", str(csv_path)],
    )

    assert result.exit_code == 0, result.output
    rows = _read_jsonl(out)
    assert [row["date"] for row in rows] == ["2025-01-01", "2025-01-02"]
    assert rows[0]["close"] == 100.0
    assert isolated_store.has_custom_historical("AAPL")


def test_show_rejects_wrong_shape(
    runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore, prediction_csv: str
) -> None:
    csv_path = tmp_path / "forecast.csv"
    csv_path.write_text(prediction_csv, encoding="utf-8")

    result = runner.invoke(create_app(), [*_base_args(tmp_path), "dataset", "show", "AAPL", "--historical-file", str(csv_path)])

    assert result.exit_code == 2
    assert "SHAPE_MISMATCH" in result.output
    assert "Invalid historical data format" in result.output
    assert not isolated_store.has_custom_historical("AAPL")


def test_show_prediction_series(
    runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore, prediction_csv: str
) -> None:
    csv_path = tmp_path / "forecast.csv"
    csv_path.write_text(prediction_csv, encoding="utf-8")
    out = tmp_path / "forecast.jsonl"

    result = runner.invoke(
        create_app(),
        [
            *_base_args(tmp_path),
            "--format",
            "jsonl",
            "--output",
            str(out),
            "dataset",
            "show",
            "AAPL",
            "--kind",
            "prediction",
            "--prediction-file",
            str(csv_path),
        ],
    )

    assert result.exit_code == 0, result.output
    rows = _read_jsonl(out)
    assert rows[0]["actual"] == 187.45
    assert rows[1]["actual"] is None
    assert rows[1]["upperBound"] == 190.63


def test_show_without_data_prints_placeholder(runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore) -> None:
    result = runner.invoke(create_app(), [*_base_args(tmp_path), "--no-color", "dataset", "show", "ZZZZ"])

    assert result.exit_code == 0, result.output
    assert "No data available." in result.output


def test_show_rejects_unknown_kind(runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore) -> None:
    result = runner.invoke(create_app(), [*_base_args(tmp_path), "dataset", "show", "AAPL", "--kind", "intraday"])

    assert result.exit_code == 2
    assert "INVALID_KIND" in result.output


def test_show_mock_history_with_moving_averages(runner: CliRunner, tmp_path: Path) -> None:
    out = tmp_path / "mock.jsonl"

    result = runner.invoke(
        create_app(),
        [
            *_base_args(tmp_path),
            "--format",
            "jsonl",
            "--output",
            str(out),
            "dataset",
            "show",
            "AAPL",
            "--mock",
            "--range",
            "3M",
            "--with-ma",
        ],
    )

    assert result.exit_code == 0, result.output
    rows = _read_jsonl(out)
    assert len(rows) == 90
    assert rows[0]["ma20"] is None
    assert rows[19]["ma20"] is not None
    assert rows[48]["ma50"] is None
    assert rows[49]["ma50"] is not None


def test_show_rejects_unknown_range(runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore) -> None:
    result = runner.invoke(create_app(), [*_base_args(tmp_path), "dataset", "show", "AAPL", "--range", "5Y"])

    assert result.exit_code == 2
    assert "INVALID_RANGE" in result.output


def test_invalid_format_is_rejected(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(create_app(), [*_base_args(tmp_path), "--format", "xml", "dataset", "show", "AAPL"])

    assert result.exit_code == 2


def test_log_level_comes_from_environment(
    runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore, historical_csv: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    csv_path = tmp_path / "aapl.csv"
    csv_path.write_text(historical_csv, encoding="utf-8")
    monkeypatch.setenv("STOCKBOARD_LOG_LEVEL", "INFO")

    result = runner.invoke(
        create_app(),
        [*_base_args(tmp_path), "--output", str(tmp_path / "out.txt"), "dataset", "show", "AAPL", "--historical-file", str(csv_path)],
    )

    assert result.exit_code == 0, result.output
    assert '"level": "INFO"' in result.output


def test_log_level_comes_from_config_file(
    runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore, historical_csv: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("STOCKBOARD_LOG_LEVEL", raising=False)
    csv_path = tmp_path / "aapl.csv"
    csv_path.write_text(historical_csv, encoding="utf-8")
    config_path = tmp_path / "config.toml"
    config_path.write_text('[logging]\nlevel = "INFO"\n', encoding="utf-8")

    result = runner.invoke(
        create_app(),
        ["--config", str(config_path), "--output", str(tmp_path / "out.txt"), "dataset", "show", "AAPL", "--historical-file", str(csv_path)],
    )

    assert result.exit_code == 0, result.output
    assert '"level": "INFO"' in result.output


def test_log_level_option_overrides_configuration(
    runner: CliRunner, tmp_path: Path, isolated_store: DatasetStore, historical_csv: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    csv_path = tmp_path / "aapl.csv"
    csv_path.write_text(historical_csv, encoding="utf-8")
    monkeypatch.setenv("STOCKBOARD_LOG_LEVEL", "INFO")

    result = runner.invoke(
        create_app(),
        [
            *_base_args(tmp_path),
            "--log-level",
            "ERROR",
            "--output",
            str(tmp_path / "out.txt"),
            "dataset",
            "show",
            "AAPL",
            "--historical-file",
            str(csv_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert '"level": "INFO"' not in result.output
