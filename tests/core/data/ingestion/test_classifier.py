from __future__ import annotations

from stockboard.core.data.ingestion import classify, has_prediction_shape, missing_fields, parse_csv
from stockboard.core.models import DatasetFormat


def _rows(*keys: str) -> list[dict[str, object]]:
    return [{key: "1" for key in keys}]


def test_historical_superset_is_historical() -> None:
    rows = _rows("date", "open", "high", "low", "close", "volume", "extra")

    assert classify(rows) is DatasetFormat.HISTORICAL


def test_prediction_without_actual_is_prediction() -> None:
    rows = _rows("date", "predicted", "lowerBound", "upperBound")

    assert classify(rows) is DatasetFormat.PREDICTION


def test_rows_with_both_column_sets_classify_as_historical() -> None:
    rows = _rows("date", "open", "high", "low", "close", "volume", "predicted", "lowerBound", "upperBound")

    assert has_prediction_shape(rows)
    assert classify(rows) is DatasetFormat.HISTORICAL


def test_unrelated_columns_are_unknown() -> None:
    assert classify(_rows("symbol", "name", "price")) is DatasetFormat.UNKNOWN


def test_empty_rows_are_unknown() -> None:
    assert classify([]) is DatasetFormat.UNKNOWN


def test_only_first_row_is_inspected() -> None:
    rows = [
        {"date": "d", "predicted": "1", "lowerBound": "0", "upperBound": "2"},
        {"date": "d", "open": "1", "high": "1", "low": "1", "close": "1", "volume": "1"},
    ]

    assert classify(rows) is DatasetFormat.PREDICTION


def test_values_are_not_validated() -> None:
    parsed = parse_csv("date,open,high,low,close,volume\nnot-a-date,x,1,99,50,-5\n")

    assert classify(parsed.rows) is DatasetFormat.HISTORICAL


def test_missing_fields_lists_absent_columns_in_order() -> None:
    rows = _rows("date", "open", "close")

    assert missing_fields(rows, DatasetFormat.HISTORICAL) == ["high", "low", "volume"]
    assert missing_fields([], DatasetFormat.PREDICTION) == ["date", "predicted", "lowerBound", "upperBound"]
