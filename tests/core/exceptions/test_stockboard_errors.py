"""Tests for the stockboard exception hierarchy."""

from __future__ import annotations

import pytest

from stockboard.core.exceptions import (
    ConfigurationError,
    EmptyInputError,
    ErrorCode,
    ErrorMessageTemplate,
    FetchError,
    ShapeMismatchError,
    StockboardError,
    format_error_response,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (EmptyInputError(), ErrorCode.EMPTY_INPUT),
        (ShapeMismatchError("Invalid historical data format", kind="historical"), ErrorCode.SHAPE_MISMATCH),
        (FetchError("Failed to load CSV file: 404", resource="historical/AAPL.csv"), ErrorCode.FETCH_ERROR),
        (ConfigurationError("bad timeout"), ErrorCode.CONFIGURATION_ERROR),
    ],
)
def test_errors_carry_their_code(error: StockboardError, code: ErrorCode) -> None:
    assert isinstance(error, StockboardError)
    assert error.error_code == code.value


def test_shape_mismatch_details() -> None:
    error = ShapeMismatchError("Invalid prediction data format", kind="prediction", missing_fields=["upperBound"])

    assert error.details == {"kind": "prediction", "missing_fields": ["upperBound"]}
    assert error.missing_fields == ["upperBound"]
    assert str(error) == "Invalid prediction data format"


def test_fetch_error_records_status_code() -> None:
    error = FetchError("Failed to load CSV file: 503", resource="stocks.csv", status_code=503)

    assert error.status_code == 503
    assert error.details["resource"] == "stocks.csv"
    assert error.details["status_code"] == 503


def test_message_templates() -> None:
    assert ErrorMessageTemplate.get_message(ErrorCode.SHAPE_MISMATCH, kind="historical") == "Invalid historical data format"
    assert "error code: SHAPE_MISMATCH" in ErrorMessageTemplate.get_message(ErrorCode.SHAPE_MISMATCH)


def test_format_error_response() -> None:
    payload = format_error_response(ErrorCode.FETCH_ERROR, resource="stocks.csv", status_code=404)

    assert payload["error"]["code"] == "FETCH_ERROR"
    assert payload["error"]["message"] == "Failed to load stocks.csv: 404"
    assert payload["error"]["details"] == {"resource": "stocks.csv", "status_code": 404}
