"""CSV ingestion: tokenizing, coercion, classification and normalization."""

from __future__ import annotations

from stockboard.core.data.ingestion.classifier import (
    classify,
    has_historical_shape,
    has_prediction_shape,
    missing_fields,
)
from stockboard.core.data.ingestion.coercion import coerce, coerce_row
from stockboard.core.data.ingestion.normalizer import (
    parse_calendar_date,
    sort_by_date,
    to_float,
    to_historical_points,
    to_prediction_points,
)
from stockboard.core.data.ingestion.tokenizer import parse_csv, tokenize

__all__ = [
    "classify",
    "coerce",
    "coerce_row",
    "has_historical_shape",
    "has_prediction_shape",
    "missing_fields",
    "parse_calendar_date",
    "parse_csv",
    "sort_by_date",
    "to_float",
    "to_historical_points",
    "to_prediction_points",
    "tokenize",
]
