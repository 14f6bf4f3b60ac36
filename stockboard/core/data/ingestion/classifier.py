"""Dataset format detection based on the first row's columns."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from stockboard.core.models import HISTORICAL_FIELDS, PREDICTION_FIELDS, DatasetFormat

_REQUIRED_FIELDS: dict[DatasetFormat, tuple[str, ...]] = {
    DatasetFormat.HISTORICAL: HISTORICAL_FIELDS,
    DatasetFormat.PREDICTION: PREDICTION_FIELDS,
}


def missing_fields(rows: Sequence[Mapping[str, object]], kind: DatasetFormat) -> list[str]:
    """Return the required columns for ``kind`` absent from the first row.

    An empty dataset is missing every required column.
    """

    required = _REQUIRED_FIELDS.get(kind)
    if required is None:
        raise ValueError(f"no required fields defined for {kind.value!r}")
    if not rows:
        return list(required)
    first = rows[0]
    return [name for name in required if name not in first]


def has_historical_shape(rows: Sequence[Mapping[str, object]]) -> bool:
    return bool(rows) and not missing_fields(rows, DatasetFormat.HISTORICAL)


def has_prediction_shape(rows: Sequence[Mapping[str, object]]) -> bool:
    return bool(rows) and not missing_fields(rows, DatasetFormat.PREDICTION)


def classify(rows: Sequence[Mapping[str, object]]) -> DatasetFormat:
    """Classify rows as historical, prediction or unknown.

    Only the first row is inspected, and historical takes precedence when a row
    carries both column sets.
    """

    if has_historical_shape(rows):
        return DatasetFormat.HISTORICAL
    if has_prediction_shape(rows):
        return DatasetFormat.PREDICTION
    return DatasetFormat.UNKNOWN


__all__ = ["classify", "has_historical_shape", "has_prediction_shape", "missing_fields"]
