"""Upload workflow applying user CSV files to the dataset store."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from threading import Lock

from loguru import logger

from stockboard.core.data.ingestion import classify, parse_csv
from stockboard.core.data.store import DatasetStore
from stockboard.core.exceptions import ErrorCode, ErrorMessageTemplate, ShapeMismatchError
from stockboard.core.models import DatasetFormat, ParsedCSV
from stockboard.core.monitoring import MetricsCollector, get_metrics_collector


class UploadMode(str, Enum):
    """Dataset kind selected by the user before uploading."""

    HISTORICAL = "historical"
    PREDICTION = "prediction"
    ANY = "any"


class UploadStatus(str, Enum):
    APPLIED = "applied"
    REJECTED = "rejected"
    NOT_APPLIED = "not_applied"
    BUSY = "busy"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class UploadResult:
    """Outcome of one upload, with a title and description for display."""

    status: UploadStatus
    mode: UploadMode
    title: str
    description: str
    detected_format: DatasetFormat = DatasetFormat.UNKNOWN
    rows: int = 0
    columns: int = 0
    error_code: str | None = None

    @property
    def applied(self) -> bool:
        return self.status is UploadStatus.APPLIED


ConfirmCallback = Callable[[DatasetFormat], bool]

_SHAPE_HINTS = {
    DatasetFormat.HISTORICAL: "CSV must include date, open, high, low, close, and volume columns",
    DatasetFormat.PREDICTION: "CSV must include date, actual/predicted, lowerBound, and upperBound columns",
}


def _decline(_: DatasetFormat) -> bool:
    return False


class DatasetUploader:
    """Parses uploaded CSV text and applies it to a :class:`DatasetStore`.

    Only one upload runs at a time; a concurrent attempt gets a ``BUSY`` result
    and leaves the store untouched. No method raises to the caller.
    """

    def __init__(
        self,
        store: DatasetStore,
        *,
        confirm: ConfirmCallback | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.store = store
        self.confirm = confirm or _decline
        self._metrics = metrics
        self._busy = Lock()

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    @property
    def is_uploading(self) -> bool:
        return self._busy.locked()

    def upload_text(
        self,
        symbol: str,
        text: str,
        mode: UploadMode = UploadMode.HISTORICAL,
        *,
        confirm: ConfirmCallback | None = None,
    ) -> UploadResult:
        if not self._busy.acquire(blocking=False):
            return self._record(_busy_result(mode))
        try:
            return self._record(self._process(symbol, text, mode, confirm or self.confirm))
        finally:
            self._busy.release()

    async def upload_file(
        self,
        symbol: str,
        path: str | Path,
        mode: UploadMode = UploadMode.HISTORICAL,
        *,
        confirm: ConfirmCallback | None = None,
        encoding: str = "utf-8",
    ) -> UploadResult:
        """Read ``path`` and upload its contents for ``symbol``."""

        if not self._busy.acquire(blocking=False):
            return self._record(_busy_result(mode))
        try:
            try:
                text = await asyncio.to_thread(Path(path).read_text, encoding=encoding)
            except (OSError, UnicodeDecodeError) as exc:
                logger.bind(symbol=symbol, error_code=ErrorCode.FILE_READ_ERROR.value).error(
                    f"Error processing file {path}: {exc}"
                )
                return self._record(
                    UploadResult(
                        status=UploadStatus.FAILED,
                        mode=mode,
                        title=ErrorMessageTemplate.get_message(ErrorCode.FILE_READ_ERROR),
                        description="Please check the file format and try again",
                        error_code=ErrorCode.FILE_READ_ERROR.value,
                    )
                )
            return self._record(self._process(symbol, text, mode, confirm or self.confirm))
        finally:
            self._busy.release()

    def _process(self, symbol: str, text: str, mode: UploadMode, confirm: ConfirmCallback) -> UploadResult:
        parsed = parse_csv(text, source=f"upload:{symbol}")
        if mode is UploadMode.HISTORICAL:
            return self._apply(symbol, parsed, DatasetFormat.HISTORICAL, mode)
        if mode is UploadMode.PREDICTION:
            return self._apply(symbol, parsed, DatasetFormat.PREDICTION, mode)
        return self._apply_detected(symbol, parsed, confirm)

    def _apply(self, symbol: str, parsed: ParsedCSV, kind: DatasetFormat, mode: UploadMode) -> UploadResult:
        columns = _column_count(parsed)
        try:
            if kind is DatasetFormat.HISTORICAL:
                points = self.store.set_historical(symbol, parsed.rows)
            else:
                points = self.store.set_prediction(symbol, parsed.rows)
        except ShapeMismatchError as error:
            logger.bind(symbol=symbol, error_code=error.error_code, missing=error.missing_fields).warning(
                f"Rejected {kind.value} upload"
            )
            return UploadResult(
                status=UploadStatus.REJECTED,
                mode=mode,
                title=error.message,
                description=_SHAPE_HINTS[kind],
                detected_format=classify(parsed.rows),
                rows=len(parsed.rows),
                columns=columns,
                error_code=error.error_code,
            )

        if kind is DatasetFormat.HISTORICAL:
            title = "Historical dataset uploaded successfully"
            description = f"{len(points)} data points loaded for {symbol}"
        else:
            title = "Prediction dataset uploaded successfully"
            description = f"{len(points)} prediction points loaded for {symbol}"
        return UploadResult(
            status=UploadStatus.APPLIED,
            mode=mode,
            title=title,
            description=description,
            detected_format=kind,
            rows=len(points),
            columns=columns,
        )

    def _apply_detected(self, symbol: str, parsed: ParsedCSV, confirm: ConfirmCallback) -> UploadResult:
        detected = classify(parsed.rows)
        columns = _column_count(parsed)
        logger.bind(symbol=symbol, detected=detected.value).info(
            f"Generic CSV loaded with {len(parsed.rows)} rows and {columns} columns"
        )
        if detected is not DatasetFormat.UNKNOWN and confirm(detected):
            return self._apply(symbol, parsed, detected, UploadMode.ANY)
        return UploadResult(
            status=UploadStatus.NOT_APPLIED,
            mode=UploadMode.ANY,
            title="CSV file uploaded successfully",
            description=f"Loaded {len(parsed.rows)} rows with {columns} columns",
            detected_format=detected,
            rows=len(parsed.rows),
            columns=columns,
        )

    def _record(self, result: UploadResult) -> UploadResult:
        kind = result.detected_format.value if result.mode is UploadMode.ANY else result.mode.value
        self.metrics.record_upload(kind, result.status.value)
        return result


def _column_count(parsed: ParsedCSV) -> int:
    # duplicate headers collapse into one key, so count the first row's keys
    return len(parsed.rows[0]) if parsed.rows else 0


def _busy_result(mode: UploadMode) -> UploadResult:
    logger.bind(error_code=ErrorCode.UPLOAD_BUSY.value).warning("Upload rejected while another is in flight")
    return UploadResult(
        status=UploadStatus.BUSY,
        mode=mode,
        title=ErrorMessageTemplate.get_message(ErrorCode.UPLOAD_BUSY),
        description="Wait for the current upload to finish and try again",
        error_code=ErrorCode.UPLOAD_BUSY.value,
    )


__all__ = ["ConfirmCallback", "DatasetUploader", "UploadMode", "UploadResult", "UploadStatus"]
