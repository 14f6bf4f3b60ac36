"""JSON-line logging on top of loguru with per-task trace ids."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from pathlib import Path
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger

from stockboard.core.logging.config import LogConfig

_TRACE_ID: ContextVar[str | None] = ContextVar("stockboard_trace_id", default=None)
_SCOPE: ContextVar[dict[str, Any]] = ContextVar("stockboard_log_scope", default={})

# promoted to top-level payload keys; everything else lands under "context"
TOP_LEVEL_KEYS = ("trace_id", "symbol", "error_code")


def current_trace_id() -> str:
    """Return the active trace id, starting a new trace when none is set."""

    trace_id = _TRACE_ID.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _TRACE_ID.set(trace_id)
    return trace_id


def _inject_scope(record: dict[str, Any]) -> None:
    extra = record["extra"]
    if extra.get("trace_id"):
        _TRACE_ID.set(extra["trace_id"])
    else:
        extra["trace_id"] = current_trace_id()
    for key, value in _SCOPE.get().items():
        if extra.get(key) is None:
            extra[key] = value
    for key in TOP_LEVEL_KEYS:
        extra.setdefault(key, None)


def build_payload(record: dict[str, Any]) -> dict[str, Any]:
    """Flatten a loguru record into the JSON document written by the sinks."""

    extra = record.get("extra", {})
    time = record.get("time") or datetime.now(UTC)
    payload: dict[str, Any] = {
        "timestamp": time.isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    payload.update({key: extra.get(key) for key in TOP_LEVEL_KEYS})
    context = {key: value for key, value in extra.items() if key not in TOP_LEVEL_KEYS}
    if context:
        payload["context"] = context
    if record.get("exception"):
        payload["exception"] = str(record["exception"])
    return payload


def _dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, default=lambda value: value.isoformat() if isinstance(value, datetime) else str(value))


class JsonLineSink:
    """Write one JSON document per record to a stream or an append-only file.

    Without a stream or path the sink writes to whatever ``sys.stderr`` is at
    emit time.
    """

    def __init__(self, stream: IO[str] | None = None, *, path: str | Path | None = None) -> None:
        self._stream = stream
        self._path = Path(path) if path is not None else None
        if self._path is not None:
            self._path.parent.mkdir(parents=True, exist_ok=True)

    def __call__(self, message: Any) -> None:
        line = _dumps(build_payload(message.record)) + "\n"
        if self._path is not None:
            with self._path.open("a", encoding="utf-8") as file:
                file.write(line)
            return
        stream = self._stream or sys.stderr
        stream.write(line)
        stream.flush()


def _apply(config: LogConfig) -> None:
    level = config.level.upper()
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        handlers.append({"sink": JsonLineSink(config.console_stream), "level": level})
    if config.file_output and config.file_path:
        handlers.append({"sink": JsonLineSink(path=config.file_path), "level": level})
    logger.configure(handlers=handlers, patcher=_inject_scope, extra=dict(config.extra))


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Replace every loguru handler with JSON sinks at ``level``."""

    _apply(LogConfig(level=level, **kwargs))


class StructuredLogger:
    """Holds a :class:`LogConfig` and the loguru logger it configured."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        _apply(self.config)
        self.logger = logger

    def configure(self, **changes: Any) -> None:
        self.config = self.config.model_copy(update=changes)
        _apply(self.config)

    @contextmanager
    def context(self, *, trace_id: str | None = None, **fields: Any) -> Iterator[str]:
        with log_context(trace_id=trace_id, **fields) as active:
            yield active


@contextmanager
def log_context(*, trace_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Attach a trace id and ``fields`` to every record logged inside the block.

    Nested blocks merge their fields over the enclosing ones. Both the trace id
    and the fields are restored on exit.
    """

    scope_token = _SCOPE.set({**_SCOPE.get(), **fields})
    active = trace_id or uuid4().hex
    trace_token = _TRACE_ID.set(active)
    try:
        yield active
    finally:
        _TRACE_ID.reset(trace_token)
        _SCOPE.reset(scope_token)


__all__ = [
    "JsonLineSink",
    "StructuredLogger",
    "build_payload",
    "configure_logging",
    "current_trace_id",
    "log_context",
    "logger",
]
