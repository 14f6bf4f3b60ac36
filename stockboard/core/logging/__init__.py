"""JSON structured logging built on loguru."""

from stockboard.core.logging.config import LogConfig
from stockboard.core.logging.logger import (
    JsonLineSink,
    StructuredLogger,
    build_payload,
    configure_logging,
    current_trace_id,
    log_context,
    logger,
)

__all__ = [
    "JsonLineSink",
    "LogConfig",
    "StructuredLogger",
    "build_payload",
    "configure_logging",
    "current_trace_id",
    "log_context",
    "logger",
]
