"""Standardized error codes for stockboard exceptions."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by :class:`StockboardError` instances."""

    GENERAL_ERROR = "GENERAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Parsing
    EMPTY_INPUT = "EMPTY_INPUT"
    SHAPE_MISMATCH = "SHAPE_MISMATCH"

    # Fetch collaborator
    FETCH_ERROR = "FETCH_ERROR"

    # Upload workflow
    UPLOAD_BUSY = "UPLOAD_BUSY"
    FILE_READ_ERROR = "FILE_READ_ERROR"

    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
