"""Core stockboard exception classes."""

from typing import Any

from stockboard.core.exceptions.codes import ErrorCode


class StockboardError(Exception):
    """Base exception for stockboard."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GENERAL_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: Human readable message
            error_code: Error code value
            details: Extra details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class EmptyInputError(StockboardError):
    """Raised when CSV text contains no parsable lines."""

    def __init__(self, message: str = "CSV input is empty", details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.EMPTY_INPUT.value, details)


class ShapeMismatchError(StockboardError):
    """Raised when rows lack the columns required for a dataset kind."""

    def __init__(
        self,
        message: str,
        kind: str,
        missing_fields: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["kind"] = kind
        if missing_fields:
            super_details["missing_fields"] = missing_fields
        super().__init__(message, ErrorCode.SHAPE_MISMATCH.value, super_details)
        self.kind = kind
        self.missing_fields = missing_fields or []


class FetchError(StockboardError):
    """Raised when a CSV resource cannot be fetched."""

    def __init__(
        self,
        message: str,
        resource: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["resource"] = resource
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, ErrorCode.FETCH_ERROR.value, super_details)
        self.resource = resource
        self.status_code = status_code


class ConfigurationError(StockboardError):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR.value, details)
