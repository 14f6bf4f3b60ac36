"""Exception handling module."""

from stockboard.core.exceptions.base import (
    ConfigurationError,
    EmptyInputError,
    FetchError,
    ShapeMismatchError,
    StockboardError,
)
from stockboard.core.exceptions.codes import ErrorCode
from stockboard.core.exceptions.messages import ErrorMessageTemplate, format_error_response

__all__ = [
    "StockboardError",
    "EmptyInputError",
    "ShapeMismatchError",
    "FetchError",
    "ConfigurationError",
    "ErrorCode",
    "ErrorMessageTemplate",
    "format_error_response",
]
