"""User-facing message templates for stockboard errors and uploads."""

from typing import Any

from stockboard.core.exceptions.codes import ErrorCode


class ErrorMessageTemplate:
    """Registry of message templates keyed by error code."""

    _templates: dict[ErrorCode, str] = {
        ErrorCode.GENERAL_ERROR: "An unknown error occurred",
        ErrorCode.VALIDATION_ERROR: "Validation failed: {details}",
        ErrorCode.CONFIGURATION_ERROR: "Configuration error: {details}",
        ErrorCode.EMPTY_INPUT: "CSV file is empty",
        ErrorCode.SHAPE_MISMATCH: "Invalid {kind} data format",
        ErrorCode.FETCH_ERROR: "Failed to load {resource}: {status_code}",
        ErrorCode.UPLOAD_BUSY: "An upload is already in progress",
        ErrorCode.FILE_READ_ERROR: "Failed to process file",
        ErrorCode.UNEXPECTED_ERROR: "An unexpected error occurred",
    }

    @classmethod
    def get_message(cls, error_code: ErrorCode, **kwargs: Any) -> str:
        """Return the formatted message for ``error_code``.

        Falls back to the generic message when template variables are missing.
        """
        template = cls._templates.get(error_code, cls._templates[ErrorCode.GENERAL_ERROR])
        try:
            return template.format(**kwargs)
        except KeyError:
            return f"{cls._templates[ErrorCode.GENERAL_ERROR]} (error code: {error_code.value})"


def format_error_response(error_code: ErrorCode, message: str | None = None, **kwargs: Any) -> dict[str, Any]:
    """Build a serialisable error payload."""
    if message is None:
        message = ErrorMessageTemplate.get_message(error_code, **kwargs)

    return {
        "error": {
            "code": error_code.value,
            "message": message,
            "details": kwargs,
        }
    }
