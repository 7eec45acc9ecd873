# File: tech_scout/errors.py
"""tech_scout.errors: per-page failure taxonomy."""

from __future__ import annotations

from enum import Enum

__all__ = ["ErrorType", "VisitError"]


class ErrorType(str, Enum):
    """Why a page visit failed; the value is the human-readable message."""

    NO_RESPONSE = "No response from server"
    RESPONSE_NOT_OK = "Response was not ok"
    NO_HTML_DOCUMENT = "No HTML document"
    UNKNOWN_ERROR = "Unknown error"

    @property
    def message(self) -> str:
        return self.value


class VisitError(Exception):
    """Raised by the page visitor; carries an :class:`ErrorType`."""

    def __init__(self, error_type: ErrorType) -> None:
        super().__init__(error_type.message)
        self.error_type = error_type
