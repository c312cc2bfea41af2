"""Volatility engine error types."""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Error classification codes.

    The data-quality codes (``MISSING_FIELD`` through ``INVALID_RANGE``) tag
    reconciliation issues and are never raised; the remaining codes are used
    for exceptions caused by the caller.
    """

    MISSING_FIELD = "missing_field"
    MALFORMED_NUMERIC = "malformed_numeric"
    MALFORMED_VALUE = "malformed_value"
    INVALID_RANGE = "invalid_range"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    INVALID_ARGUMENT = "invalid_argument"


class VolatilityEngineError(Exception):
    """Volatility engine exception with error code.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
