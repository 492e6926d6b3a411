"""
Centralized Error Handling for the Expansion Readiness API

Features:
- Standardized error response format
- Exception mapping to HTTP status codes
- FastAPI exception handler registration
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# Error Categories
# =============================================================================


class ErrorCategory(str, Enum):
    """Categories for error classification"""

    DATABASE = "database"
    VALIDATION = "validation"
    INTERNAL = "internal"


# =============================================================================
# Custom Exceptions
# =============================================================================


class ReadinessError(Exception):
    """Base exception for the readiness service"""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = utc_now().isoformat()


class InvalidRangeError(ReadinessError):
    """Unknown time range selector"""

    VALID_RANGES = ("month", "90d", "180d", "365d")

    def __init__(self, time_range: Any):
        super().__init__(
            message=f"Invalid time range: {time_range!r}",
            category=ErrorCategory.VALIDATION,
            status_code=400,
            details={"range": str(time_range), "allowed": list(self.VALID_RANGES)},
        )
        self.time_range = time_range


class DataUnavailableError(ReadinessError):
    """Fleet store could not be read (company, trucks or loads)"""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.DATABASE,
            status_code=503,
            details=details,
        )


# =============================================================================
# Error Response Builder
# =============================================================================


def build_error_response(
    error: Exception,
    include_trace: bool = False,
) -> Dict[str, Any]:
    """
    Build a standardized error response.

    Args:
        error: The exception to format
        include_trace: Whether to include stack trace (dev only)

    Returns:
        Dict with error details
    """
    if isinstance(error, ReadinessError):
        response = {
            "error": True,
            "category": error.category.value,
            "message": error.message,
            "status_code": error.status_code,
            "timestamp": error.timestamp,
            "details": error.details,
        }
    elif isinstance(error, HTTPException):
        response = {
            "error": True,
            "category": "http",
            "message": error.detail,
            "status_code": error.status_code,
            "timestamp": utc_now().isoformat(),
            "details": {},
        }
    else:
        response = {
            "error": True,
            "category": ErrorCategory.INTERNAL.value,
            "message": str(error) or "An unexpected error occurred",
            "status_code": 500,
            "timestamp": utc_now().isoformat(),
            "details": {},
        }

    if include_trace:
        response["trace"] = traceback.format_exc()

    return response


# =============================================================================
# Exception Handlers for FastAPI
# =============================================================================


async def readiness_exception_handler(
    request: Request, exc: ReadinessError
) -> JSONResponse:
    """Handle ReadinessError exceptions"""
    logger.error(
        f"[{exc.category.value}] {exc.message}",
        extra={
            "status_code": exc.status_code,
            "details": exc.details,
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_response(exc),
    )


def register_exception_handlers(app):
    """
    Register exception handlers with a FastAPI app.

    Usage:
        from errors import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(ReadinessError, readiness_exception_handler)
    logger.info("✅ Exception handlers registered")


__all__ = [
    "ErrorCategory",
    "ReadinessError",
    "InvalidRangeError",
    "DataUnavailableError",
    "build_error_response",
    "register_exception_handlers",
]
