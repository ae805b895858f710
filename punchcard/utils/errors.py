"""
Standardized error response utilities for the punchcard API.

Provides consistent error response format across all endpoints:
{
    "error": {
        "message": "User-friendly error message",
        "code": "ERROR_CODE"
    }
}

Usage:
    from punchcard.utils.errors import error_response, ErrorCode

    return error_response("Customer not found", ErrorCode.NOT_FOUND, 404)
"""
import logging
from enum import Enum
from flask import jsonify
from typing import Optional

from .exceptions import PunchcardError, ShopifyError

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """
    Error codes for responses built outside the exception hierarchy.

    Raised PunchcardErrors carry their own code string.
    """

    # Authentication (401)
    AUTH_REQUIRED = "AUTH_REQUIRED"
    INVALID_SECRET = "INVALID_SECRET"

    # Malformed request (400, 405)
    INVALID_REQUEST = "INVALID_REQUEST"

    # Not Found (404)
    NOT_FOUND = "NOT_FOUND"

    # Server Errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


def error_response(
    message: str,
    code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    status_code: int = 500,
    log_error: bool = True,
    details: Optional[dict] = None
) -> tuple:
    """
    Create a standardized error response.

    Args:
        message: User-friendly error message
        code: Error code from ErrorCode enum (or a raw code string)
        status_code: HTTP status code
        log_error: Whether to log the error
        details: Optional upstream details, returned alongside the message

    Returns:
        Tuple of (response, status_code) for Flask
    """
    if log_error and status_code >= 500:
        logger.error(f"API Error [{code}]: {message}", extra={"details": details})
    elif log_error and status_code >= 400:
        logger.warning(f"API Error [{code}]: {message}", extra={"details": details})

    response = {
        "error": {
            "message": message,
            "code": code.value if isinstance(code, ErrorCode) else code
        }
    }
    if details is not None:
        response["error"]["details"] = details

    return jsonify(response), status_code


def exception_response(error: PunchcardError) -> tuple:
    """Build the error response for a raised PunchcardError."""
    details = error.details if isinstance(error, ShopifyError) else None
    return error_response(
        error.message,
        error.code,
        error.status_code,
        log_error=error.status_code >= 500 or isinstance(error, ShopifyError),
        details=details
    )


# Convenience functions for common error types
def bad_request(message: str, code: ErrorCode = ErrorCode.INVALID_REQUEST) -> tuple:
    """400 Bad Request error."""
    return error_response(message, code, 400, log_error=False)


def unauthorized(message: str = "Authentication required", code: ErrorCode = ErrorCode.AUTH_REQUIRED) -> tuple:
    """401 Unauthorized error."""
    return error_response(message, code, 401, log_error=False)


def not_found(message: str, code: ErrorCode = ErrorCode.NOT_FOUND) -> tuple:
    """404 Not Found error."""
    return error_response(message, code, 404, log_error=False)


def internal_error(message: str = "An unexpected error occurred") -> tuple:
    """500 Internal Server Error."""
    return error_response(message, ErrorCode.INTERNAL_ERROR, 500, log_error=True)
