"""Base exceptions for permission-gate.

This module defines the root of the exception hierarchy. Every exception
raised by the library carries an error code and a details dictionary so
that hosts can render consistent API error responses.
"""

from typing import Any, Dict, Optional


class PermissionGateError(Exception):
    """Base exception for all permission-gate errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as get_mapped_status_code
    return get_mapped_status_code(exception)


def create_error_response(exception: PermissionGateError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The permission-gate exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
