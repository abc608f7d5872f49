"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .auth import AuthorizationError, Unauthorized
from .base import PermissionGateError
from .domain import (
    ConfigurationError,
    DocumentError,
    FetchError,
    ParseError,
    StorageError,
    UnknownPermissionError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 403 Forbidden
    AuthorizationError: 403,
    Unauthorized: 403,
    UnknownPermissionError: 403,

    # 500 Internal Server Error
    ConfigurationError: 500,
    DocumentError: 500,
    ParseError: 500,

    # 503 Service Unavailable
    StorageError: 503,
    FetchError: 503,

    # Default for PermissionGateError
    PermissionGateError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception, walking its class hierarchy.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code, 500 when nothing in the hierarchy is mapped
    """
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500
