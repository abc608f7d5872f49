"""Exceptions module for permission-gate.

Exception hierarchy for the library, organized by domain concerns
(configuration, storage, documents) and authorization outcomes.
"""

from .base import (
    PermissionGateError,
    get_http_status_code,
    create_error_response,
)

from .domain import (
    # Configuration Errors
    ConfigurationError,

    # Storage Errors
    StorageError,
    FetchError,

    # Document Errors
    DocumentError,
    ParseError,
    UnknownPermissionError,
)

from .auth import (
    AuthorizationError,
    Unauthorized,
)

from .http_mapping import HTTP_STATUS_MAP

__all__ = [
    "PermissionGateError",
    "get_http_status_code",
    "create_error_response",
    "ConfigurationError",
    "StorageError",
    "FetchError",
    "DocumentError",
    "ParseError",
    "UnknownPermissionError",
    "AuthorizationError",
    "Unauthorized",
    "HTTP_STATUS_MAP",
]
