"""Domain-specific exceptions for permission-gate.

Errors raised while loading, parsing and querying permission documents.
The permission store logs these and never lets them escape its public
surface; they exist so that the failure kinds stay distinguishable in
logs and in direct calls to the storage and parsing layers.
"""

from typing import Optional

from .base import PermissionGateError


# Configuration Errors
class ConfigurationError(PermissionGateError):
    """Raised when the permission client is missing required setup."""
    pass


# Storage Errors
class StorageError(PermissionGateError):
    """Base class for object storage errors."""
    pass


class FetchError(StorageError):
    """Raised when the permission document cannot be fetched."""

    def __init__(
        self,
        message: str,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message, "FETCH_FAILED", {"bucket": bucket, "key": key})
        self.cause = cause


# Document Errors
class DocumentError(PermissionGateError):
    """Base class for permission document errors."""
    pass


class ParseError(DocumentError):
    """Raised when the permission document is not valid JSON or has the wrong shape."""

    def __init__(self, message: str = "Invalid permission document", reason: Optional[str] = None):
        super().__init__(message, "INVALID_DOCUMENT")
        if reason:
            self.details["reason"] = reason


class UnknownPermissionError(DocumentError):
    """Raised when a permission is not defined for the configured application."""

    def __init__(self, permission: str, app: str):
        super().__init__(
            f"Permission '{permission}' does not exist for app '{app}'",
            "UNKNOWN_PERMISSION",
            {"permission": permission, "app": app}
        )
        self.permission = permission
        self.app = app
