"""Authorization exceptions for permission-gate."""

from typing import Optional

from .base import PermissionGateError


class AuthorizationError(PermissionGateError):
    """Base exception for authorization errors."""
    pass


class Unauthorized(AuthorizationError):
    """Raised by a permission gate when a request is denied.

    Covers both a request without an identity and an identity that lacks
    the required permission. Distinct from ConfigurationError so host
    exception handlers can tell a denial from a broken setup.
    """

    def __init__(self, message: str = "User is not authorized", permission: Optional[str] = None):
        super().__init__(message, "UNAUTHORIZED")
        if permission:
            self.details["permission"] = permission
        self.permission = permission
