"""FastAPI integration for permission-gate."""

from .gate import (
    PermissionGate,
    InvalidPermissionGate,
    create_permission_gate,
    get_request_identity,
)
from .exception_handlers import register_exception_handlers, permission_error_handler

__all__ = [
    "PermissionGate",
    "InvalidPermissionGate",
    "create_permission_gate",
    "get_request_identity",
    "register_exception_handlers",
    "permission_error_handler",
]
