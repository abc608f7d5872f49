"""Permission-Gate - S3-backed permission checks for FastAPI services.

Polls a permission document from S3, keeps one application's permissions
in memory and gates requests on them.
"""

from .__version__ import __version__

from .config import (
    PermissionGateSettings,
    get_settings,
    setup_logging,
)

from .core.exceptions import (
    PermissionGateError,
    ConfigurationError,
    FetchError,
    ParseError,
    UnknownPermissionError,
    AuthorizationError,
    Unauthorized,
)

from .features.permissions import (
    PermissionEntry,
    PermissionStore,
)

from .features.storage import (
    ObjectStorageProtocol,
    S3ObjectStorage,
)

from .infrastructure.fastapi import (
    PermissionGate,
    InvalidPermissionGate,
    create_permission_gate,
    register_exception_handlers,
)

__all__ = [
    "__version__",
    "PermissionGateSettings",
    "get_settings",
    "setup_logging",
    "PermissionGateError",
    "ConfigurationError",
    "FetchError",
    "ParseError",
    "UnknownPermissionError",
    "AuthorizationError",
    "Unauthorized",
    "PermissionEntry",
    "PermissionStore",
    "ObjectStorageProtocol",
    "S3ObjectStorage",
    "PermissionGate",
    "InvalidPermissionGate",
    "create_permission_gate",
    "register_exception_handlers",
]
