"""Permissions feature.

Polling store holding one application's permission snapshot, plus the
entities and parser for the permission document it consumes.
"""

from .entities import (
    PermissionEntry,
    PermissionSnapshot,
    PermissionDefinition,
    PermissionOverride,
    PermissionRecord,
)
from .services import (
    PermissionStore,
    parse_permission_document,
    build_snapshot,
    load_snapshot,
)

__all__ = [
    "PermissionEntry",
    "PermissionSnapshot",
    "PermissionDefinition",
    "PermissionOverride",
    "PermissionRecord",
    "PermissionStore",
    "parse_permission_document",
    "build_snapshot",
    "load_snapshot",
]
