"""Permission entities package.

Cache entries and the wire models of the permission document.
"""

from .permission import PermissionEntry, PermissionSnapshot, EMPTY_SNAPSHOT
from .document import PermissionDefinition, PermissionOverride, PermissionRecord

__all__ = [
    # Cache entities
    "PermissionEntry",
    "PermissionSnapshot",
    "EMPTY_SNAPSHOT",

    # Wire models
    "PermissionDefinition",
    "PermissionOverride",
    "PermissionRecord",
]
