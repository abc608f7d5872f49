"""Permission services package."""

from .document_parser import build_snapshot, load_snapshot, parse_permission_document
from .permission_store import PermissionStore

__all__ = [
    "PermissionStore",
    "parse_permission_document",
    "build_snapshot",
    "load_snapshot",
]
