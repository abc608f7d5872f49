"""Permission document parsing.

Turns the raw bytes of a permission document into a snapshot for a single
application. Records of other applications never reach the snapshot.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import TypeAdapter

from ....core.exceptions import ParseError
from ..entities import PermissionEntry, PermissionRecord, PermissionSnapshot


_document_adapter = TypeAdapter(List[Any])
_record_adapter = TypeAdapter(PermissionRecord)


def _record_app(raw_record: Any) -> Optional[Any]:
    if isinstance(raw_record, dict):
        permission = raw_record.get("permission")
        if isinstance(permission, dict):
            return permission.get("app")
    return None


def parse_permission_document(
    payload: Union[bytes, str],
    app: Optional[str] = None
) -> List[PermissionRecord]:
    """Parse a permission document.

    With ``app`` given, only that application's records are validated;
    records of other applications are skipped unread, malformed or not.

    Args:
        payload: UTF-8 encoded JSON document
        app: Application whose records are kept, all records when None

    Returns:
        Records in document order

    Raises:
        ParseError: If the payload is not a JSON list or a kept record is malformed
    """
    try:
        raw_records = _document_adapter.validate_json(payload)
        return [
            _record_adapter.validate_python(raw_record)
            for raw_record in raw_records
            if app is None or _record_app(raw_record) == app
        ]
    except ValueError as e:  # pydantic ValidationError and undecodable bytes
        raise ParseError("Invalid JSON from permission bucket", reason=str(e)) from e


def build_snapshot(records: Iterable[PermissionRecord], app: str) -> PermissionSnapshot:
    """Build a fresh snapshot from the records that belong to ``app``.

    Later records replace earlier ones with the same permission name, and
    later overrides replace earlier ones for the same user.
    """
    entries: Dict[str, PermissionEntry] = {}
    for record in records:
        permission = record.permission
        if permission.app != app:
            continue

        overrides: Dict[str, bool] = {}
        for override in record.overrides or []:
            overrides[override.user_id] = bool(override.active)

        entries[permission.name] = PermissionEntry(
            default_value=bool(permission.default_value),
            overrides=overrides,
        )

    return MappingProxyType(entries)


def load_snapshot(payload: Union[bytes, str], app: str) -> PermissionSnapshot:
    """Parse ``payload`` and build the snapshot for ``app``.

    Raises:
        ParseError: If the payload is malformed
    """
    return build_snapshot(parse_permission_document(payload, app), app)
