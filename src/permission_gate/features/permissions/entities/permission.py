"""Permission cache entries.

A PermissionEntry is one row of a store snapshot: the default value of a
named permission plus the per-user overrides that supersede it.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class PermissionEntry:
    """Immutable cached permission with per-user overrides."""

    default_value: bool = False
    overrides: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the overrides so a published snapshot cannot change underneath readers
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    def resolve(self, user_id: Optional[str]) -> bool:
        """Resolve the permission for a user: override first, then the default."""
        if user_id is not None and user_id in self.overrides:
            return bool(self.overrides[user_id])
        return bool(self.default_value)

    def to_dict(self) -> Dict[str, object]:
        """Plain representation used for introspection."""
        return {
            "default_value": self.default_value,
            "overrides": dict(self.overrides),
        }


PermissionSnapshot = Mapping[str, PermissionEntry]

EMPTY_SNAPSHOT: PermissionSnapshot = MappingProxyType({})
