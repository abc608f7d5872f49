"""Wire models for the permission document stored in S3.

The document is a JSON array of records::

    [
      {
        "permission": {"name": "...", "app": "...", "defaultValue": true},
        "overrides": [{"userId": "...", "active": false}]
      }
    ]

Unknown fields are ignored and a missing ``overrides`` list is empty.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PermissionOverride(BaseModel):
    """Per-user override of a permission's default value."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(alias="userId")
    active: Optional[bool] = None


class PermissionDefinition(BaseModel):
    """Named permission belonging to one application."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    app: str
    default_value: Optional[bool] = Field(default=None, alias="defaultValue")


class PermissionRecord(BaseModel):
    """One entry of the permission document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    permission: PermissionDefinition
    overrides: Optional[List[PermissionOverride]] = None
