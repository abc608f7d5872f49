"""
Permission client settings.

Environment-driven configuration for the permission gate. Every field is
optional at the settings level: a missing application name or S3 location
is reported by the gate factory, which fails closed instead of raising at
import time.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_UPDATE_INTERVAL_SECONDS


class PermissionGateSettings(BaseSettings):
    """Settings for one permission gate, read from PERMISSION_GATE_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="PERMISSION_GATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application whose permissions are served
    app: Optional[str] = Field(default=None)

    # S3 location of the permission document
    s3_bucket: Optional[str] = Field(default=None)
    s3_bucket_prefix: Optional[str] = Field(default=None)
    s3_permissions_file: Optional[str] = Field(default=None)
    s3_region: Optional[str] = Field(default=None)
    s3_endpoint_url: Optional[str] = Field(default=None)

    # Polling cadence in seconds; zero falls back to the default
    update_interval: float = Field(default=DEFAULT_UPDATE_INTERVAL_SECONDS, ge=0)

    # True answers denied requests with 403, False raises Unauthorized
    send_status: bool = Field(default=True)

    @property
    def has_s3_location(self) -> bool:
        """Check if bucket, prefix and file name are all configured."""
        return bool(self.s3_bucket and self.s3_bucket_prefix and self.s3_permissions_file)


@lru_cache()
def get_settings() -> PermissionGateSettings:
    """Get cached settings instance."""
    return PermissionGateSettings()
