"""Configuration module for permission-gate."""

from .constants import *  # noqa: F401,F403

from .settings import (
    PermissionGateSettings,
    get_settings,
)

from .logging_config import (
    setup_logging,
    get_logger,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    "DEFAULT_UPDATE_INTERVAL_SECONDS",
    "FORBIDDEN_STATUS_CODE",
    "PermissionGateSettings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
