"""Constants for permission-gate."""

# Polling
DEFAULT_UPDATE_INTERVAL_SECONDS = 60.0

# Responses
FORBIDDEN_STATUS_CODE = 403

# Log messages shared between the gate and its tests
MISSING_APP_MESSAGE = "Missing 'app' configuration parameter in permission client"
INVALID_S3_MESSAGE = "Invalid S3 configuration in permission client"
INVALID_SETTINGS_MESSAGE = "Invalid settings in permission client"
INVALID_STORAGE_MESSAGE = "Invalid storage client in permission client"
NOT_CONFIGURED_MESSAGE = "Permission client is not configured correctly"
MISSING_USER_MESSAGE = "Missing user in request state. Is your middleware authenticated?"
NOT_AUTHORIZED_MESSAGE = "User is not authorized"
