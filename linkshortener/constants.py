from enum import StrEnum


class LinkDefaults:
    """Default values for short link creation and bookkeeping."""

    VALIDITY_MINUTES = 30  # Validity window applied when none is requested
    SHORTCODE_LENGTH = 7  # Length of generated shortcodes
    MAX_BATCH_SIZE = 5  # Maximum number of links created per request
    MAX_GENERATION_ATTEMPTS = 100  # Bounded retries for non-colliding shortcodes
    MAX_TRANSACTION_RETRIES = 5  # Optimistic locking retries on concurrent writes
    LOG_CAPACITY = 1000  # Number of most recent event log entries kept


class StoreKey:
    """Fixed keys under which blobs are stored (before app prefixing)."""

    LINKS = 'links'
    LOGS = 'logs'


class LogEvent(StrEnum):
    """Event names written to the diagnostic event log."""

    SHORT_CREATED = 'short_created'
    VALIDATION_ERROR = 'validation_error'
    REDIRECT_CLICK = 'redirect_click'
    REDIRECT_FAILED = 'redirect_failed'
    PURGE_EXPIRED = 'purge_expired'
    COPIED = 'copied'


class ValidationReason(StrEnum):
    """Reasons attached to `validation_error` events."""

    INVALID_URL = 'invalid_url'
    INVALID_VALIDITY = 'invalid_validity'
    INVALID_SHORTCODE = 'invalid_shortcode'
    COLLISION = 'collision'
    INVALID_BATCH_SIZE = 'invalid_batch_size'


class Backend(StrEnum):
    REDIS = 'redis'
    MEMORY = 'memory'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
