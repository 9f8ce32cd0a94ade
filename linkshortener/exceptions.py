"""Application-level exceptions.

Every exception carries an `error_code` which lambda handlers echo back to
clients in the `errorCode` field of error responses.

Classes:
    LinkShortenerError:
        Base class for all application-specific errors.
    ValidationError:
        Base class for rejected link creation requests. Carries the 1-based
        `row` of the offending draft and the rejected `value`.
    InvalidURLError, InvalidValidityError, InvalidShortcodeError,
    ShortcodeCollisionError, BatchSizeError:
        Concrete validation failures.
    ExhaustedCodeSpaceError:
        Raised when no free shortcode could be generated within the retry bound.
    ConfigurationError, MissingEnvironmentVariableError, BadConfigurationError:
        Configuration problems.
"""

from typing import Any

from linkshortener.constants import ValidationReason


class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'LINK_SHORTENER_ERROR'


class ValidationError(LinkShortenerError):
    """Base exception for rejected link drafts."""

    error_code = 'VALIDATION_ERROR'
    reason: ValidationReason | None = None

    def __init__(self, message: str = '', *, row: int | None = None, value: Any = None):
        super().__init__(message)
        self.row = row
        self.value = value


class InvalidURLError(ValidationError):
    """Raised when a long URL is not a valid http(s) URL."""

    error_code = 'INVALID_URL'
    reason = ValidationReason.INVALID_URL


class InvalidValidityError(ValidationError):
    """Raised when a validity window is not a positive integer of minutes."""

    error_code = 'INVALID_VALIDITY'
    reason = ValidationReason.INVALID_VALIDITY


class InvalidShortcodeError(ValidationError):
    """Raised when a custom shortcode is not 3-15 alphanumeric characters."""

    error_code = 'INVALID_SHORTCODE'
    reason = ValidationReason.INVALID_SHORTCODE


class ShortcodeCollisionError(ValidationError):
    """Raised when a custom shortcode is already used by a stored link."""

    error_code = 'SHORTCODE_COLLISION'
    reason = ValidationReason.COLLISION


class BatchSizeError(ValidationError):
    """Raised when a batch is empty or holds more drafts than allowed."""

    error_code = 'INVALID_BATCH_SIZE'
    reason = ValidationReason.INVALID_BATCH_SIZE


class ExhaustedCodeSpaceError(LinkShortenerError):
    """Raised when shortcode generation keeps colliding with stored links."""

    error_code = 'EXHAUSTED_CODE_SPACE'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'CONFIGURATION_ERROR'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'MISSING_ENVIRONMENT_VARIABLE'


class BadConfigurationError(ConfigurationError, ValueError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'BAD_CONFIGURATION'
