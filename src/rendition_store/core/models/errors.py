"""Custom exception classes for the rendition store."""

from typing import Any

from rendition_store.core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_TRANSCODE_FAILED,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    ERROR_CODE_VISION_SERVICE,
)


class RenditionServiceError(Exception):
    """
    Base exception for all rendition store errors.

    All custom errors must inherit from this class.
    Callers provide a message; subclasses supply a default error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(RenditionServiceError):
    """Raised when an upload request is malformed."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class ConfigurationError(RenditionServiceError):
    """Raised when the client configuration cannot serve a request."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class MIMETypeError(ConfigurationError):
    """Raised when a content type has no known file extension."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class StorageError(RenditionServiceError):
    """Raised when an object store operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class NotFoundError(StorageError):
    """Raised when a requested object does not exist."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class TranscodeError(RenditionServiceError):
    """Raised when the external image converter fails, stalls or says nothing."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_TRANSCODE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class VisionServiceError(RenditionServiceError):
    """Raised inside the vision adapter; never escapes it."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VISION_SERVICE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)
