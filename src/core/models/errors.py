"""Custom exception classes for the asset deletion service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION_MISSING,
    ERROR_CODE_MESSAGE_DELETE_FAILED,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_METADATA_STORE,
    ERROR_CODE_OBJECT_STORE,
    ERROR_CODE_RESOURCE_NOT_FOUND,
)


class AssetServiceError(Exception):
    """
    Base exception for all asset service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
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


class NotFoundError(AssetServiceError):
    """Raised when no metadata record can be resolved for an identifier."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(AssetServiceError):
    """Raised when a required backend binding is not configured."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION_MISSING,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MetadataOperationFailedError(AssetServiceError):
    """Raised when a metadata record cannot be used for deletion."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_METADATA_OPERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MetadataStoreError(AssetServiceError):
    """Raised when a metadata store operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_METADATA_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ObjectStorageError(AssetServiceError):
    """Raised when an object storage operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_OBJECT_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MessageDeletionError(AssetServiceError):
    """Raised when the messaging backend cannot be reached."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_MESSAGE_DELETE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
