"""
Storage Infrastructure Exceptions

Domain-specific exceptions for durable store operations.
"""

from typing import Optional, Any, Dict


class StorageException(Exception):
    """Base exception for durable store errors.

    All store operations raise this or its subclasses.
    Original errors are preserved through exception chaining.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class StorageConnectionException(StorageException):
    """Raised when the store backend cannot be reached."""

    def __init__(
        self,
        message: str = "Durable store connection failed",
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if url:
            details["url"] = url
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(
            message=message, error_code="STORAGE_CONNECTION_ERROR", details=details
        )
        if original_error:
            self.__cause__ = original_error


class StorageQuotaExceededException(StorageException):
    """Raised when a write would exceed the store's capacity."""

    def __init__(self, key: str, required_bytes: int, quota_bytes: int):
        details = {
            "key": key,
            "required_bytes": required_bytes,
            "quota_bytes": quota_bytes,
        }

        super().__init__(
            message=f"Storage quota exceeded writing '{key}': "
            f"{required_bytes}/{quota_bytes} bytes",
            error_code="STORAGE_QUOTA_EXCEEDED",
            details=details,
        )


class StorageOperationException(StorageException):
    """Raised when a single store operation fails."""

    def __init__(
        self,
        operation: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {"operation": operation}
        if key:
            details["key"] = key
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(
            message=f"Storage operation '{operation}' failed",
            error_code="STORAGE_OPERATION_ERROR",
            details=details,
        )
        if original_error:
            self.__cause__ = original_error
