"""
Error Definitions

Exceptions raised by cache operations and the document store.
Callers treat NotFoundError as a cache miss; anything else is a failure.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Cache Base Exception

    Base class for all kvcache errors, carrying a message, type and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format (for logs or host process responses)

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class NotFoundError(AppError):
    """
    Record Not Found Error

    Raised when no document matches a key or filter. Expired records that
    were removed on read are reported the same way.
    """

    def __init__(
        self,
        message: str = "Record not found",
        code: str = "not_found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="not_found_error",
            code=code,
            details=details,
        )


class StoreError(AppError):
    """
    Document Store Error

    Raised when the backing store call fails (connectivity, serialization,
    constraint violation) or cannot express the requested filter. The
    original driver exception is chained as `__cause__`.
    """

    def __init__(
        self,
        message: str = "Document store error",
        code: str = "store_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="store_error",
            code=code,
            details=details,
        )
