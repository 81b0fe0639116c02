"""Errors raised by fragment validation, lookup and conversion.

Each carries a machine-readable error_code and a details dict. The HTTP
layer picks the status code from error_code (see app.core.exception_handlers).
"""

from typing import Any


class FragmentsException(Exception):
    """Base for every error the service raises on purpose.

    error_code defaults to the class name; details holds structured context
    such as the offending field or resource id.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Return the error envelope used in API responses."""
        return {
            "status": "error",
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FragmentsException):
    """Raised when input validation fails (e.g. missing owner or non-bytes data)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(FragmentsException):
    """Raised when no authenticated owner accompanies the request."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(FragmentsException):
    """Raised when a requested resource is not found for the calling owner.

    A resource owned by someone else is reported the same way as a missing one.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class UnsupportedTypeException(ValidationException):
    """Raised when a media type's base type is outside the supported set.

    A ValidationException, so callers validating construction input catch it
    too; error_code distinguishes it for the presentation layer.
    """

    def __init__(self, media_type: str) -> None:
        FragmentsException.__init__(
            self,
            f"Unsupported type: {media_type}",
            "UNSUPPORTED_TYPE",
            {"field": "type", "media_type": media_type},
        )


class ConversionUnsupportedException(FragmentsException):
    """Raised when data cannot be converted from source_type to target_type."""

    def __init__(self, source_type: str, target_type: str) -> None:
        """Initialize with both ends of the requested conversion.

        Args:
            source_type: Base type of the stored fragment.
            target_type: Requested representation.
        """
        super().__init__(
            f"Conversion from {source_type} to {target_type} is not supported",
            "CONVERSION_UNSUPPORTED",
            {"source_type": source_type, "target_type": target_type},
        )
