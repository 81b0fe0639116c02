"""Fragment store failures.

These are backend faults (disk, permissions, corrupt files), never a
missing fragment: stores report absence by returning None. The HTTP layer
turns every StorageException into a 500.
"""

from app.domain.exceptions import FragmentsException


class StorageException(FragmentsException):
    """Base exception for storage operations."""


class _StorageOperationError(StorageException):
    action = "access"
    code = "STORAGE_ERROR"

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to {self.action}: {storage_ref}",
            self.code,
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageWriteError(_StorageOperationError):
    action = "write"
    code = "STORAGE_WRITE_ERROR"


class StorageReadError(_StorageOperationError):
    """Reading failed for a reason other than the key being absent."""

    action = "read"
    code = "STORAGE_READ_ERROR"


class StorageDeleteError(_StorageOperationError):
    action = "delete"
    code = "STORAGE_DELETE_ERROR"


class StoragePermissionError(StorageException):
    """A fragment id that would resolve outside the storage root, or cannot name a file."""

    def __init__(self, storage_ref: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {storage_ref}",
            "STORAGE_PERMISSION_ERROR",
            {"storage_ref": storage_ref, "operation": operation},
        )
