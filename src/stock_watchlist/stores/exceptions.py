"""Error kinds raised inside store operations.

They never escape a public store method: mutations turn them into a failed
OperationResult and reads into an empty default.
"""
from enum import Enum


class ErrorKind(str, Enum):
    NOT_AUTHENTICATED = "not_authenticated"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class StoreError(Exception):
    """Base class for store failures. `message` is safe to show to callers."""

    kind: ErrorKind = ErrorKind.STORAGE_UNAVAILABLE
    default_message = "Operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotAuthenticated(StoreError):
    kind = ErrorKind.NOT_AUTHENTICATED
    default_message = "Not authenticated"


class InvalidInput(StoreError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid data"


class NotFound(StoreError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class StorageUnavailable(StoreError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
    default_message = "Storage unavailable"
