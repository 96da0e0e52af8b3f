"""Caller-facing result shape and exception-to-result mapping for stores."""
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from stock_watchlist.stores.exceptions import (ErrorKind, StorageUnavailable,
                                               StoreError)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Called with (operation, exception) whenever a store hits a storage failure.
ErrorListener = Callable[[str, Exception], None]


class OperationResult(BaseModel, Generic[T]):
    """Result of a mutating store operation: {success, error?, data?}.

    error_kind is kept for logging and HTTP status mapping only; it is not
    part of the serialized shape.
    """

    success: bool
    error: str | None = None
    data: T | None = None
    error_kind: ErrorKind | None = Field(default=None, exclude=True)

    @classmethod
    def ok(cls, data: T | None = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind) -> "OperationResult[T]":
        return cls(success=False, error=error, error_kind=kind)


@dataclass(frozen=True)
class StoreErrorMapper:
    """Maps exceptions raised inside a store operation to results or read defaults.

    Anything that is not one of the expected StoreError kinds is treated as
    StorageUnavailable: logged with its traceback and passed to the optional
    error_listener so operators can observe it even though callers only see a
    generic failure (or an empty read).
    """

    error_listener: ErrorListener | None = None

    def classify(self, operation: str, exc: Exception) -> StoreError:
        """Return the StoreError for exc, reporting storage failures."""
        if isinstance(exc, StoreError) and not isinstance(exc, StorageUnavailable):
            return exc
        logger.error("%s error: %s", operation, exc, exc_info=exc)
        if self.error_listener is not None:
            try:
                self.error_listener(operation, exc)
            except Exception:  # pylint: disable=broad-except
                logger.warning("Error listener failed for %s", operation, exc_info=True)
        return exc if isinstance(exc, StorageUnavailable) else StorageUnavailable(str(exc))

    def to_result(
        self, operation: str, exc: Exception, failure_message: str
    ) -> OperationResult:
        """Map exc to a failed OperationResult.

        Args:
            operation: Name used in logs (e.g. "createAlert").
            exc: The exception raised inside the operation.
            failure_message: Generic message shown for storage failures.
        """
        error = self.classify(operation, exc)
        if error.kind is ErrorKind.STORAGE_UNAVAILABLE:
            return OperationResult.fail(failure_message, error.kind)
        return OperationResult.fail(error.message, error.kind)

    def to_default(self, operation: str, exc: Exception, default: T) -> T:
        """Swallow exc for a read operation and return its empty default."""
        self.classify(operation, exc)
        return default


def http_status_for(result: OperationResult, success_status: int = 200) -> int:
    """HTTP status for a mutation result: 401 when anonymous, 400 for any other failure."""
    if result.success:
        return success_status
    if result.error_kind is ErrorKind.NOT_AUTHENTICATED:
        return 401
    return 400
