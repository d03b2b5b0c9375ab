"""
Custom exceptions for the retail admin domain.

Remote-service failures that are not transport-level unreachability, and
storage failures on the fallback path, surface through this hierarchy.
"""

from typing import Any, Dict, Optional


class RetailAdminException(Exception):
    """Base exception for all retail admin service errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class RemoteServiceError(RetailAdminException):
    """Raised when the Functions API answers with a non-success status."""

    def __init__(
        self,
        operation: str,
        status_code: int,
        body: Optional[str] = None,
    ):
        self.operation = operation
        self.status_code = status_code
        self.body = body or ""
        message = f"Functions API returned {status_code} for {operation}"
        super().__init__(
            message=message,
            details={
                "operation": operation,
                "status_code": status_code,
                "body": self.body[:500],
            },
        )


class StorageBackendError(RetailAdminException):
    """Raised when a storage backend operation fails."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Storage {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )


class EntityConflictError(StorageBackendError):
    """Raised when adding an entity whose key already exists."""

    def __init__(self, partition: str, row_key: str):
        self.partition = partition
        self.row_key = row_key
        super().__init__(
            operation="add",
            reason=f"entity {partition}/{row_key} already exists",
        )
        self.details.update({"partition": partition, "row_key": row_key})
