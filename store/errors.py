# store/errors.py
from typing import Any, Dict, Optional


class StoreError(Exception):
    """Base class for anything the document store can fail with."""


class AccessDeniedError(StoreError):
    """Raised by a store when its access rules reject an operation."""


class DocumentMissingError(StoreError):
    """Raised by a store when a merge targets a document that does not exist."""


class ReadError(StoreError):
    """A list/get failed. Always raised to the caller."""

    def __init__(self, path: str, operation: str, cause: Optional[BaseException] = None):
        self.path = path
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} on '{path}' failed: {cause!r}")


class _WriteError(StoreError):
    kind = "write"

    def __init__(self, path: str, operation: str, attempted_data: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        self.path = path
        self.operation = operation
        self.attempted_data = attempted_data
        self.cause = cause
        super().__init__(f"{self.kind} error: {operation} on '{path}'")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "operation": self.operation,
            "attemptedData": self.attempted_data,
        }


class FirestorePermissionError(_WriteError):
    """A write rejected by store-side access rules. Published, not thrown."""
    kind = "permission"


class WriteFailedError(_WriteError):
    """Any other write failure (transport, missing document)."""
    kind = "failed"
