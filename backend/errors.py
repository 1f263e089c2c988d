"""
Error taxonomy shared by the storage, reconciliation and service layers.

Input validation errors are plain `ValueError`s raised by the service.
Backend failures are never retried here; they carry the backend's own
exception as `.cause` so the HTTP layer can report it verbatim.
"""

from typing import Any, List, Optional


class StorageError(Exception):
    """Base class for storage backend failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class StorageWriteFailed(StorageError):
    """Write rejected. `node_errors` holds what each failing node reported."""

    def __init__(self, message: str, cause: Optional[BaseException] = None, node_errors: Optional[List[Any]] = None):
        super().__init__(message, cause)
        self.node_errors = node_errors or []


class StorageReadFailed(StorageError):
    pass


class MalformedRecord(Exception):
    """A single raw record could not be decoded. Callers drop it."""

    def __init__(self, message: str, raw: Any = None):
        super().__init__(message)
        self.raw = raw


class NoRecords(Exception):
    """The collection holds no records at all."""
