"""
Exceptions for the Files API.

Every failure raised by the storage service carries an ErrorKind. Callers
(the exception handler in main.py, tests) match on ``exc.kind`` rather than
on the concrete class.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """The three failure categories of the storage service"""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


class FileServiceError(Exception):
    """Base error raised by the file storage service."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(FileServiceError):
    """Client input problem: empty file, oversized file, disallowed extension."""

    kind = ErrorKind.VALIDATION


class NotFoundError(FileServiceError):
    """Record or stored file is absent."""

    kind = ErrorKind.NOT_FOUND


class StorageError(FileServiceError):
    """Filesystem failure or path traversal attempt."""

    kind = ErrorKind.STORAGE
