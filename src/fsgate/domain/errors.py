"""Domain errors."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced to the transport."""

    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    IO_ERROR = "io_error"
    INVALID_ARGUMENTS = "invalid_arguments"
    UNKNOWN_TOOL = "unknown_tool"


class FsGateError(Exception):
    """Base error with operation context."""

    kind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: str = "", operation: str = ""):
        self.message = message
        self.path = path
        self.operation = operation
        if operation:
            super().__init__(f"[{operation}] {path}: {message}")
        else:
            super().__init__(message)


class AccessDeniedError(FsGateError):
    """Path resolves outside every allowed root."""

    kind = ErrorKind.ACCESS_DENIED


class NotFoundError(FsGateError):
    """Target does not exist."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(FsGateError):
    """Target already exists."""

    kind = ErrorKind.ALREADY_EXISTS


class FileIOError(FsGateError):
    """Underlying read/write/stat/rename failure."""

    kind = ErrorKind.IO_ERROR


def map_os_error(exc: OSError | ValueError, path: str = "", operation: str = "") -> FsGateError:
    """Translate an OSError (or a text encoding ValueError) into a domain error."""
    message = getattr(exc, "strerror", None) or str(exc)
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(message, path, operation)
    if isinstance(exc, FileExistsError):
        return AlreadyExistsError(message, path, operation)
    return FileIOError(message, path, operation)
