"""Domain models for fsgate."""

from .errors import (
    AccessDeniedError,
    AlreadyExistsError,
    ErrorKind,
    FileIOError,
    FsGateError,
    NotFoundError,
    map_os_error,
)
from .models import DIRECTORY, FILE, DirectoryEntry, EditOutcome, TextEdit, TreeNode

__all__ = [
    "AccessDeniedError",
    "AlreadyExistsError",
    "ErrorKind",
    "FileIOError",
    "FsGateError",
    "NotFoundError",
    "map_os_error",
    "DIRECTORY",
    "FILE",
    "DirectoryEntry",
    "EditOutcome",
    "TextEdit",
    "TreeNode",
]
