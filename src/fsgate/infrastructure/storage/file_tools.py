"""Unified file tools API for fsgate.

Exposes every filesystem operation against one immutable `AllowedRoots`
value and reports the outcome as a tagged `ToolResult`:

- ``ok``          the operation's result payload
- ``soft_error``  a normal-looking payload carrying error text (search only)
- ``hard_error``  a failure the transport must surface as an error

Examples:
    >>> from fsgate.infrastructure.storage.file_tools import FileTools
    >>> from fsgate.infrastructure.storage.path_guard import AllowedRoots
    >>> from fsgate.domain.models import TextEdit
    >>> tools = FileTools(AllowedRoots.from_paths(["/srv/data"]))
    >>> tools.read_file("notes/todo.txt")
    >>> tools.search_files(".", "*.py", exclude_patterns=["build/*"])
    >>> tools.edit_file("app.py", [TextEdit("foo", "bar")], dry_run=True)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from fsgate.domain.errors import AccessDeniedError, ErrorKind, FsGateError
from fsgate.domain.models import TextEdit
from fsgate.infrastructure.storage import directory_io, edit_apply, file_io, search
from fsgate.infrastructure.storage.file_io import text_content
from fsgate.infrastructure.storage.path_guard import AllowedRoots


class ResultStatus(str, Enum):
    OK = "ok"
    SOFT_ERROR = "soft_error"
    HARD_ERROR = "hard_error"


@dataclass(frozen=True)
class ToolResult:
    """Result of a file tool operation."""

    status: ResultStatus
    payload: Dict[str, Any] = field(default_factory=dict)
    error: str = ""
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, payload: Dict[str, Any]) -> "ToolResult":
        return cls(status=ResultStatus.OK, payload=payload)

    @classmethod
    def soft_error(cls, message: str) -> "ToolResult":
        payload = {"content": text_content(f"Error: {message}"), "isError": True}
        return cls(status=ResultStatus.SOFT_ERROR, payload=payload, error=message)

    @classmethod
    def hard_error(cls, kind: ErrorKind, message: str) -> "ToolResult":
        return cls(status=ResultStatus.HARD_ERROR, error=message, kind=kind)

    @classmethod
    def from_error(cls, exc: FsGateError) -> "ToolResult":
        return cls.hard_error(exc.kind, str(exc))

    @property
    def success(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def is_error(self) -> bool:
        return self.status != ResultStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to its wire mapping."""
        if self.status == ResultStatus.HARD_ERROR:
            kind = self.kind.value if self.kind else ErrorKind.IO_ERROR.value
            return {"error": self.error, "kind": kind}
        return dict(self.payload)


class FileTools:
    """Filesystem tools confined to a fixed set of allowed roots."""

    def __init__(self, roots: AllowedRoots):
        self.roots = roots

    def _call(self, operation: Callable[..., Dict[str, Any]], *args: Any, **kwargs: Any) -> ToolResult:
        try:
            return ToolResult.ok(operation(self.roots, *args, **kwargs))
        except FsGateError as e:
            return ToolResult.from_error(e)

    # -------------------------------------------------------------------------
    # Directory Operations
    # -------------------------------------------------------------------------

    def list_directory(self, path: str) -> ToolResult:
        return self._call(directory_io.list_directory, path)

    def list_directory_with_sizes(self, path: str, sort_by: str = directory_io.SORT_BY_NAME) -> ToolResult:
        return self._call(directory_io.list_directory_with_sizes, path, sort_by)

    def create_directory(self, path: str) -> ToolResult:
        return self._call(directory_io.create_directory, path)

    def directory_tree(self, path: str) -> ToolResult:
        return self._call(directory_io.directory_tree, path)

    def list_allowed_directories(self) -> ToolResult:
        return ToolResult.ok(file_io.list_allowed_directories(self.roots))

    # -------------------------------------------------------------------------
    # File Operations
    # -------------------------------------------------------------------------

    def read_file(self, path: str) -> ToolResult:
        return self._call(file_io.read_file, path)

    def write_file(self, path: str, content: str) -> ToolResult:
        return self._call(file_io.write_file, path, content)

    def read_multiple_files(self, paths: Sequence[str]) -> ToolResult:
        return self._call(file_io.read_multiple_files, paths)

    def get_file_info(self, path: str) -> ToolResult:
        return self._call(file_io.get_file_info, path)

    def move_file(self, source: str, destination: str) -> ToolResult:
        return self._call(file_io.move_file, source, destination)

    def delete_file(self, path: str) -> ToolResult:
        return self._call(file_io.delete_file, path)

    # -------------------------------------------------------------------------
    # Search and Edit
    # -------------------------------------------------------------------------

    def search_files(
        self,
        path: str,
        pattern: str,
        exclude_patterns: Optional[Sequence[str]] = None,
    ) -> ToolResult:
        """Search for entries whose base name matches `pattern`.

        A start path outside the allowed roots comes back as a soft error
        (``isError`` set in the payload) rather than a hard failure.
        """
        try:
            data = search.search_files(self.roots, path, pattern, exclude_patterns)
        except AccessDeniedError as e:
            return ToolResult.soft_error(str(e))
        except FsGateError as e:
            return ToolResult.from_error(e)
        return ToolResult.ok(data)

    def edit_file(self, path: str, edits: Sequence[TextEdit], *, dry_run: bool = False) -> ToolResult:
        return self._call(edit_apply.edit_file, path, edits, dry_run=dry_run)


__all__ = [
    "FileTools",
    "ResultStatus",
    "ToolResult",
]
