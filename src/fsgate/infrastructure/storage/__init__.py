"""Storage infrastructure for fsgate.

Provides path confinement and the filesystem operations built on it.
"""

from .path_guard import (
    AllowedRoots,
    clean_path,
    is_within_root,
    resolve_path,
    secure_join,
)
from .file_tools import (
    FileTools,
    ResultStatus,
    ToolResult,
)
from .edit_apply import apply_edits, edit_file
from .search import NO_MATCHES_TEXT, iter_matches, search_files

__all__ = [
    # Path guard
    "AllowedRoots",
    "clean_path",
    "is_within_root",
    "resolve_path",
    "secure_join",
    # File tools (main API)
    "FileTools",
    "ResultStatus",
    "ToolResult",
    # Edit
    "apply_edits",
    "edit_file",
    # Search
    "NO_MATCHES_TEXT",
    "iter_matches",
    "search_files",
]
