"""File operations confined to the allowed roots.

Every function resolves its path argument(s) first and only touches the
filesystem on success. Failures raise `FsGateError` subclasses; only
`read_multiple_files` records per-path failures inline.
"""

from __future__ import annotations

import os
import shutil
import stat
from typing import Any, Dict, List, Sequence

from fsgate.domain.errors import (
    AccessDeniedError,
    AlreadyExistsError,
    FsGateError,
    NotFoundError,
    map_os_error,
)
from fsgate.infrastructure.storage.io_text import read_text, write_text_atomic
from fsgate.infrastructure.storage.path_guard import AllowedRoots, resolve_path
from fsgate.infrastructure.time_utils import timestamp_to_iso


MULTI_FILE_SEPARATOR = "\n---\n"


def text_content(text: str) -> List[Dict[str, Any]]:
    """Build a single-item text content list."""
    return [{"type": "text", "text": text}]


def read_file(roots: AllowedRoots, path: str) -> Dict[str, Any]:
    """Read a whole file as text.

    Returns:
        Dict with content
    """
    full_path = resolve_path(roots, path, operation="read")
    try:
        content = read_text(full_path)
    except OSError as e:
        raise map_os_error(e, path, "read")
    return {"content": content}


def write_file(roots: AllowedRoots, path: str, content: str) -> Dict[str, Any]:
    """Create or overwrite a file; the parent directory must exist."""
    full_path = resolve_path(roots, path, operation="write")
    try:
        write_text_atomic(full_path, content)
    except (OSError, ValueError) as e:
        raise map_os_error(e, path, "write")
    return {"ok": True}


def read_multiple_files(roots: AllowedRoots, paths: Sequence[str]) -> Dict[str, Any]:
    """Read several files into one text payload.

    Each section is ``"<path>:\\n<content>"`` or ``"<path>: Error - <reason>"``;
    sections are joined with a ``---`` line. One bad path never aborts the
    batch.
    """
    sections: List[str] = []
    for path in paths:
        try:
            data = read_file(roots, path)
        except FsGateError as e:
            sections.append(f"{path}: Error - {e.message}")
            continue
        sections.append(f"{path}:\n{data['content']}")
    return {"content": text_content(MULTI_FILE_SEPARATOR.join(sections))}


def get_file_info(roots: AllowedRoots, path: str) -> Dict[str, Any]:
    """Stat a file or directory.

    Creation time falls back to the modification time where the platform
    does not record a birth time.
    """
    full_path = resolve_path(roots, path, operation="stat")
    try:
        st = os.stat(full_path)
    except OSError as e:
        raise map_os_error(e, path, "stat")

    mod_time = timestamp_to_iso(st.st_mtime)
    birth = getattr(st, "st_birthtime", None)
    return {
        "size": st.st_size,
        "mode": stat.filemode(st.st_mode),
        "modTime": mod_time,
        "isDir": stat.S_ISDIR(st.st_mode),
        "name": os.path.basename(full_path) or full_path,
        "creationTime": timestamp_to_iso(birth) if birth else mod_time,
        "accessTime": timestamp_to_iso(st.st_atime),
        "permissions": "-" + stat.filemode(st.st_mode & 0o777)[1:],
    }


def move_file(roots: AllowedRoots, source: str, destination: str) -> Dict[str, Any]:
    """Rename `source` to `destination`; never overwrites."""
    src = resolve_path(roots, source, operation="move")
    dst = resolve_path(roots, destination, operation="move")
    if os.path.lexists(dst):
        raise AlreadyExistsError("destination already exists", destination, "move")
    try:
        os.rename(src, dst)
    except OSError as e:
        raise map_os_error(e, source, "move")
    return {"ok": True}


def delete_file(roots: AllowedRoots, path: str) -> Dict[str, Any]:
    """Remove a file, or a directory recursively."""
    full_path = resolve_path(roots, path, operation="delete")
    if full_path in roots.roots:
        raise AccessDeniedError("cannot delete an allowed root directory", path, "delete")
    if not os.path.lexists(full_path):
        raise NotFoundError("file does not exist", path, "delete")
    try:
        if os.path.isdir(full_path) and not os.path.islink(full_path):
            shutil.rmtree(full_path)
        else:
            os.remove(full_path)
    except OSError as e:
        raise map_os_error(e, path, "delete")
    return {"ok": True}


def list_allowed_directories(roots: AllowedRoots) -> Dict[str, Any]:
    return {"directories": roots.as_list()}
