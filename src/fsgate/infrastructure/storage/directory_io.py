"""Directory listing, creation and tree construction."""

from __future__ import annotations

import os
import stat
from typing import Any, Dict, List

from fsgate.domain.errors import map_os_error
from fsgate.domain.models import DIRECTORY, FILE, DirectoryEntry, TreeNode
from fsgate.infrastructure.storage.path_guard import AllowedRoots, resolve_path


SORT_BY_NAME = "name"
SORT_BY_SIZE = "size"


def _scan_sorted(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def _entry_type(entry: os.DirEntry) -> str:
    try:
        return DIRECTORY if entry.is_dir(follow_symlinks=False) else FILE
    except OSError:
        return FILE


def _read_entries(full_path: str, rel_path: str, operation: str, *, with_sizes: bool) -> List[DirectoryEntry]:
    try:
        scanned = _scan_sorted(full_path)
    except OSError as e:
        raise map_os_error(e, rel_path, operation)

    entries: List[DirectoryEntry] = []
    for entry in scanned:
        item = DirectoryEntry(name=entry.name, type=_entry_type(entry))
        if with_sizes:
            item.size = 0
            if not item.is_dir:
                try:
                    item.size = entry.stat().st_size
                except OSError:
                    pass
        entries.append(item)
    return entries


def list_directory(roots: AllowedRoots, path: str) -> Dict[str, Any]:
    """List direct children, tagged file or directory, in name order."""
    full_path = resolve_path(roots, path, operation="list")
    entries = _read_entries(full_path, path, "list", with_sizes=False)
    return {"entries": [entry.to_dict() for entry in entries]}


def list_directory_with_sizes(roots: AllowedRoots, path: str, sort_by: str = SORT_BY_NAME) -> Dict[str, Any]:
    """List direct children with byte sizes and totals.

    Args:
        roots: Allowed roots
        path: Directory to list
        sort_by: "size" sorts by descending size; anything else sorts by name

    Returns:
        Dict with entries, totalFiles, totalDirs, totalSize
    """
    full_path = resolve_path(roots, path, operation="list")
    entries = _read_entries(full_path, path, "list", with_sizes=True)

    if sort_by == SORT_BY_SIZE:
        entries.sort(key=lambda entry: entry.size or 0, reverse=True)
    else:
        entries.sort(key=lambda entry: entry.name)

    total_files = 0
    total_dirs = 0
    total_size = 0
    for entry in entries:
        if entry.is_dir:
            total_dirs += 1
        else:
            total_files += 1
            total_size += entry.size or 0

    return {
        "entries": [entry.to_dict() for entry in entries],
        "totalFiles": total_files,
        "totalDirs": total_dirs,
        "totalSize": total_size,
    }


def create_directory(roots: AllowedRoots, path: str) -> Dict[str, Any]:
    """Create a directory and any missing parents; existing is fine."""
    full_path = resolve_path(roots, path, operation="mkdir")
    try:
        os.makedirs(full_path, exist_ok=True)
    except OSError as e:
        raise map_os_error(e, path, "mkdir")
    return {"ok": True}


def build_tree(path: str) -> TreeNode:
    """Recursively build a tree rooted at `path`.

    Raises OSError when `path` itself cannot be read; failing subentries are
    left out of their parent's children.
    """
    st = os.stat(path)
    node = TreeNode(name=os.path.basename(path) or path, type=FILE)
    if not stat.S_ISDIR(st.st_mode):
        return node

    node.type = DIRECTORY
    node.children = []
    for entry in _scan_sorted(path):
        try:
            node.children.append(build_tree(entry.path))
        except OSError:
            continue
    return node


def directory_tree(roots: AllowedRoots, path: str) -> Dict[str, Any]:
    """Build the recursive tree for a directory."""
    full_path = resolve_path(roots, path, operation="tree")
    try:
        tree = build_tree(full_path)
    except OSError as e:
        raise map_os_error(e, path, "tree")
    return {"tree": tree.to_dict()}
