"""Recursive glob search below a resolved start directory.

Patterns use `fnmatch` semantics, case-sensitive: `*`, `?`, `[seq]` and
`[!seq]`. The name pattern is matched against each entry's base name; exclude
patterns are matched against the path relative to the start directory. `*`
may span separators there, so `build/*` excludes everything under `build`.
"""

from __future__ import annotations

import fnmatch
import os
from typing import Any, Dict, Iterator, List, Optional, Sequence

from fsgate.infrastructure.storage.file_io import text_content
from fsgate.infrastructure.storage.path_guard import AllowedRoots, resolve_path


NO_MATCHES_TEXT = "No matches found"


def walk_entries(start: str) -> Iterator[os.DirEntry]:
    """Yield every entry below `start` depth-first in name order.

    Symlinked directories are not descended into. Unreadable directories
    are skipped.
    """
    try:
        with os.scandir(start) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        yield entry
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue
        if is_dir:
            yield from walk_entries(entry.path)


def is_excluded(rel_path: str, exclude_patterns: Sequence[str]) -> bool:
    return any(fnmatch.fnmatchcase(rel_path, pattern) for pattern in exclude_patterns)


def iter_matches(
    roots: AllowedRoots,
    start: str,
    pattern: str,
    exclude_patterns: Sequence[str] = (),
) -> Iterator[str]:
    """Lazily yield start-relative paths whose base name matches `pattern`."""
    for entry in walk_entries(start):
        # Recheck every candidate; the walk must never surface a path outside the roots.
        if not roots.contains(entry.path):
            continue
        rel_path = os.path.relpath(entry.path, start)
        if not fnmatch.fnmatchcase(entry.name, pattern):
            continue
        if is_excluded(rel_path, exclude_patterns):
            continue
        yield rel_path


def search_files(
    roots: AllowedRoots,
    path: str,
    pattern: str,
    exclude_patterns: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Search recursively for entries whose name matches a glob.

    Raises AccessDeniedError like every other operation; callers decide how
    to surface it.

    Returns:
        Dict with content, newline-joined matches or "No matches found"
    """
    start = resolve_path(roots, path, operation="search")

    matches: List[str] = list(iter_matches(roots, start, pattern, exclude_patterns or ()))
    text = "\n".join(matches) if matches else NO_MATCHES_TEXT
    return {"content": text_content(text)}
