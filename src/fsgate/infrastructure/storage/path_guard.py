"""Path confinement against an allow-list of root directories.

Resolution is purely lexical: `.` and `..` segments are collapsed without
touching the filesystem and symlinks are not followed before the containment
check. A path is inside a root when it equals the root or starts with the
root followed by a path separator, so `/data-old` never matches `/data`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

from fsgate.domain.errors import AccessDeniedError


ACCESS_DENIED_MESSAGE = "access outside of allowed directories is not allowed"
NUL_BYTE_MESSAGE = "path contains a NUL byte"


def clean_path(path: str | Path) -> str:
    """Collapse redundant separators and `.`/`..` segments lexically."""
    return os.path.normpath(str(path))


def is_within_root(root: str, path: str) -> bool:
    """Return True if cleaned `path` is `root` or a strict descendant of it."""
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


def secure_join(root: str, rel: str) -> Optional[str]:
    """Join `rel` onto `root`; None if the result escapes `root`."""
    joined = os.path.abspath(clean_path(os.path.join(root, rel)))
    if not is_within_root(root, joined):
        return None
    return joined


@dataclass(frozen=True)
class AllowedRoots:
    """Ordered, immutable allow-list of absolute, cleaned directories.

    Order only matters as a tie-break for relative paths: the first root
    that can contain the path wins.
    """

    roots: Tuple[str, ...]

    @classmethod
    def from_paths(cls, paths: Iterable[str | Path]) -> "AllowedRoots":
        cleaned = []
        for raw in paths:
            value = str(raw or "").strip()
            if not value:
                continue
            root = os.path.abspath(clean_path(os.path.expanduser(value)))
            if root not in cleaned:
                cleaned.append(root)
        if not cleaned:
            raise ValueError("at least one allowed directory is required")
        return cls(tuple(cleaned))

    def __iter__(self) -> Iterator[str]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)

    def contains(self, path: str) -> bool:
        """Check an already-absolute path against every root."""
        candidate = clean_path(path)
        return any(is_within_root(root, candidate) for root in self.roots)

    def as_list(self) -> list[str]:
        return list(self.roots)


def resolve_path(roots: AllowedRoots, requested: str, *, operation: str = "") -> str:
    """Resolve a client-supplied path to an absolute path inside `roots`.

    Absolute inputs are matched directly against the root list. Relative
    inputs are joined onto each root in order and the first join that stays
    inside its own root is returned.

    Raises:
        AccessDeniedError: if no root contains the path, or the path holds
            a NUL byte no filesystem call can accept.
    """
    if "\x00" in requested:
        raise AccessDeniedError(NUL_BYTE_MESSAGE, requested.replace("\x00", "\\x00"), operation)
    cleaned = clean_path(requested)
    if os.path.isabs(cleaned):
        for root in roots:
            if is_within_root(root, cleaned):
                return cleaned
        raise AccessDeniedError(ACCESS_DENIED_MESSAGE, requested, operation)

    for root in roots:
        joined = secure_join(root, cleaned)
        if joined is not None:
            return joined
    raise AccessDeniedError(ACCESS_DENIED_MESSAGE, requested, operation)
