"""Text file helpers."""

from __future__ import annotations

import os
import stat
import tempfile

from fsgate.config import settings

# Lossless codec for read-modify-write: undecodable bytes survive the round trip.
LOSSLESS_ERRORS = "surrogateescape"

_UMASK = os.umask(0)
os.umask(_UMASK)


def decode_text_bytes(data: bytes, errors: str = "replace") -> str:
    """Decode bytes to text; `errors` controls undecodable sequences."""
    if not data:
        return ""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors=errors)


def display_text(text: str) -> str:
    """Make losslessly decoded text safe to serialize, using U+FFFD."""
    try:
        raw = text.encode("utf-8", LOSSLESS_ERRORS)
    except UnicodeEncodeError:
        raw = text.encode("utf-8", errors="replace")
    return raw.decode("utf-8", errors="replace")


def read_text(path: str, *, errors: str = "replace") -> str:
    """Read a whole file as text. OSError propagates to the caller."""
    with open(path, "rb") as handle:
        return decode_text_bytes(handle.read(), errors)


def write_text_atomic(path: str, text: str, *, errors: str = "strict") -> None:
    """Write text via a unique sibling temp file and replace.

    A symlink is written through to its target. An existing file keeps its
    permission bits; a new one gets the default mode for the process umask.
    The parent directory must already exist.
    """
    target = os.path.realpath(path) if os.path.islink(path) else path
    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        mode = 0o666 & ~_UMASK

    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(target)}.",
        suffix=".tmp",
        dir=os.path.dirname(target) or ".",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors=errors, newline="") as handle:
            handle.write(text or "")
            handle.flush()
            if settings.io_fsync:
                os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except (OSError, ValueError):
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
