"""Time utility helpers.

Filesystem timestamps are rendered as RFC 3339 strings in the local timezone,
with second precision and an explicit offset.
"""

from __future__ import annotations

from datetime import datetime, timezone


def timestamp_to_iso(ts: float) -> str:
    """Render a POSIX timestamp as a local, offset-aware ISO-8601 string."""
    moment = datetime.fromtimestamp(ts, timezone.utc).astimezone()
    return moment.isoformat(timespec="seconds")
