"""Line-based literal edits with a flat diff.

Each edit replaces every occurrence of its old text on every line that
contains it. The diff records one ``-before`` / ``+after`` pair per line that
actually changed, in edit-then-line order, and a ``~ not found`` annotation
for edits whose old text appears on no line. It is not a minimal unified diff.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Sequence

from fsgate.domain.errors import map_os_error
from fsgate.domain.models import EditOutcome, TextEdit
from fsgate.infrastructure.storage.io_text import (
    LOSSLESS_ERRORS,
    display_text,
    read_text,
    write_text_atomic,
)
from fsgate.infrastructure.storage.path_guard import AllowedRoots, resolve_path


def not_found_annotation(old_text: str) -> str:
    return f"~ not found: {json.dumps(old_text, ensure_ascii=False)}"


def apply_edits(lines: Sequence[str], edits: Iterable[TextEdit]) -> EditOutcome:
    """Apply edits in order to a copy of `lines`."""
    outcome = EditOutcome(lines=list(lines))
    for edit in edits:
        matched = False
        for index, line in enumerate(outcome.lines):
            if edit.old_text not in line:
                continue
            matched = True
            updated = line.replace(edit.old_text, edit.new_text)
            if updated == line:
                continue
            outcome.lines[index] = updated
            outcome.changed = True
            outcome.diff.append(f"-{line}")
            outcome.diff.append(f"+{updated}")
        if not matched:
            outcome.diff.append(not_found_annotation(edit.old_text))
    return outcome


def edit_file(
    roots: AllowedRoots,
    path: str,
    edits: Sequence[TextEdit],
    *,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """Apply edits to a file.

    Args:
        roots: Allowed roots
        path: File to edit
        edits: Ordered literal replacements
        dry_run: Return the edited content as ``preview`` without writing

    Returns:
        Dict with diff and changed; preview on dry runs, otherwise ok
        (False when nothing changed and the file was left alone)
    """
    full_path = resolve_path(roots, path, operation="edit")
    try:
        original = read_text(full_path, errors=LOSSLESS_ERRORS)
    except OSError as e:
        raise map_os_error(e, path, "edit")

    outcome = apply_edits(original.split("\n"), edits)
    result: Dict[str, Any] = {
        "diff": display_text(outcome.diff_text),
        "changed": outcome.changed,
    }

    if dry_run:
        result["preview"] = display_text(outcome.content)
        return result

    if not outcome.changed:
        result["ok"] = False
        return result

    try:
        write_text_atomic(full_path, outcome.content, errors=LOSSLESS_ERRORS)
    except (OSError, ValueError) as e:
        raise map_os_error(e, path, "edit")
    result["ok"] = True
    return result

