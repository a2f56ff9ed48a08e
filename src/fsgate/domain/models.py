"""Value objects produced by directory and edit operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

FILE = "file"
DIRECTORY = "directory"


@dataclass
class DirectoryEntry:
    """One child of a listed directory."""

    name: str
    type: str
    size: Optional[int] = None

    @property
    def is_dir(self) -> bool:
        return self.type == DIRECTORY

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.size is not None:
            data["size"] = self.size
        return data


@dataclass
class TreeNode:
    """Recursive directory tree node.

    Directories always carry a ``children`` list (possibly empty); files carry
    ``None`` and render without the key.
    """

    name: str
    type: str
    children: Optional[List["TreeNode"]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(frozen=True)
class TextEdit:
    """Literal old-text to new-text replacement."""

    old_text: str
    new_text: str


@dataclass
class EditOutcome:
    """Result of applying an ordered list of edits to a line sequence."""

    lines: List[str]
    diff: List[str] = field(default_factory=list)
    changed: bool = False

    @property
    def content(self) -> str:
        return "\n".join(self.lines)

    @property
    def diff_text(self) -> str:
        return "".join(f"{line}\n" for line in self.diff)
