"""Tool contract definitions for fsgate.

Defines the operation catalogue: categories, aliases, argument models and
validation. Argument models accept the camelCase wire names (``sortBy``,
``excludePatterns``, ``dryRun``, ``oldText``, ``newText``) as well as their
snake_case field names.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fsgate.domain.models import TextEdit


# ---------------------------------------------------------------------------
# Argument models
# ---------------------------------------------------------------------------


class ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NoArgs(ToolArgs):
    pass


class PathArgs(ToolArgs):
    path: str = Field(description="Path relative to an allowed directory, or absolute")


class ListDirectoryWithSizesArgs(PathArgs):
    sort_by: Optional[str] = Field(
        default=None,
        alias="sortBy",
        description="Sort entries by name or size (name|size)",
    )


class WriteFileArgs(PathArgs):
    content: str = Field(description="File content")


class MoveFileArgs(ToolArgs):
    source: str = Field(description="Source path")
    destination: str = Field(description="Destination path")


class SearchFilesArgs(PathArgs):
    pattern: str = Field(description="Glob matched against entry names")
    exclude_patterns: Optional[List[str]] = Field(
        default=None,
        alias="excludePatterns",
        description="Globs matched against paths relative to the start directory",
    )


class ReadMultipleFilesArgs(ToolArgs):
    paths: Optional[List[str]] = Field(default=None, description="Files to read")


class EditSpec(ToolArgs):
    old_text: str = Field(alias="oldText", min_length=1, description="Literal text to replace")
    new_text: str = Field(alias="newText", description="Replacement text")

    def to_edit(self) -> TextEdit:
        return TextEdit(old_text=self.old_text, new_text=self.new_text)


class EditFileArgs(PathArgs):
    edits: Optional[List[EditSpec]] = Field(default=None, description="Ordered replacements")
    dry_run: bool = Field(default=False, alias="dryRun", description="Preview changes without applying")


ToolSpec = Dict[str, Any]


# Tool specifications with categories: read, write
_TOOL_SPECS: Dict[str, ToolSpec] = {
    # Read tools
    "list_directory": {
        "category": "read",
        "aliases": ["ls", "list_dir"],
        "arg_aliases": {"dir": "path", "directory": "path"},
        "args_model": PathArgs,
        "description": (
            "List the files and directories directly inside a path, each tagged "
            "'file' or 'directory'. Only works within allowed directories."
        ),
    },
    "list_directory_with_sizes": {
        "category": "read",
        "aliases": ["ls_sizes", "du"],
        "arg_aliases": {"dir": "path", "directory": "path", "sort": "sortBy"},
        "args_model": ListDirectoryWithSizesArgs,
        "description": (
            "List a directory with file sizes plus file, directory and byte totals. "
            "Sorted by name, or by descending size when sortBy is 'size'. "
            "Only works within allowed directories."
        ),
    },
    "read_file": {
        "category": "read",
        "aliases": ["cat", "read"],
        "arg_aliases": {"file": "path", "file_path": "path"},
        "args_model": PathArgs,
        "description": "Read the complete contents of a file as text. Only works within allowed directories.",
    },
    "read_multiple_files": {
        "category": "read",
        "aliases": ["read_files", "cat_many"],
        "arg_aliases": {"files": "paths"},
        "args_model": ReadMultipleFilesArgs,
        "description": (
            "Read several files in one call. Each file's content is returned under "
            "its path; a failed read is reported inline and does not stop the batch. "
            "Only works within allowed directories."
        ),
    },
    "get_file_info": {
        "category": "read",
        "aliases": ["stat", "file_info"],
        "arg_aliases": {"file": "path", "file_path": "path"},
        "args_model": PathArgs,
        "description": (
            "Return size, mode, permissions, timestamps and type of a file or "
            "directory. Only works within allowed directories."
        ),
    },
    "search_files": {
        "category": "read",
        "aliases": ["find", "glob"],
        "arg_aliases": {"glob": "pattern", "exclude": "excludePatterns", "dir": "path"},
        "args_model": SearchFilesArgs,
        "description": (
            "Recursively find files and directories whose name matches a glob, "
            "skipping paths that match any exclude glob. Returns paths relative to "
            "the start directory. Only searches within allowed directories."
        ),
    },
    "directory_tree": {
        "category": "read",
        "aliases": ["tree"],
        "arg_aliases": {"dir": "path", "directory": "path"},
        "args_model": PathArgs,
        "description": (
            "Return a recursive tree of 'name', 'type' and, for directories, "
            "'children' (possibly empty). Only works within allowed directories."
        ),
    },
    "list_allowed_directories": {
        "category": "read",
        "aliases": ["allowed_dirs", "roots"],
        "arg_aliases": {},
        "args_model": NoArgs,
        "description": "Return the directories this server is allowed to access.",
    },
    # Write tools
    "write_file": {
        "category": "write",
        "aliases": ["create_file", "write"],
        "arg_aliases": {"file": "path", "file_path": "path", "text": "content"},
        "args_model": WriteFileArgs,
        "description": (
            "Create a file or overwrite an existing one without warning. The parent "
            "directory must exist. Only works within allowed directories."
        ),
    },
    "create_directory": {
        "category": "write",
        "aliases": ["mkdir", "create_dir"],
        "arg_aliases": {"dir": "path", "directory": "path"},
        "args_model": PathArgs,
        "description": (
            "Create a directory and any missing parents; succeeds silently if it "
            "already exists. Only works within allowed directories."
        ),
    },
    "move_file": {
        "category": "write",
        "aliases": ["mv", "rename"],
        "arg_aliases": {"src": "source", "dst": "destination", "dest": "destination"},
        "args_model": MoveFileArgs,
        "description": (
            "Move or rename a file or directory. Fails if the destination exists. "
            "Both paths must be within allowed directories."
        ),
    },
    "delete_file": {
        "category": "write",
        "aliases": ["rm", "remove", "delete"],
        "arg_aliases": {"file": "path", "file_path": "path"},
        "args_model": PathArgs,
        "description": "Delete a file, or a directory with everything in it.",
    },
    "edit_file": {
        "category": "write",
        "aliases": ["edit", "replace_text"],
        "arg_aliases": {"file": "path", "file_path": "path"},
        "args_model": EditFileArgs,
        "description": (
            "Replace literal text line by line. Every line containing an edit's "
            "oldText has each occurrence replaced with newText. Returns a diff of "
            "changed lines; dryRun previews without writing. Only works within "
            "allowed directories."
        ),
    },
}


def _build_alias_index() -> Dict[str, str]:
    """Build index of tool aliases to canonical names."""
    index: Dict[str, str] = {}
    for canonical, spec in _TOOL_SPECS.items():
        index[canonical.lower()] = canonical
        for alias in spec.get("aliases", []):
            alias_name = str(alias or "").strip().lower()
            if alias_name:
                index[alias_name] = canonical
    return index


_TOOL_ALIAS_INDEX = _build_alias_index()


def canonicalize_tool_name(name: str, *, keep_unknown: bool = True) -> str:
    """Convert alias to canonical tool name.

    Args:
        name: Tool name or alias
        keep_unknown: If True, return input if not found; else return empty

    Returns:
        Canonical tool name or original/empty depending on keep_unknown
    """
    cleaned = str(name or "").strip()
    if not cleaned:
        return ""
    canonical = _TOOL_ALIAS_INDEX.get(cleaned.lower())
    if canonical:
        return canonical
    return cleaned if keep_unknown else ""


def tool_category(tool: str) -> str:
    spec = _TOOL_SPECS.get(canonicalize_tool_name(tool), {})
    return str(spec.get("category") or "")


def normalize_tool_args(tool: str, args: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Rename aliased argument keys; the first key to claim a name wins."""
    canonical_tool = canonicalize_tool_name(tool)
    if not isinstance(args, dict):
        args = {}
    spec = _TOOL_SPECS.get(canonical_tool, {})
    aliases = spec.get("arg_aliases", {}) if isinstance(spec.get("arg_aliases"), dict) else {}

    normalized: Dict[str, Any] = {}
    for key, value in args.items():
        raw_key = str(key or "").strip()
        if not raw_key:
            continue
        canonical_key = aliases.get(raw_key) or aliases.get(raw_key.lower()) or raw_key
        if canonical_key in normalized:
            continue
        normalized[canonical_key] = value
    return normalized


def _args_model(tool: str) -> Type[ToolArgs]:
    spec = _TOOL_SPECS[canonicalize_tool_name(tool)]
    return spec["args_model"]


def parse_tool_args(tool: str, args: Optional[Dict[str, Any]]) -> ToolArgs:
    """Decode raw arguments into the tool's argument model.

    Raises:
        KeyError: unknown tool
        pydantic.ValidationError: malformed arguments
    """
    return _args_model(tool).model_validate(normalize_tool_args(tool, args))


def format_validation_error(tool: str, exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "args"
        problems.append(f"{field}: {err.get('msg', 'invalid value')}")
    return f"{tool} invalid args: " + "; ".join(problems)


def validate_tool_step(tool: str, args: Optional[Dict[str, Any]]) -> Tuple[bool, Optional[str], str]:
    """Validate a tool call.

    Returns:
        Tuple of (valid, error_code, error_message)
    """
    canonical_tool = canonicalize_tool_name(tool)
    if canonical_tool not in _TOOL_SPECS:
        return (
            False,
            "UNKNOWN_TOOL",
            f"Unsupported tool '{tool}'. Allowed: {', '.join(supported_tool_names())}",
        )
    if args is not None and not isinstance(args, dict):
        return False, "INVALID_TOOL_ARGS", f"{canonical_tool} args must be an object"
    try:
        parse_tool_args(canonical_tool, args)
    except ValidationError as exc:
        return False, "INVALID_TOOL_ARGS", format_validation_error(canonical_tool, exc)
    return True, None, ""


def read_tool_names() -> List[str]:
    """Get list of read-only tool names."""
    return sorted(
        [name for name, spec in _TOOL_SPECS.items() if str(spec.get("category") or "") == "read"]
    )


def write_tool_names() -> List[str]:
    """Get list of write tool names."""
    return sorted(
        [name for name, spec in _TOOL_SPECS.items() if str(spec.get("category") or "") == "write"]
    )


def supported_tool_names() -> List[str]:
    """Get all supported tool names."""
    return sorted(_TOOL_SPECS.keys())


def list_tool_contracts(categories: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
    """List tool contracts filtered by category.

    Args:
        categories: Optional categories to filter ("read", "write")

    Returns:
        List of tool contract dicts with JSON input schemas
    """
    if categories is None:
        allowed = {"read", "write"}
    else:
        allowed = {str(item).strip().lower() for item in categories if str(item or "").strip()}
    contracts: List[Dict[str, Any]] = []
    for name in sorted(_TOOL_SPECS.keys()):
        spec = _TOOL_SPECS[name]
        category = str(spec.get("category") or "").strip().lower()
        if category not in allowed:
            continue
        contracts.append(
            {
                "name": name,
                "category": category,
                "description": str(spec.get("description") or ""),
                "aliases": list(spec.get("aliases", [])),
                "inputSchema": spec["args_model"].model_json_schema(by_alias=True),
            }
        )
    return contracts


def render_tool_contract_for_prompt(*, include_write_tools: bool = True) -> str:
    """Render tool contracts as prompt text."""
    categories = ["read"]
    if include_write_tools:
        categories.append("write")
    lines: List[str] = []
    lines.append("Filesystem tools (paths must stay inside the allowed directories):")
    for item in list_tool_contracts(categories):
        params = ", ".join(item["inputSchema"].get("properties", {}).keys()) or "no args"
        lines.append(f"- {item['name']}({params}): {item['description']}")
    return "\n".join(lines)
