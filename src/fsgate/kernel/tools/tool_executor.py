"""Tool executor for fsgate.

Dispatches a named tool call to the matching `FileTools` operation after
argument validation and the write permission gate.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import structlog
from pydantic import ValidationError

from fsgate.domain.errors import ErrorKind
from fsgate.infrastructure.storage import FileTools, ToolResult
from fsgate.kernel.tools.tool_contract import (
    EditFileArgs,
    ListDirectoryWithSizesArgs,
    MoveFileArgs,
    PathArgs,
    ReadMultipleFilesArgs,
    SearchFilesArgs,
    ToolArgs,
    WriteFileArgs,
    canonicalize_tool_name,
    format_validation_error,
    parse_tool_args,
    supported_tool_names,
    tool_category,
)

logger = structlog.get_logger()

READ_ONLY_MESSAGE = "write tools are disabled in read-only mode"


class ToolExecutor:
    """Execute filesystem tools by name."""

    def __init__(self, file_tools: FileTools, *, allow_write: bool = True):
        """Initialize tool executor.

        Args:
            file_tools: Facade bound to the allowed roots
            allow_write: Whether write tools are allowed
        """
        self.file_tools = file_tools
        self.allow_write = allow_write
        self._handlers: Dict[str, Callable[[Any], ToolResult]] = {
            "list_directory": self._exec_list_directory,
            "list_directory_with_sizes": self._exec_list_directory_with_sizes,
            "read_file": self._exec_read_file,
            "read_multiple_files": self._exec_read_multiple_files,
            "get_file_info": self._exec_get_file_info,
            "search_files": self._exec_search_files,
            "directory_tree": self._exec_directory_tree,
            "list_allowed_directories": self._exec_list_allowed_directories,
            "write_file": self._exec_write_file,
            "create_directory": self._exec_create_directory,
            "move_file": self._exec_move_file,
            "delete_file": self._exec_delete_file,
            "edit_file": self._exec_edit_file,
        }

    def execute(self, tool: str, args: Optional[Dict[str, Any]] = None) -> ToolResult:
        """Execute a tool.

        Args:
            tool: Tool name or alias
            args: Raw tool arguments

        Returns:
            The operation's ToolResult; unknown tools, malformed arguments
            and denied writes come back as hard errors
        """
        canonical = canonicalize_tool_name(tool, keep_unknown=False)
        if canonical not in self._handlers:
            logger.warning("tool_call_failed", tool=tool, kind=ErrorKind.UNKNOWN_TOOL.value)
            return ToolResult.hard_error(
                ErrorKind.UNKNOWN_TOOL,
                f"Unsupported tool '{tool}'. Allowed: {', '.join(supported_tool_names())}",
            )

        if args is not None and not isinstance(args, dict):
            return self._invalid(canonical, f"{canonical} args must be an object")
        try:
            params = parse_tool_args(canonical, args)
        except ValidationError as e:
            return self._invalid(canonical, format_validation_error(canonical, e))

        if tool_category(canonical) == "write" and not self.allow_write:
            logger.warning("tool_call_denied", tool=canonical, reason="read_only")
            return ToolResult.hard_error(ErrorKind.ACCESS_DENIED, READ_ONLY_MESSAGE)

        logger.info("tool_call", tool=canonical, args=params.model_dump(by_alias=True))
        result = self._handlers[canonical](params)
        if result.is_error:
            logger.warning(
                "tool_call_failed",
                tool=canonical,
                status=result.status.value,
                kind=result.kind.value if result.kind else None,
                error=result.error,
            )
        return result

    def _invalid(self, tool: str, message: str) -> ToolResult:
        logger.warning("tool_call_failed", tool=tool, kind=ErrorKind.INVALID_ARGUMENTS.value, error=message)
        return ToolResult.hard_error(ErrorKind.INVALID_ARGUMENTS, message)

    # -------------------------------------------------------------------------
    # Read Tool Implementations
    # -------------------------------------------------------------------------

    def _exec_list_directory(self, params: PathArgs) -> ToolResult:
        return self.file_tools.list_directory(params.path)

    def _exec_list_directory_with_sizes(self, params: ListDirectoryWithSizesArgs) -> ToolResult:
        return self.file_tools.list_directory_with_sizes(params.path, params.sort_by or "name")

    def _exec_read_file(self, params: PathArgs) -> ToolResult:
        return self.file_tools.read_file(params.path)

    def _exec_read_multiple_files(self, params: ReadMultipleFilesArgs) -> ToolResult:
        return self.file_tools.read_multiple_files(params.paths or [])

    def _exec_get_file_info(self, params: PathArgs) -> ToolResult:
        return self.file_tools.get_file_info(params.path)

    def _exec_search_files(self, params: SearchFilesArgs) -> ToolResult:
        return self.file_tools.search_files(params.path, params.pattern, params.exclude_patterns or [])

    def _exec_directory_tree(self, params: PathArgs) -> ToolResult:
        return self.file_tools.directory_tree(params.path)

    def _exec_list_allowed_directories(self, params: ToolArgs) -> ToolResult:
        return self.file_tools.list_allowed_directories()

    # -------------------------------------------------------------------------
    # Write Tool Implementations
    # -------------------------------------------------------------------------

    def _exec_write_file(self, params: WriteFileArgs) -> ToolResult:
        return self.file_tools.write_file(params.path, params.content)

    def _exec_create_directory(self, params: PathArgs) -> ToolResult:
        return self.file_tools.create_directory(params.path)

    def _exec_move_file(self, params: MoveFileArgs) -> ToolResult:
        return self.file_tools.move_file(params.source, params.destination)

    def _exec_delete_file(self, params: PathArgs) -> ToolResult:
        return self.file_tools.delete_file(params.path)

    def _exec_edit_file(self, params: EditFileArgs) -> ToolResult:
        edits = [spec.to_edit() for spec in params.edits or []]
        return self.file_tools.edit_file(params.path, edits, dry_run=params.dry_run)
