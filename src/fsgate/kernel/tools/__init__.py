"""Tool orchestration layer for fsgate.

Provides the operation catalogue, argument validation and execution.
"""

from fsgate.kernel.tools.tool_contract import (
    ToolSpec,
    canonicalize_tool_name,
    list_tool_contracts,
    normalize_tool_args,
    parse_tool_args,
    read_tool_names,
    render_tool_contract_for_prompt,
    supported_tool_names,
    validate_tool_step,
    write_tool_names,
)
from fsgate.kernel.tools.tool_executor import ToolExecutor

__all__ = [
    # Tool contract
    "ToolSpec",
    "canonicalize_tool_name",
    "list_tool_contracts",
    "normalize_tool_args",
    "parse_tool_args",
    "read_tool_names",
    "render_tool_contract_for_prompt",
    "supported_tool_names",
    "validate_tool_step",
    "write_tool_names",
    # Tool executor
    "ToolExecutor",
]
