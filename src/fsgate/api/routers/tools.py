"""Tools router - catalogue and tool call endpoints."""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from fsgate.api.dependencies import get_tool_executor
from fsgate.domain.errors import ErrorKind
from fsgate.infrastructure.storage import ResultStatus, ToolResult
from fsgate.kernel.tools import ToolExecutor, list_tool_contracts

router = APIRouter(prefix="/tools", tags=["tools"])

HTTP_STATUS_BY_KIND = {
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.IO_ERROR: 500,
    ErrorKind.INVALID_ARGUMENTS: 422,
    ErrorKind.UNKNOWN_TOOL: 404,
}

ERROR_403_FORBIDDEN = {
    "description": "Path resolves outside the allowed directories, or writes are disabled.",
    "content": {
        "application/json": {
            "example": {
                "detail": "[read] ../etc/passwd: access outside of allowed directories is not allowed",
                "kind": "access_denied",
            }
        }
    },
}
ERROR_404_NOT_FOUND = {
    "description": "Unknown tool, or the target does not exist.",
    "content": {
        "application/json": {
            "example": {"detail": "[delete] gone.txt: file does not exist", "kind": "not_found"}
        }
    },
}
ERROR_409_CONFLICT = {
    "description": "Move destination already exists.",
    "content": {
        "application/json": {
            "example": {"detail": "[move] b.txt: destination already exists", "kind": "already_exists"}
        }
    },
}


def call_result_envelope(result: ToolResult) -> Dict[str, Any]:
    """Wrap a payload in the call-result envelope: text JSON plus structured copy."""
    payload = result.to_dict()
    return {
        "content": [{"type": "text", "text": json.dumps(payload, ensure_ascii=False)}],
        "isError": result.status == ResultStatus.SOFT_ERROR,
        "structuredContent": payload,
    }


@router.get("")
async def list_tools():
    """List the tool catalogue with input schemas."""
    return {"tools": list_tool_contracts()}


@router.post(
    "/{name}",
    responses={
        403: ERROR_403_FORBIDDEN,
        404: ERROR_404_NOT_FOUND,
        409: ERROR_409_CONFLICT,
    },
)
def call_tool(
    name: str,
    args: Optional[Dict[str, Any]] = Body(default=None),
    executor: ToolExecutor = Depends(get_tool_executor),
):
    """Call a tool by name or alias with a JSON object of arguments."""
    result = executor.execute(name, args or {})
    if result.status == ResultStatus.HARD_ERROR:
        kind = result.kind or ErrorKind.IO_ERROR
        return JSONResponse(
            status_code=HTTP_STATUS_BY_KIND.get(kind, 500),
            content={"detail": result.error, "kind": kind.value},
        )
    return call_result_envelope(result)
