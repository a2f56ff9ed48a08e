"""FastAPI dependencies."""

from fastapi import Request

from fsgate.kernel.tools import ToolExecutor


def get_tool_executor(request: Request) -> ToolExecutor:
    """Dependency for the ToolExecutor bound to this app's roots."""
    return request.app.state.executor
