"""HTTP transport for fsgate."""

from fsgate.api.main import create_app

__all__ = ["create_app"]
