"""Command-line entry point: serve the filesystem tools over HTTP."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Sequence

import structlog
import uvicorn

from fsgate.api.main import create_app
from fsgate.config import settings
from fsgate.infrastructure.storage import AllowedRoots, clean_path

logger = structlog.get_logger()

USAGE = "Usage: fsgate [options] <allowed-directory> [additional-directories...]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fsgate",
        description="Serve filesystem tools confined to the given directories.",
    )
    parser.add_argument("directories", nargs="*", metavar="DIR", help="Allowed directory")
    parser.add_argument("--host", default=None, help="Bind host (default: FSGATE_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: FSGATE_PORT or 8080)")
    parser.add_argument("--log-level", default=None, help="Log level (default: FSGATE_LOG_LEVEL or INFO)")
    parser.add_argument(
        "--log-json",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Render logs as JSON",
    )
    parser.add_argument(
        "--read-only",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Refuse write tools",
    )
    return parser


def resolve_directories(candidates: Sequence[str]) -> List[str]:
    """Make each directory absolute and clean; raise ValueError if one is missing."""
    directories: List[str] = []
    for raw in candidates:
        path = os.path.abspath(clean_path(os.path.expanduser(raw)))
        if not os.path.isdir(path):
            raise ValueError(f"allowed directory does not exist: {raw}")
        directories.append(path)
    return directories


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    candidates = list(args.directories) or list(settings.allowed_directories)
    if not candidates:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        roots = AllowedRoots.from_paths(resolve_directories(candidates))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log_level = args.log_level or settings.log_level
    settings.setup_logging(level=log_level, json_logs=args.log_json)
    read_only = settings.read_only if args.read_only is None else args.read_only

    app = create_app(roots, allow_write=not read_only)
    host = args.host or settings.api_host
    port = args.port or settings.api_port
    logger.info("fsgate_serving", host=host, port=port, roots=roots.as_list())
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
