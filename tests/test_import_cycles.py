"""Import-cycle regression tests."""

from __future__ import annotations

import os
import subprocess
import sys

import pytest

SRC_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")


@pytest.mark.parametrize(
    "statement",
    [
        "from fsgate.infrastructure.storage import FileTools",
        "from fsgate.kernel.tools import ToolExecutor",
        "from fsgate.api import create_app",
        "from fsgate.cli import main",
    ],
)
def test_modules_import_in_clean_interpreter(statement):
    """Each layer should import on its own, regardless of import order."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [SRC_DIR, env.get("PYTHONPATH", "")]))
    process = subprocess.run(
        [sys.executable, "-c", f"{statement}; print('ok')"],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )
    assert process.returncode == 0, process.stderr
    assert "ok" in process.stdout
