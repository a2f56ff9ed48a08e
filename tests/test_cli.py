"""Tests for process startup."""

import pytest

from fsgate import cli
from fsgate.config import settings


@pytest.fixture
def served(monkeypatch):
    calls = []

    def fake_run(app, **kwargs):
        calls.append((app, kwargs))

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    monkeypatch.setattr(settings, "allowed_directories", [])
    monkeypatch.setattr(settings, "read_only", False)
    return calls


def test_no_directories_is_usage_error(served, capsys):
    assert cli.main([]) == 1
    assert "Usage:" in capsys.readouterr().err
    assert served == []


def test_missing_directory_is_fatal(served, tmp_path, capsys):
    assert cli.main([str(tmp_path / "ghost")]) == 1
    assert "does not exist" in capsys.readouterr().err
    assert served == []


def test_serves_app_for_directories(served, tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    assert cli.main(["--host", "0.0.0.0", "--port", "9001", str(tmp_path / "a"), f"{tmp_path}/b/./"]) == 0

    app, kwargs = served[0]
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9001
    file_tools = app.state.executor.file_tools
    assert file_tools.roots.as_list() == [str(tmp_path / "a"), str(tmp_path / "b")]
    assert app.state.executor.allow_write is True


def test_read_only_flag(served, tmp_path):
    assert cli.main(["--read-only", str(tmp_path)]) == 0
    app, _ = served[0]
    assert app.state.executor.allow_write is False


def test_directories_from_settings(served, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "allowed_directories", [str(tmp_path)])
    assert cli.main([]) == 0
    app, _ = served[0]
    assert app.state.executor.file_tools.roots.as_list() == [str(tmp_path)]


def test_resolve_directories_makes_paths_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "rel").mkdir()
    assert cli.resolve_directories(["rel"]) == [str(tmp_path / "rel")]
