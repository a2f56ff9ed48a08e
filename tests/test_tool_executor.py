"""Tests for name-based tool dispatch."""

import pytest

from fsgate.domain.errors import ErrorKind
from fsgate.infrastructure.storage import FileTools, ResultStatus
from fsgate.infrastructure.storage.path_guard import AllowedRoots
from fsgate.kernel.tools import ToolExecutor, write_tool_names


@pytest.fixture
def root(tmp_path):
    path = tmp_path / "root"
    path.mkdir()
    return path


@pytest.fixture
def executor(root):
    return ToolExecutor(FileTools(AllowedRoots.from_paths([root])))


def test_dispatches_by_alias(executor, root):
    (root / "a.txt").write_text("A")
    result = executor.execute("cat", {"path": "a.txt"})
    assert result.success
    assert result.payload == {"content": "A"}


def test_unknown_tool(executor):
    result = executor.execute("format_disk", {})
    assert result.status == ResultStatus.HARD_ERROR
    assert result.kind == ErrorKind.UNKNOWN_TOOL


def test_invalid_arguments_never_reach_storage(executor, root):
    result = executor.execute("write_file", {"path": "a.txt"})
    assert result.kind == ErrorKind.INVALID_ARGUMENTS
    assert "content" in result.error
    assert not (root / "a.txt").exists()


def test_non_object_arguments(executor):
    result = executor.execute("read_file", ["a.txt"])
    assert result.kind == ErrorKind.INVALID_ARGUMENTS


def test_empty_old_text_rejected(executor, root):
    (root / "f.txt").write_text("abc")
    result = executor.execute("edit_file", {"path": "f.txt", "edits": [{"oldText": "", "newText": "x"}]})
    assert result.kind == ErrorKind.INVALID_ARGUMENTS
    assert (root / "f.txt").read_text() == "abc"


def test_camel_case_arguments_flow_through(executor, root):
    (root / "big.txt").write_bytes(b"x" * 50)
    (root / "small.txt").write_bytes(b"x")
    result = executor.execute("list_directory_with_sizes", {"path": ".", "sortBy": "size"})
    assert [entry["name"] for entry in result.payload["entries"]] == ["big.txt", "small.txt"]


def test_edit_file_through_executor(executor, root):
    (root / "f.txt").write_text("hello world")
    result = executor.execute(
        "edit_file",
        {"path": "f.txt", "edits": [{"oldText": "world", "newText": "there"}], "dryRun": False},
    )
    assert result.payload == {"diff": "-hello world\n+hello there\n", "changed": True, "ok": True}
    assert (root / "f.txt").read_text() == "hello there"


def test_search_soft_error_passes_through(executor):
    result = executor.execute("search_files", {"path": "/", "pattern": "*"})
    assert result.status == ResultStatus.SOFT_ERROR


def test_read_multiple_files_null_paths(executor):
    result = executor.execute("read_multiple_files", {"paths": None})
    assert result.payload == {"content": [{"type": "text", "text": ""}]}


def test_list_allowed_directories_without_args(executor, root):
    assert executor.execute("list_allowed_directories").payload == {"directories": [str(root)]}


class TestReadOnly:
    """Write tools are refused when the executor is read-only."""

    @pytest.fixture
    def read_only(self, root):
        return ToolExecutor(FileTools(AllowedRoots.from_paths([root])), allow_write=False)

    @pytest.mark.parametrize("tool", write_tool_names())
    def test_write_tools_denied(self, read_only, tool):
        args = {
            "path": "x",
            "content": "c",
            "source": "x",
            "destination": "y",
            "edits": [],
        }
        result = read_only.execute(tool, args)
        assert result.kind == ErrorKind.ACCESS_DENIED

    def test_read_tools_allowed(self, read_only, root):
        (root / "a.txt").write_text("A")
        assert read_only.execute("read_file", {"path": "a.txt"}).success

    def test_nothing_written(self, read_only, root):
        read_only.execute("write_file", {"path": "new.txt", "content": "x"})
        assert not (root / "new.txt").exists()
