"""Tests for directory listing, creation and trees."""

import os

import pytest

from fsgate.domain.errors import AccessDeniedError, FileIOError, NotFoundError
from fsgate.infrastructure.storage import directory_io
from fsgate.infrastructure.storage.path_guard import AllowedRoots


@pytest.fixture
def root(tmp_path):
    path = tmp_path / "root"
    path.mkdir()
    return path


@pytest.fixture
def roots(root):
    return AllowedRoots.from_paths([root])


@pytest.fixture
def populated(root):
    (root / "b.txt").write_bytes(b"x" * 10)
    (root / "a.txt").write_bytes(b"x" * 300)
    (root / "c.txt").write_bytes(b"x" * 42)
    (root / "zdir").mkdir()
    (root / "zdir" / "inner.txt").write_bytes(b"x" * 1000)
    return root


def test_list_directory_tags_entries_in_name_order(roots, populated):
    result = directory_io.list_directory(roots, ".")
    assert result == {
        "entries": [
            {"name": "a.txt", "type": "file"},
            {"name": "b.txt", "type": "file"},
            {"name": "c.txt", "type": "file"},
            {"name": "zdir", "type": "directory"},
        ]
    }


def test_list_empty_directory(roots, root):
    (root / "empty").mkdir()
    assert directory_io.list_directory(roots, "empty") == {"entries": []}


def test_list_missing_directory(roots):
    with pytest.raises(NotFoundError):
        directory_io.list_directory(roots, "ghost")


def test_list_file_is_io_error(roots, root):
    (root / "f.txt").write_text("f")
    with pytest.raises(FileIOError):
        directory_io.list_directory(roots, "f.txt")


def test_list_outside_roots_denied(roots):
    with pytest.raises(AccessDeniedError):
        directory_io.list_directory(roots, "..")


class TestListWithSizes:
    """Sizes, sort order and totals."""

    def test_sort_by_size_is_non_increasing(self, roots, populated):
        result = directory_io.list_directory_with_sizes(roots, ".", "size")
        sizes = [entry["size"] for entry in result["entries"]]
        assert sizes == sorted(sizes, reverse=True)
        assert [entry["name"] for entry in result["entries"]][:3] == ["a.txt", "c.txt", "b.txt"]

    @pytest.mark.parametrize("sort_by", ["name", "", "bogus"])
    def test_other_sort_values_sort_by_name(self, roots, populated, sort_by):
        result = directory_io.list_directory_with_sizes(roots, ".", sort_by)
        assert [entry["name"] for entry in result["entries"]] == ["a.txt", "b.txt", "c.txt", "zdir"]

    def test_default_sort_is_name(self, roots, populated):
        result = directory_io.list_directory_with_sizes(roots, ".")
        assert [entry["name"] for entry in result["entries"]] == ["a.txt", "b.txt", "c.txt", "zdir"]

    def test_totals_match_contents(self, roots, populated):
        result = directory_io.list_directory_with_sizes(roots, ".")
        assert result["totalFiles"] == 3
        assert result["totalDirs"] == 1
        assert result["totalSize"] == 352

    def test_directories_report_zero_size(self, roots, populated):
        result = directory_io.list_directory_with_sizes(roots, ".")
        zdir = [entry for entry in result["entries"] if entry["name"] == "zdir"][0]
        assert zdir == {"name": "zdir", "type": "directory", "size": 0}


def test_create_directory_with_parents(roots, root):
    assert directory_io.create_directory(roots, "a/b/c") == {"ok": True}
    assert (root / "a" / "b" / "c").is_dir()


def test_create_existing_directory_succeeds(roots, root):
    (root / "there").mkdir()
    assert directory_io.create_directory(roots, "there") == {"ok": True}


def test_create_directory_over_file_fails(roots, root):
    (root / "f.txt").write_text("f")
    with pytest.raises((FileIOError, NotFoundError)):
        directory_io.create_directory(roots, "f.txt/sub")


def test_create_directory_outside_denied(roots, tmp_path):
    with pytest.raises(AccessDeniedError):
        directory_io.create_directory(roots, str(tmp_path / "escape"))
    assert not (tmp_path / "escape").exists()


class TestDirectoryTree:
    """Recursive tree construction."""

    def test_tree_shape(self, roots, root):
        (root / "file.txt").write_text("f")
        (root / "sub").mkdir()
        (root / "sub" / "inner.txt").write_text("i")

        tree = directory_io.directory_tree(roots, ".")["tree"]

        assert tree["name"] == "root"
        assert tree["type"] == "directory"
        assert tree["children"] == [
            {"name": "file.txt", "type": "file"},
            {
                "name": "sub",
                "type": "directory",
                "children": [{"name": "inner.txt", "type": "file"}],
            },
        ]

    def test_empty_directory_has_empty_children(self, roots, root):
        (root / "empty").mkdir()
        tree = directory_io.directory_tree(roots, "empty")["tree"]
        assert tree == {"name": "empty", "type": "directory", "children": []}

    def test_tree_of_a_file(self, roots, root):
        (root / "solo.txt").write_text("s")
        assert directory_io.directory_tree(roots, "solo.txt") == {
            "tree": {"name": "solo.txt", "type": "file"}
        }

    def test_missing_root_is_not_found(self, roots):
        with pytest.raises(NotFoundError):
            directory_io.directory_tree(roots, "ghost")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_to_directory_is_listed_as_file(roots, root):
    (root / "real").mkdir()
    os.symlink(root / "real", root / "alias")
    result = directory_io.list_directory(roots, ".")
    assert result == {
        "entries": [
            {"name": "alias", "type": "file"},
            {"name": "real", "type": "directory"},
        ]
    }
