"""Tests for infrastructure env parsing helpers."""

import os

from fsgate.config import Settings
from fsgate.infrastructure.config.settings_utils import (
    env_bool,
    env_int,
    env_list,
    env_paths,
    parse_bool,
)


def test_parse_bool_handles_common_forms():
    assert parse_bool("true") is True
    assert parse_bool("1") is True
    assert parse_bool("off") is False
    assert parse_bool("0") is False
    assert parse_bool("invalid", default=True) is True


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("FSGATE_TEST_BOOL", "yes")
    monkeypatch.setenv("FSGATE_TEST_INT", "19")
    monkeypatch.setenv("FSGATE_TEST_BIG", "99999")
    monkeypatch.setenv("FSGATE_TEST_LIST", "a, b , ,c")

    assert env_bool("FSGATE_TEST_BOOL", default=False) is True
    assert env_int("FSGATE_TEST_INT", default=1, minimum=5) == 19
    assert env_int("FSGATE_TEST_BIG", default=1, maximum=65535) == 65535
    assert env_list("FSGATE_TEST_LIST", default=["x"]) == ["a", "b", "c"]


def test_env_paths_splits_on_pathsep(monkeypatch):
    monkeypatch.setenv("FSGATE_TEST_DIRS", os.pathsep.join(["/srv/a", " ", "/srv/b"]))
    assert env_paths("FSGATE_TEST_DIRS") == ["/srv/a", "/srv/b"]
    assert env_paths("FSGATE_TEST_UNSET") == []


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("FSGATE_PORT", "9090")
    monkeypatch.setenv("FSGATE_READ_ONLY", "true")
    monkeypatch.setenv("FSGATE_ALLOWED_DIRS", os.pathsep.join(["/srv/a", "/srv/b"]))

    fresh = Settings()

    assert fresh.api_port == 9090
    assert fresh.read_only is True
    assert fresh.allowed_directories == ["/srv/a", "/srv/b"]
