"""Tests for building the message definition index."""

import logging
import os
from pathlib import Path

import pytest

from msgdef_resolver import (
    AMENT_PREFIX_PATH_ENV,
    ConfigurationError,
    SchemaIndex,
    SchemaIndexBuilder,
)


def test_from_prefixes_registers_msg_files(tf_prefix: Path):
    index = SchemaIndex.from_prefixes([tf_prefix])

    assert len(index) == 7
    assert "geometry_msgs/msg/Transform" in index
    assert index["std_msgs/msg/Header"] == tf_prefix / "share/std_msgs/msg/Header.msg"
    assert index.packages() == ["builtin_interfaces", "geometry_msgs", "std_msgs", "tf2_msgs"]


def test_iteration_is_lexicographic(tf_prefix: Path):
    index = SchemaIndex.from_prefixes([tf_prefix])
    assert list(index) == sorted(index)


def test_ignores_other_files(tmp_path: Path):
    """Test that only *.msg files directly inside msg/ are indexed."""
    share = tmp_path / "share"
    (share / "pkg" / "msg" / "nested").mkdir(parents=True)
    (share / "pkg" / "msg" / "Good.msg").write_text("int32 a")
    (share / "pkg" / "msg" / "Other.srv").write_text("int32 a\n---\nint32 b")
    (share / "pkg" / "msg" / "README").write_text("docs")
    (share / "pkg" / "msg" / "nested" / "Deep.msg").write_text("int32 a")
    (share / "pkg" / "srv").mkdir()
    (share / "pkg" / "srv" / "Srv.msg").write_text("int32 a")
    (share / "no_msgs").mkdir()
    (share / "marker.txt").write_text("")

    index = SchemaIndex.from_prefixes([tmp_path])

    assert list(index) == ["pkg/msg/Good"]


def test_prefix_without_share_is_skipped(tmp_path: Path, tf_prefix: Path, caplog):
    builder = SchemaIndexBuilder()
    with caplog.at_level(logging.WARNING, logger="msgdef_resolver.index"):
        assert builder.register_prefix(tmp_path / "missing") == 0
    assert "no share directory" in caplog.text
    assert builder.register_prefix(tf_prefix) == 7
    assert len(builder.build()) == 7


def test_register_msg_dir(tmp_path: Path):
    msg_dir = tmp_path / "msgs"
    msg_dir.mkdir()
    (msg_dir / "A.msg").write_text("int32 a")
    (msg_dir / "B.msg").write_text("A a")

    builder = SchemaIndexBuilder()
    assert builder.register_msg_dir("custom_pkg", msg_dir) == 2

    index = builder.build()
    assert list(index) == ["custom_pkg/msg/A", "custom_pkg/msg/B"]


def test_register_msg_dir_missing(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="Failed to list"):
        SchemaIndexBuilder().register_msg_dir("pkg", tmp_path / "missing")


def test_later_prefix_wins_regardless_of_argument_order(make_prefix):
    """Test that conflicting prefixes resolve in lexicographic prefix order."""
    first = make_prefix({"pkg/msg/Dup": "int32 first"}, name="a_install")
    second = make_prefix({"pkg/msg/Dup": "int32 second"}, name="b_install")

    for prefixes in ([first, second], [second, first]):
        index = SchemaIndex.from_prefixes(prefixes)
        assert index["pkg/msg/Dup"] == second / "share/pkg/msg/Dup.msg"


def test_multiple_prefixes_are_merged(make_prefix):
    first = make_prefix({"a_pkg/msg/A": "int32 a"}, name="one")
    second = make_prefix({"b_pkg/msg/B": "a_pkg/A a"}, name="two")

    index = SchemaIndex.from_prefixes([first, second])

    assert list(index) == ["a_pkg/msg/A", "b_pkg/msg/B"]


def test_from_entries_accepts_strings():
    index = SchemaIndex.from_entries({"b/msg/B": "/tmp/B.msg", "a/msg/A": Path("/tmp/A.msg")})

    assert list(index) == ["a/msg/A", "b/msg/B"]
    assert index["b/msg/B"] == Path("/tmp/B.msg")
    assert index.get("missing/msg/X") is None


def test_index_is_read_only():
    index = SchemaIndex.from_entries({"a/msg/A": "/tmp/A.msg"})
    with pytest.raises(TypeError):
        index["b/msg/B"] = Path("/tmp/B.msg")  # type: ignore[index]


def test_empty_index():
    index = SchemaIndex()
    assert len(index) == 0
    assert not index
    assert index.packages() == []
    assert repr(index) == "SchemaIndex(0 definitions)"


def test_from_env(make_prefix):
    first = make_prefix({"a_pkg/msg/A": "int32 a"}, name="one")
    second = make_prefix({"b_pkg/msg/B": "int32 b"}, name="two")
    environ = {AMENT_PREFIX_PATH_ENV: os.pathsep.join([str(first), "", str(second)])}

    index = SchemaIndex.from_env(environ)

    assert list(index) == ["a_pkg/msg/A", "b_pkg/msg/B"]


def test_from_env_unset():
    with pytest.raises(ConfigurationError, match="AMENT_PREFIX_PATH is not set"):
        SchemaIndex.from_env({})


def test_from_env_without_definitions(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="No .msg files found"):
        SchemaIndex.from_env({AMENT_PREFIX_PATH_ENV: str(tmp_path)})


def test_from_env_reads_process_environment(tf_prefix: Path, monkeypatch):
    monkeypatch.setenv(AMENT_PREFIX_PATH_ENV, str(tf_prefix))
    assert len(SchemaIndex.from_env()) == 7
