"""Tests for the directory traversal engine."""

import os
import socket
import sys

import pytest

from dirtree.core import traverser as traverser_module
from dirtree.core.errors import TraversalError
from dirtree.core.models import (
    EntryType,
    ErrorPolicy,
    Statistics,
    TraversalFlags,
    TraversalOutcome,
)
from dirtree.core.traverser import DirectoryTraverser, classify_mode


def _walk(path, **kwargs):
    """Traverse path and return (events, stats, outcome)."""
    events = []
    stats = Statistics()
    traverser = DirectoryTraverser(sink=events.append, **kwargs)
    outcome = traverser.traverse(str(path), stats)
    return events, stats, outcome


def _blocks(*paths):
    return sum(os.lstat(p).st_blocks for p in paths)


def test_scenario_order_and_statistics(sample_tree):
    events, stats, outcome = _walk(sample_tree)

    assert outcome is TraversalOutcome.COMPLETED
    assert [e.entry.name for e in events] == ["sub", "b.txt", "a.txt"]
    assert [e.depth for e in events] == [1, 2, 1]
    assert stats.files == 2
    assert stats.dirs == 1
    assert stats.size == 15
    assert stats.blocks == _blocks(sample_tree / "a.txt", sample_tree / "sub" / "b.txt")


def test_event_paths_are_joined_with_single_separator(sample_tree):
    events, _, _ = _walk(str(sample_tree) + "/")

    paths = [e.entry.path for e in events]
    assert paths == [
        f"{sample_tree}/sub",
        f"{sample_tree}/sub/b.txt",
        f"{sample_tree}/a.txt",
    ]
    assert all("//" not in p for p in paths)
    assert events[1].parent == f"{sample_tree}/sub"


def test_trailing_separator_gives_same_result(sample_tree):
    plain_events, plain_stats, _ = _walk(sample_tree)
    slashed_events, slashed_stats, _ = _walk(str(sample_tree) + "//")

    assert plain_events == slashed_events
    assert plain_stats == slashed_stats


def test_each_level_lists_every_child_once(nested_tree):
    events, _, _ = _walk(nested_tree)

    by_parent = {}
    for event in events:
        by_parent.setdefault(event.parent, []).append(event.entry.name)

    for parent, names in by_parent.items():
        assert sorted(names) == sorted(os.listdir(parent))
        assert len(names) == len(set(names))


def test_directories_listed_first_then_bytewise(nested_tree):
    events, stats, _ = _walk(nested_tree)

    top_level = [e.entry.name for e in events if e.depth == 1]
    assert top_level == ["Alpha", "empty", "zeta", "B.txt", "a.txt"]
    assert [e.entry.name for e in events] == [
        "Alpha", "x.bin", "empty", "zeta", "deep", "leaf.txt", "B.txt", "a.txt",
    ]
    assert stats.dirs == 4
    assert stats.files == 4
    assert stats.size == 100 + 4 + 1 + 1


def test_traversal_is_repeatable(nested_tree):
    first = _walk(nested_tree)
    second = _walk(nested_tree)

    assert first == second


def test_empty_directory(tmp_path):
    events, stats, outcome = _walk(tmp_path)

    assert outcome is TraversalOutcome.EMPTY
    assert events == []
    assert stats == Statistics()


def test_missing_root_is_skipped(tmp_path):
    events, stats, outcome = _walk(tmp_path / "missing")

    assert outcome is TraversalOutcome.SKIPPED
    assert events == []
    assert stats == Statistics()


def test_file_root_is_skipped(sample_tree):
    traverser = DirectoryTraverser()
    outcome = traverser.traverse(str(sample_tree / "a.txt"), Statistics())

    assert outcome is TraversalOutcome.SKIPPED
    assert len(traverser.skipped) == 1
    assert traverser.skipped[0].path == str(sample_tree / "a.txt")


@pytest.fixture
def unreadable_sub(monkeypatch, sample_tree):
    """Make the 'sub' directory of sample_tree fail to open."""
    real_scandir = os.scandir
    blocked = f"{sample_tree}/sub"

    def fake_scandir(path):
        if path == blocked:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(traverser_module.os, "scandir", fake_scandir)
    return blocked


def test_unreadable_subdirectory_counted_but_not_descended(sample_tree, unreadable_sub):
    traverser = DirectoryTraverser()
    stats = Statistics()
    outcome = traverser.traverse(str(sample_tree), stats)

    assert outcome is TraversalOutcome.COMPLETED
    assert stats.dirs == 1
    assert stats.files == 1
    assert stats.size == 10
    assert [s.path for s in traverser.skipped] == [unreadable_sub]
    assert traverser.skipped[0].error_message == "Permission denied"


def test_warn_policy_logs_skipped_directory(sample_tree, unreadable_sub, caplog):
    with caplog.at_level("WARNING", logger="dirtree.core.traverser"):
        _walk(sample_tree, on_error=ErrorPolicy.WARN)

    assert f"Skipping {unreadable_sub}" in caplog.text


def test_ignore_policy_is_silent(sample_tree, unreadable_sub, caplog):
    with caplog.at_level("WARNING", logger="dirtree.core.traverser"):
        _walk(sample_tree)

    assert caplog.records == []


def test_raise_policy_raises_traversal_error(sample_tree, unreadable_sub):
    with pytest.raises(TraversalError) as excinfo:
        _walk(sample_tree, on_error=ErrorPolicy.RAISE)

    assert excinfo.value.path == unreadable_sub
    assert isinstance(excinfo.value.cause, PermissionError)


def test_scandir_handle_is_closed_on_error(monkeypatch, tmp_path):
    (tmp_path / "f").write_text("x")
    closed = []
    real_scandir = os.scandir

    class FailingIterator:
        def __init__(self, path):
            self._it = real_scandir(path)

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            self._it.close()
            closed.append(True)

        def __iter__(self):
            raise OSError(5, "Input/output error")

    monkeypatch.setattr(traverser_module.os, "scandir", FailingIterator)
    _, stats, outcome = _walk(tmp_path)

    assert outcome is TraversalOutcome.SKIPPED
    assert closed == [True]
    assert stats == Statistics()


def test_symlink_is_counted_and_not_followed(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    (target / "inside.txt").write_text("data")
    root = tmp_path / "root"
    root.mkdir()
    os.symlink(target, root / "link")

    events, stats, _ = _walk(root)

    assert [e.entry.name for e in events] == ["link"]
    assert events[0].entry.entry_type is EntryType.LINK
    assert stats.links == 1
    assert stats.dirs == 0
    assert stats.files == 0
    assert stats.size == os.lstat(root / "link").st_size


def test_self_referencing_symlink_terminates(tmp_path):
    os.symlink(tmp_path, tmp_path / "loop")

    events, stats, _ = _walk(tmp_path)

    assert [e.entry.name for e in events] == ["loop"]
    assert stats.links == 1


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs not supported")
def test_fifo_is_counted(tmp_path):
    os.mkfifo(tmp_path / "pipe")

    events, stats, _ = _walk(tmp_path)

    assert events[0].entry.entry_type is EntryType.FIFO
    assert stats.fifos == 1


@pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="Unix sockets not supported")
def test_socket_is_counted(tmp_path):
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(str(tmp_path / "s"))
        events, stats, _ = _walk(tmp_path)
    finally:
        sock.close()

    assert events[0].entry.entry_type is EntryType.SOCKET
    assert stats.sockets == 1


def test_max_depth_limits_descent(nested_tree):
    events, stats, _ = _walk(nested_tree, max_depth=1)

    assert all(e.depth == 1 for e in events)
    assert stats.dirs == 3
    assert stats.files == 2


def _stack_depth():
    frame = sys._getframe()
    depth = 0
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def test_deep_tree_does_not_hit_recursion_limit(tmp_path):
    path = tmp_path
    depth = 200
    for _ in range(depth):
        path = path / "d"
        path.mkdir()
    (path / "leaf").write_text("!")

    old_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(_stack_depth() + 50)
    try:
        _, stats, _ = _walk(tmp_path)
    finally:
        sys.setrecursionlimit(old_limit)

    assert stats.dirs == depth
    assert stats.files == 1


def test_vanished_entry_listed_without_metadata(monkeypatch, sample_tree):
    real_scandir = os.scandir

    class Entry:
        def __init__(self, entry):
            self._entry = entry
            self.name = entry.name

        def stat(self, follow_symlinks=True):
            if self.name == "a.txt":
                raise FileNotFoundError(2, "No such file or directory")
            return self._entry.stat(follow_symlinks=follow_symlinks)

        def is_symlink(self):
            return self._entry.is_symlink()

        def is_dir(self, follow_symlinks=True):
            return self._entry.is_dir(follow_symlinks=follow_symlinks)

        def is_file(self, follow_symlinks=True):
            return self._entry.is_file(follow_symlinks=follow_symlinks)

    class Wrapper:
        def __init__(self, path):
            self._it = real_scandir(path)

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            self._it.close()

        def __iter__(self):
            return (Entry(e) for e in self._it)

    monkeypatch.setattr(traverser_module.os, "scandir", Wrapper)
    events, stats, _ = _walk(sample_tree)

    vanished = [e.entry for e in events if e.entry.name == "a.txt"][0]
    assert vanished.metadata is None
    assert vanished.entry_type is EntryType.FILE
    assert stats.files == 2
    assert stats.size == 5


def test_classify_mode_unknown_type():
    assert classify_mode(0) is EntryType.OTHER


def test_flags_do_not_change_what_is_traversed(nested_tree):
    plain = _walk(nested_tree, flags=TraversalFlags.NONE)
    everything = _walk(nested_tree, flags=TraversalFlags.TREE | TraversalFlags.SUMMARY
                       | TraversalFlags.VERBOSE)

    assert plain == everything
