"""Recursive directory traversal engine."""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from .errors import TraversalError
from .models import (
    DirectoryEntry,
    EntryMetadata,
    EntryType,
    ErrorPolicy,
    SkippedDirectory,
    Statistics,
    TraversalFlags,
    TraversalOutcome,
    VisitEvent,
)
from .ordering import sort_entries
from .paths import join_path, normalize_root

EventSink = Callable[[VisitEvent], None]

_IGNORED_NAMES = (".", "..")


@dataclass
class _Frame:
    """A directory whose sorted listing is being walked."""
    path: str
    depth: int
    entries: Iterator[DirectoryEntry]


def classify_mode(mode: int) -> EntryType:
    """Map an st_mode value to an EntryType."""
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryType.FILE
    if stat.S_ISLNK(mode):
        return EntryType.LINK
    if stat.S_ISFIFO(mode):
        return EntryType.FIFO
    if stat.S_ISSOCK(mode):
        return EntryType.SOCKET
    return EntryType.OTHER


class DirectoryTraverser:
    """Walks a directory tree depth-first and accumulates statistics."""

    def __init__(self, flags: TraversalFlags = TraversalFlags.TREE,
                 sink: Optional[EventSink] = None,
                 on_error: ErrorPolicy = ErrorPolicy.IGNORE,
                 max_depth: Optional[int] = None):
        """Initialize directory traverser.

        Args:
            flags: Output control flags, stored for callers. They do not
                alter what gets traversed.
            sink: Callable receiving a VisitEvent for every entry.
            on_error: Policy for directories that cannot be listed.
            max_depth: Number of directory levels to list below a root,
                at least 1. None means unlimited.
        """
        self.flags = flags
        self.sink = sink
        self.on_error = on_error
        self.max_depth = max_depth
        self.skipped: List[SkippedDirectory] = []
        self.logger = logging.getLogger(__name__)

    def traverse(self, path: str, stats: Statistics) -> TraversalOutcome:
        """Traverse the tree below path, updating stats in place.

        Entries of every directory are listed and sorted before any of them
        is emitted or descended into. A sub-directory that cannot be opened
        is still counted by its parent, but nothing below it is.

        Args:
            path: Root directory to traverse.
            stats: Statistics record owned by the caller.

        Returns:
            SKIPPED if the root could not be listed, EMPTY if it has no
            entries, COMPLETED otherwise.

        Raises:
            TraversalError: If a directory cannot be listed and the error
                policy is RAISE.
        """
        root = normalize_root(path)
        self.skipped = []

        entries = self._list_directory(root)
        if entries is None:
            return TraversalOutcome.SKIPPED
        if not entries:
            return TraversalOutcome.EMPTY

        # Explicit stack instead of recursion; same depth-first order.
        stack = [_Frame(root, 1, iter(entries))]
        while stack:
            frame = stack[-1]
            entry = next(frame.entries, None)
            if entry is None:
                stack.pop()
                continue

            if self.sink is not None:
                self.sink(VisitEvent(entry=entry, depth=frame.depth, parent=frame.path))
            stats.record(entry)

            if entry.is_directory and self._may_descend(frame.depth):
                children = self._list_directory(entry.path)
                if children:
                    stack.append(_Frame(entry.path, frame.depth + 1, iter(children)))

        return TraversalOutcome.COMPLETED

    def _may_descend(self, depth: int) -> bool:
        return self.max_depth is None or depth < self.max_depth

    def _list_directory(self, path: str) -> Optional[List[DirectoryEntry]]:
        """Snapshot and sort the entries of one directory.

        Returns:
            Sorted entries, or None if the directory could not be listed.
        """
        try:
            with os.scandir(path) as it:
                snapshot = [self._make_entry(path, dir_entry)
                            for dir_entry in it
                            if dir_entry.name not in _IGNORED_NAMES]
        except OSError as e:
            self._handle_skip(path, e)
            return None

        return sort_entries(snapshot)

    def _make_entry(self, parent: str, dir_entry: os.DirEntry) -> DirectoryEntry:
        path = join_path(parent, dir_entry.name)
        try:
            st = dir_entry.stat(follow_symlinks=False)
        except OSError as e:
            # Entry vanished or is unreadable; list it without metadata.
            self.logger.debug(f"Cannot stat {path}: {e}")
            return DirectoryEntry(name=dir_entry.name, path=path,
                                  entry_type=self._classify_dir_entry(dir_entry))

        metadata = EntryMetadata(size=st.st_size, blocks=getattr(st, "st_blocks", 0),
                                 mode=st.st_mode, uid=st.st_uid, gid=st.st_gid)
        return DirectoryEntry(name=dir_entry.name, path=path,
                              entry_type=classify_mode(st.st_mode), metadata=metadata)

    def _classify_dir_entry(self, dir_entry: os.DirEntry) -> EntryType:
        """Fallback classification from the directory listing alone."""
        try:
            if dir_entry.is_symlink():
                return EntryType.LINK
            if dir_entry.is_dir(follow_symlinks=False):
                return EntryType.DIRECTORY
            if dir_entry.is_file(follow_symlinks=False):
                return EntryType.FILE
        except OSError as e:
            self.logger.debug(f"Cannot classify {dir_entry.name}: {e}")
        return EntryType.OTHER

    def _handle_skip(self, path: str, error: OSError) -> None:
        message = error.strerror or str(error)
        self.skipped.append(SkippedDirectory(path=path, error_message=message))

        if self.on_error is ErrorPolicy.RAISE:
            raise TraversalError(path, error) from error
        if self.on_error is ErrorPolicy.WARN:
            self.logger.warning(f"Skipping {path}: {message}")
        else:
            self.logger.debug(f"Skipping {path}: {message}")
