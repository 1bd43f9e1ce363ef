"""Data models for directory tree traversal."""

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class TraversalFlags(enum.IntFlag):
    """Output control flags."""
    NONE = 0
    TREE = 0x1
    SUMMARY = 0x2
    VERBOSE = 0x4


class EntryType(enum.Enum):
    """Kind of a directory entry, as reported by lstat."""
    DIRECTORY = "directory"
    FILE = "file"
    LINK = "link"
    FIFO = "fifo"
    SOCKET = "socket"
    OTHER = "other"


class TraversalOutcome(enum.Enum):
    """Result of processing a single directory."""
    COMPLETED = "completed"
    EMPTY = "empty"
    SKIPPED = "skipped"


class ErrorPolicy(enum.Enum):
    """What to do when a directory cannot be opened or listed."""
    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"


@dataclass(frozen=True)
class EntryMetadata:
    """Metadata snapshot taken with lstat."""
    size: int
    blocks: int
    mode: int
    uid: int
    gid: int


@dataclass(frozen=True)
class DirectoryEntry:
    """A named item inside a directory."""
    name: str
    path: str
    entry_type: EntryType
    metadata: Optional[EntryMetadata] = None

    @property
    def is_directory(self) -> bool:
        return self.entry_type is EntryType.DIRECTORY


@dataclass(frozen=True)
class VisitEvent:
    """Emitted once for every entry the traverser visits."""
    entry: DirectoryEntry
    depth: int
    parent: str


@dataclass(frozen=True)
class SkippedDirectory:
    """A directory whose listing failed."""
    path: str
    error_message: str


@dataclass
class Statistics:
    """Per-type counts and size totals for one traversal scope."""
    dirs: int = 0
    files: int = 0
    links: int = 0
    fifos: int = 0
    sockets: int = 0
    size: int = 0
    blocks: int = 0

    _COUNTERS = {
        EntryType.DIRECTORY: "dirs",
        EntryType.FILE: "files",
        EntryType.LINK: "links",
        EntryType.FIFO: "fifos",
        EntryType.SOCKET: "sockets",
    }

    def record(self, entry: DirectoryEntry) -> None:
        """Count an entry and add its size if it is not a directory.

        Entries of type OTHER are not counted in any bucket.
        """
        counter = self._COUNTERS.get(entry.entry_type)
        if counter is not None:
            setattr(self, counter, getattr(self, counter) + 1)

        if not entry.is_directory and entry.metadata is not None:
            self.size += entry.metadata.size
            self.blocks += entry.metadata.blocks

    def merge(self, other: "Statistics") -> None:
        """Add the totals of another Statistics record into this one."""
        self.dirs += other.dirs
        self.files += other.files
        self.links += other.links
        self.fifos += other.fifos
        self.sockets += other.sockets
        self.size += other.size
        self.blocks += other.blocks

    @property
    def is_empty(self) -> bool:
        return not any((self.dirs, self.files, self.links, self.fifos,
                        self.sockets, self.size, self.blocks))


@dataclass
class RootReport:
    """Traversal result for a single root path."""
    path: str
    stats: Statistics
    outcome: TraversalOutcome
    skipped: List[SkippedDirectory] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Results for every root of one invocation."""
    roots: List[RootReport] = field(default_factory=list)
    ignored_paths: List[str] = field(default_factory=list)
    total: Statistics = field(default_factory=Statistics)

    def show_grand_total(self, flags: TraversalFlags) -> bool:
        """Grand totals are shown only in summary mode with several roots."""
        return bool(flags & TraversalFlags.SUMMARY) and len(self.roots) > 1
