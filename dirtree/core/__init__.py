"""Core traversal functionality."""

from .analyzer import TreeAnalyzer
from .errors import DirtreeError, TraversalError
from .models import (
    AnalysisResult,
    DirectoryEntry,
    EntryType,
    ErrorPolicy,
    RootReport,
    Statistics,
    TraversalFlags,
    TraversalOutcome,
    VisitEvent,
)
from .ordering import compare_entries, sort_entries
from .paths import join_path, normalize_root
from .traverser import DirectoryTraverser

__all__ = [
    "TreeAnalyzer", "DirectoryTraverser", "DirtreeError", "TraversalError",
    "AnalysisResult", "DirectoryEntry", "EntryType", "ErrorPolicy", "RootReport",
    "Statistics", "TraversalFlags", "TraversalOutcome", "VisitEvent",
    "compare_entries", "sort_entries", "join_path", "normalize_root",
]
