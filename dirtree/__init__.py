"""
dirtree - Recursively list directory trees and summarize their contents.

This package walks one or more directory trees in a deterministic order,
prints each entry and aggregates per-type counts and size totals.
"""

__version__ = "1.0.0"
__author__ = "Your Name"
__email__ = "your.email@example.com"

from .core.analyzer import TreeAnalyzer
from .core.traverser import DirectoryTraverser
from .reporters.text_reporter import TextReporter

__all__ = ["TreeAnalyzer", "DirectoryTraverser", "TextReporter"]
