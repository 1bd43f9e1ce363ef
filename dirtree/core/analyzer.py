"""Runs the traversal engine over several root paths."""

import logging
from typing import List, Optional, Sequence, Tuple

from .models import (
    AnalysisResult,
    ErrorPolicy,
    RootReport,
    Statistics,
    TraversalFlags,
)
from .traverser import DirectoryTraverser

DEFAULT_MAX_PATHS = 64
CURRENT_DIRECTORY = "."


class TreeAnalyzer:
    """Traverses each root with its own statistics and builds the grand total."""

    def __init__(self, flags: TraversalFlags = TraversalFlags.TREE, reporter=None,
                 on_error: ErrorPolicy = ErrorPolicy.IGNORE,
                 max_paths: int = DEFAULT_MAX_PATHS,
                 max_depth: Optional[int] = None):
        """Initialize tree analyzer.

        Args:
            flags: Output control flags.
            reporter: Optional object with start_root(path), visit(event)
                and finish_root(report) methods.
            on_error: Policy for directories that cannot be listed.
            max_paths: Maximum number of roots processed per invocation.
            max_depth: Directory levels listed below each root, None for all.
        """
        self.flags = flags
        self.reporter = reporter
        self.max_paths = max_paths
        self.traverser = DirectoryTraverser(
            flags=flags,
            sink=reporter.visit if reporter is not None else None,
            on_error=on_error,
            max_depth=max_depth,
        )
        self.logger = logging.getLogger(__name__)

    def select_roots(self, paths: Sequence[str]) -> Tuple[List[str], List[str]]:
        """Split paths into the roots to process and the ones ignored.

        Returns:
            Tuple of (accepted roots, ignored paths).
        """
        if not paths:
            return [CURRENT_DIRECTORY], []

        accepted = list(paths[:self.max_paths])
        ignored = list(paths[self.max_paths:])
        for path in ignored:
            self.logger.warning(f"Maximum number of directories exceeded, ignoring '{path}'")
        return accepted, ignored

    def analyze(self, paths: Sequence[str]) -> AnalysisResult:
        """Traverse every root and accumulate the grand total.

        Args:
            paths: Root paths; the current directory when empty.

        Returns:
            AnalysisResult with one RootReport per processed root.
        """
        roots, ignored = self.select_roots(paths)
        result = AnalysisResult(ignored_paths=ignored)

        for root in roots:
            report = self.analyze_root(root)
            result.roots.append(report)
            result.total.merge(report.stats)

        self.logger.info(f"Analyzed {len(result.roots)} directories")
        return result

    def analyze_root(self, root: str) -> RootReport:
        """Traverse a single root with a fresh Statistics record."""
        if self.reporter is not None:
            self.reporter.start_root(root)

        stats = Statistics()
        self.logger.debug(f"Starting traversal of {root}")
        outcome = self.traverser.traverse(root, stats)
        report = RootReport(path=root, stats=stats, outcome=outcome,
                            skipped=list(self.traverser.skipped))
        self.logger.debug(f"Completed traversal of {root}: {outcome.value}, "
                          f"{len(report.skipped)} directories skipped")
        if stats.is_empty:
            self.logger.debug(f"Nothing counted below {root}")

        if self.reporter is not None:
            self.reporter.finish_root(report)
        return report
