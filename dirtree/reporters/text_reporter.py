"""Plain text reporter for tree listings and summaries."""

from typing import Callable, Optional

import click

from ..core.models import (
    AnalysisResult,
    RootReport,
    Statistics,
    TraversalFlags,
    VisitEvent,
)
from ..utils.formatters import (
    format_group,
    format_owner,
    format_permissions,
    get_type_indicator,
    truncate_string,
)

DEFAULT_NAME_WIDTH = 54
INDENT = "  "


class TextReporter:
    """Prints visit events and summary blocks as text lines."""

    def __init__(self, flags: TraversalFlags, name_width: int = DEFAULT_NAME_WIDTH,
                 echo: Optional[Callable[[str], None]] = None):
        """Initialize text reporter.

        Args:
            flags: Output control flags deciding what is printed.
            name_width: Column width of the name in verbose mode.
            echo: Line writer, click.echo by default.
        """
        self.flags = flags
        self.name_width = name_width
        self.echo = echo or click.echo

    @property
    def tree(self) -> bool:
        return bool(self.flags & (TraversalFlags.TREE | TraversalFlags.VERBOSE))

    @property
    def summary(self) -> bool:
        return bool(self.flags & TraversalFlags.SUMMARY)

    @property
    def verbose(self) -> bool:
        return bool(self.flags & TraversalFlags.VERBOSE)

    def start_root(self, path: str) -> None:
        if self.summary:
            self.echo(f"\nDirectory: {path}")
        if self.verbose:
            header = self._verbose_header()
            self.echo(header)
            self.echo("-" * len(header))
        if self.tree:
            self.echo(path)

    def visit(self, event: VisitEvent) -> None:
        """Event sink handed to the traversal engine."""
        if not self.tree:
            return
        if self.verbose:
            self.echo(self.format_verbose_line(event))
        else:
            self.echo(INDENT * event.depth + event.entry.name)

    def finish_root(self, report: RootReport) -> None:
        if not self.summary:
            return
        if self.verbose:
            self.echo("-" * len(self._verbose_header()))
        for line in self.format_summary(report.stats):
            self.echo(line)

    def finish(self, result: AnalysisResult) -> None:
        """Print the grand total when several roots were summarized."""
        if not result.show_grand_total(self.flags):
            return
        for line in self.format_grand_total(result):
            self.echo(line)

    def format_verbose_line(self, event: VisitEvent) -> str:
        """Format one entry with owner, size, blocks, type and permissions."""
        entry = event.entry
        name = truncate_string(INDENT * event.depth + entry.name, self.name_width)
        type_char = get_type_indicator(entry.entry_type)

        metadata = entry.metadata
        if metadata is None:
            return f"{name:<{self.name_width}}  {'?':>8}:{'?':<8}  {'?':>10}  {'?':>8}  {type_char}"

        owner = format_owner(metadata.uid)
        group = format_group(metadata.gid)
        permissions = format_permissions(metadata.mode)
        return (f"{name:<{self.name_width}}  {owner:>8}:{group:<8}  "
                f"{metadata.size:>10}  {metadata.blocks:>8}  {type_char}  {permissions}")

    def format_summary(self, stats: Statistics) -> list:
        return [
            f"  # of files:        {stats.files}",
            f"  # of directories:  {stats.dirs}",
            f"  # of links:        {stats.links}",
            f"  # of pipes:        {stats.fifos}",
            f"  # of sockets:      {stats.sockets}",
            f"  total file size:   {stats.size} bytes",
            f"  total blocks:      {stats.blocks}",
        ]

    def format_grand_total(self, result: AnalysisResult) -> list:
        total = result.total
        lines = [
            f"Analyzed {len(result.roots)} directories:",
            f"  total # of files:        {total.files:>16}",
            f"  total # of directories:  {total.dirs:>16}",
            f"  total # of links:        {total.links:>16}",
            f"  total # of pipes:        {total.fifos:>16}",
            f"  total # of sockets:      {total.sockets:>16}",
        ]
        # size totals are only part of the verbose grand total
        if self.verbose:
            lines.append(f"  total file size:         {total.size:>16}")
            lines.append(f"  total # of blocks:       {total.blocks:>16}")
        return lines

    def _verbose_header(self) -> str:
        return (f"{'Name':<{self.name_width}}  {'User':>8}:{'Group':<8}  "
                f"{'Size':>10}  {'Blocks':>8}  Type")
