"""Deterministic ordering of directory listings."""

import functools
import os
from typing import Iterable, List

from .models import DirectoryEntry


def compare_entries(a: DirectoryEntry, b: DirectoryEntry) -> int:
    """Directories first, then byte-wise by name.

    Returns:
        -1 if a sorts before b, 1 if after, 0 if both are equal.
    """
    # directories always come first
    if a.is_directory and not b.is_directory:
        return -1
    if b.is_directory and not a.is_directory:
        return 1

    name_a = os.fsencode(a.name)
    name_b = os.fsencode(b.name)
    if name_a < name_b:
        return -1
    if name_a > name_b:
        return 1
    return 0


def sort_entries(entries: Iterable[DirectoryEntry]) -> List[DirectoryEntry]:
    """Return a new list of entries sorted by compare_entries."""
    return sorted(entries, key=functools.cmp_to_key(compare_entries))
