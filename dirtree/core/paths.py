"""Path construction helpers.

Paths are POSIX-style strings. Every join produces exactly one separator
between the parent and the child name.
"""

SEPARATOR = "/"


def normalize_root(path: str) -> str:
    """Strip trailing separators from a root path.

    ``"a/b/"`` and ``"a/b"`` name the same directory; the filesystem root
    itself is kept as ``"/"``. An empty path means the current directory.
    """
    if not path:
        return "."
    stripped = path.rstrip(SEPARATOR)
    return stripped or SEPARATOR


def join_path(parent: str, name: str) -> str:
    """Join a parent directory and a child name.

    Args:
        parent: Directory path, with or without a trailing separator.
        name: A single path component.

    Returns:
        The joined path.

    Raises:
        ValueError: If name is empty, contains a separator, or is "." or "..".
    """
    if not name:
        raise ValueError("Path component cannot be empty")
    if SEPARATOR in name:
        raise ValueError(f"Path component contains a separator: {name!r}")
    if name in (".", ".."):
        raise ValueError(f"Refusing to join self/parent reference: {name!r}")

    parent = normalize_root(parent)
    if parent.endswith(SEPARATOR):
        return parent + name
    return parent + SEPARATOR + name
