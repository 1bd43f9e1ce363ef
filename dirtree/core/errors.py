"""Exceptions raised by the traversal engine."""


class DirtreeError(Exception):
    """Base class for dirtree errors."""


class TraversalError(DirtreeError):
    """A directory could not be opened or listed."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot read directory {path}: {cause.strerror or cause}")
