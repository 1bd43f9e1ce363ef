"""Formatting utilities for tree listings."""

import grp
import pwd
import stat
from typing import Optional

from ..core.models import EntryType

TYPE_INDICATORS = {
    EntryType.DIRECTORY: "d",
    EntryType.FILE: " ",
    EntryType.LINK: "l",
    EntryType.FIFO: "p",
    EntryType.SOCKET: "s",
    EntryType.OTHER: "?",
}


def format_owner(uid: int) -> str:
    """Resolve a user id to a user name, falling back to the number."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def format_group(gid: int) -> str:
    """Resolve a group id to a group name, falling back to the number."""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def format_permissions(mode: Optional[int]) -> str:
    """Format st_mode as an ls-style permission string."""
    if mode is None:
        return "?" * 10
    return stat.filemode(mode)


def get_type_indicator(entry_type: EntryType) -> str:
    return TYPE_INDICATORS[entry_type]


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate string to maximum length.
    
    Args:
        text: Text to truncate.
        max_length: Maximum length.
        suffix: Suffix to add when truncating.
        
    Returns:
        Truncated string.
    """
    if len(text) <= max_length:
        return text
    if max_length <= len(suffix):
        return text[:max_length]
    
    return text[:max_length - len(suffix)] + suffix
