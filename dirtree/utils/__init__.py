"""Utility modules for dirtree."""

from .formatters import (
    format_group,
    format_owner,
    format_permissions,
    get_type_indicator,
    truncate_string,
)

__all__ = ["format_group", "format_owner", "format_permissions",
           "get_type_indicator", "truncate_string"]
