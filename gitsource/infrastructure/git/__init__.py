"""Git primitives - command execution and patch parsing."""

from .gitter import RENAME_LIMIT, Deadline, Gitter, locate_git, resolve_directory
from .patch_parser import parse_patch, unquote_name

__all__ = [
    "RENAME_LIMIT",
    "Deadline",
    "Gitter",
    "locate_git",
    "parse_patch",
    "resolve_directory",
    "unquote_name",
]
