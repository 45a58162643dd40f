"""Infrastructure components for gitsource.

This layer handles external system interactions:
- git/ - git subprocess execution, patch parsing and output formatting
"""

from .git import (
    Deadline,
    Gitter,
    locate_git,
    parse_patch,
    resolve_directory,
)

__all__ = [
    "Deadline",
    "Gitter",
    "locate_git",
    "parse_patch",
    "resolve_directory",
]
