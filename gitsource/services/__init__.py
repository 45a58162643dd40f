"""Services for gitsource.

Services encapsulate business logic and orchestrate infrastructure and
domain models.
"""

from gitsource.services.change_extractor import (
    ChangeExtractor,
    build_diff_args,
    build_log_args,
    git_diff,
    git_log,
)

__all__ = [
    "ChangeExtractor",
    "build_diff_args",
    "build_log_args",
    "git_diff",
    "git_log",
]
