"""Structured change history from git.

Runs git against a working tree and turns its patch output into a lazy
stream of FileChange records, for scanners and analysis pipelines that need
to look at historical or pending modifications.

Usage:
    from gitsource import git_log, git_diff

    for change in git_log("path/to/repo"):
        print(change.name, change.added_content)

Structure:
    gitsource/
    ├── __main__.py          # CLI entry point dispatcher
    ├── domain/              # FileChange, Hunk, CommitInfo, settings
    ├── services/            # Change extraction (git log / git diff)
    ├── infrastructure/      # git subprocess runner and patch parser
    └── commands/            # Thin command orchestrators
"""

from gitsource.domain.file_change import (
    CommitInfo,
    DiffLine,
    DiffLineType,
    FileChange,
    Hunk,
)
from gitsource.domain.settings import ExtractorSettings
from gitsource.infrastructure.git.errors import (
    GitConfigurationError,
    GitError,
    GitExecutionError,
    GitExitError,
    GitNotFoundError,
    GitStartError,
    GitTimeoutError,
    PatchParseError,
    PathResolutionError,
)
from gitsource.services.change_extractor import ChangeExtractor, git_diff, git_log

__all__ = [
    "ChangeExtractor",
    "CommitInfo",
    "DiffLine",
    "DiffLineType",
    "ExtractorSettings",
    "FileChange",
    "GitConfigurationError",
    "GitError",
    "GitExecutionError",
    "GitExitError",
    "GitNotFoundError",
    "GitStartError",
    "GitTimeoutError",
    "Hunk",
    "PatchParseError",
    "PathResolutionError",
    "git_diff",
    "git_log",
]
