"""Domain models for gitsource."""

from gitsource.domain.file_change import (
    CommitInfo,
    DiffLine,
    DiffLineType,
    FileChange,
    Hunk,
)
from gitsource.domain.settings import ExtractorSettings

__all__ = [
    "CommitInfo",
    "DiffLine",
    "DiffLineType",
    "ExtractorSettings",
    "FileChange",
    "Hunk",
]
