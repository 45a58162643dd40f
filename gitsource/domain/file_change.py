"""Domain models for patch output.

Parse-once pattern: raw patch text from git log or git diff is parsed into
type-safe models at the boundary. A FileChange is one file's hunks within a
single commit or diff; records are forwarded to callers unmodified.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ============================================================
# Domain Models
# ============================================================


class DiffLineType(Enum):
    """Type of line in a hunk."""

    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass
class DiffLine:
    """A single line from a hunk with metadata.

    Attributes:
        content: The line content (without the +/- prefix)
        raw_line: The original line including +/- prefix
        line_type: Whether this is an added, removed, or context line
        new_line_number: Line number in the new file (None for removed lines)
        old_line_number: Line number in the old file (None for added lines)
        no_newline_at_eof: Whether git marked this line as lacking a newline
    """

    content: str
    raw_line: str
    line_type: DiffLineType
    new_line_number: int | None = None
    old_line_number: int | None = None
    no_newline_at_eof: bool = False

    @property
    def is_changed(self) -> bool:
        """Check if this line represents a change (added or removed)."""
        return self.line_type in (DiffLineType.ADDED, DiffLineType.REMOVED)


@dataclass
class Hunk:
    """A contiguous section of changes within a file.

    Identified by its @@ header; with --unified=0 a hunk carries no context
    lines, only additions and removals.
    """

    old_start: int = 0
    old_length: int = 0
    new_start: int = 0
    new_length: int = 0
    section: str = ""
    lines: list[DiffLine] = field(default_factory=list)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def header(self) -> str:
        """Rebuild the @@ header line."""
        header = (
            f"@@ -{self.old_start},{self.old_length} "
            f"+{self.new_start},{self.new_length} @@"
        )
        if self.section:
            header += f" {self.section}"
        return header

    def get_added_lines(self) -> list[DiffLine]:
        """Get only added lines (lines starting with +)."""
        return [line for line in self.lines if line.line_type == DiffLineType.ADDED]

    def get_removed_lines(self) -> list[DiffLine]:
        """Get only removed lines (lines starting with -)."""
        return [line for line in self.lines if line.line_type == DiffLineType.REMOVED]

    def get_changed_lines(self) -> list[DiffLine]:
        """Get all changed lines (both added and removed)."""
        return [line for line in self.lines if line.is_changed]

    def get_added_content(self) -> str:
        """Get the text of added lines only.

        This is what a scanner matches against: text introduced by the change,
        not text it removed.
        """
        return "\n".join(line.content for line in self.get_added_lines())

    def to_dict(self) -> dict:
        """Convert hunk to dictionary for JSON serialization."""
        return {
            "old_start": self.old_start,
            "old_length": self.old_length,
            "new_start": self.new_start,
            "new_length": self.new_length,
            "section": self.section,
            "lines": [line.raw_line for line in self.lines],
        }


@dataclass
class CommitInfo:
    """Commit metadata preceding a group of file changes in git log output.

    merge_parents is only filled for merge commits, from the Merge: header;
    git log does not print parents of ordinary commits.
    """

    sha: str
    merge_parents: list[str] = field(default_factory=list)
    author_name: str = ""
    author_email: str = ""
    date: str = ""
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "sha": self.sha,
            "merge_parents": self.merge_parents,
            "author_name": self.author_name,
            "author_email": self.author_email,
            "date": self.date,
            "message": self.message,
        }


@dataclass
class FileChange:
    """One file's patch within a single commit or diff.

    Names are repository-relative with the a/ and b/ prefixes removed. The
    old name is empty for added files and the new name is empty for deleted
    files.
    """

    old_name: str = ""
    new_name: str = ""
    is_new: bool = False
    is_delete: bool = False
    is_rename: bool = False
    is_copy: bool = False
    is_binary: bool = False
    old_mode: str = ""
    new_mode: str = ""
    old_oid: str = ""
    new_oid: str = ""
    similarity: int | None = None
    hunks: list[Hunk] = field(default_factory=list)
    commit: CommitInfo | None = None

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def name(self) -> str:
        """The path this change is reported under."""
        return self.old_name if self.is_delete else self.new_name

    @property
    def added_content(self) -> str:
        """Added text across all hunks."""
        return "\n".join(
            hunk.get_added_content() for hunk in self.hunks if hunk.get_added_lines()
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "old_name": self.old_name,
            "new_name": self.new_name,
            "is_new": self.is_new,
            "is_delete": self.is_delete,
            "is_rename": self.is_rename,
            "is_copy": self.is_copy,
            "is_binary": self.is_binary,
            "old_mode": self.old_mode,
            "new_mode": self.new_mode,
            "old_oid": self.old_oid,
            "new_oid": self.new_oid,
            "similarity": self.similarity,
            "commit": self.commit.to_dict() if self.commit else None,
            "hunks": [hunk.to_dict() for hunk in self.hunks],
        }
