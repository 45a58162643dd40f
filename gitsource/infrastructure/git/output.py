"""Formatting of FileChange records for command output.

JSON output is one object per line so records can be written as soon as
they are parsed.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TextIO

from gitsource.domain.file_change import FileChange


# ============================================================
# Output Functions
# ============================================================


def format_change_as_json(change: FileChange) -> str:
    """Format a FileChange as a single line of JSON."""
    return json.dumps(change.to_dict(), ensure_ascii=False)


def format_change_as_text(change: FileChange) -> str:
    """Format a FileChange as human-readable text for debugging.

    Args:
        change: Parsed FileChange instance

    Returns:
        Text representation showing the file, its status and its hunks
    """
    lines = []
    if change.commit:
        lines.append(f"Commit: {change.commit.sha}")

    if change.is_rename:
        status = f"renamed from {change.old_name}"
    elif change.is_copy:
        status = f"copied from {change.old_name}"
    elif change.is_new:
        status = "added"
    elif change.is_delete:
        status = "deleted"
    else:
        status = "modified"
    if change.is_binary:
        status += ", binary"

    lines.append(f"File: {change.name} ({status})")
    for i, hunk in enumerate(change.hunks, 1):
        lines.append(
            f"  Hunk {i}: -{hunk.old_start},{hunk.old_length} "
            f"+{hunk.new_start},{hunk.new_length} "
            f"({len(hunk.get_added_lines())} added, {len(hunk.get_removed_lines())} removed)"
        )
    return "\n".join(lines)


# ============================================================
# Summaries
# ============================================================


@dataclass
class ChangeSummary:
    """Totals over a stream of FileChange records."""

    files: int = 0
    hunks: int = 0
    added_lines: int = 0
    removed_lines: int = 0
    commits: set[str] = field(default_factory=set)

    def add(self, change: FileChange) -> None:
        self.files += 1
        self.hunks += len(change.hunks)
        for hunk in change.hunks:
            self.added_lines += len(hunk.get_added_lines())
            self.removed_lines += len(hunk.get_removed_lines())
        if change.commit:
            self.commits.add(change.commit.sha)

    def to_text(self) -> str:
        return (
            f"Commits: {len(self.commits)}\n"
            f"Files changed: {self.files}\n"
            f"Total hunks: {self.hunks}\n"
            f"Lines: +{self.added_lines} -{self.removed_lines}"
        )


def summarize_changes(changes: Iterable[FileChange]) -> ChangeSummary:
    """Consume changes and return their totals."""
    summary = ChangeSummary()
    for change in changes:
        summary.add(change)
    return summary


def write_changes(
    changes: Iterable[FileChange],
    output_format: str = "json",
    stream: TextIO | None = None,
) -> ChangeSummary:
    """Write each change as soon as it is produced.

    Args:
        changes: FileChange records, consumed once
        output_format: 'json' for one object per line, 'text' for a readable listing
        stream: Destination (default: stdout)

    Returns:
        Totals over the written changes
    """
    if stream is None:
        stream = sys.stdout
    summary = ChangeSummary()
    for change in changes:
        if output_format == "text":
            stream.write(format_change_as_text(change) + "\n\n")
        else:
            stream.write(format_change_as_json(change) + "\n")
        summary.add(change)
    if output_format == "text":
        stream.write(summary.to_text() + "\n")
    return summary
