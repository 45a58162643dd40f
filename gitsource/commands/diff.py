"""Diff command.

Thin command that extracts uncommitted file changes (staged or unstaged)
from a working tree and writes them to stdout as they are parsed.
"""

from __future__ import annotations

import sys

from gitsource.commands.settings import load_settings
from gitsource.infrastructure.git.errors import GitError
from gitsource.infrastructure.git.output import write_changes
from gitsource.services.change_extractor import ChangeExtractor


def cmd_diff(
    source: str = ".",
    staged: bool = False,
    output_format: str = "json",
    config_file: str | None = None,
) -> int:
    """Extract working tree changes and print them.

    Args:
        source: Repository directory
        staged: Report staged changes instead of unstaged ones
        output_format: 'json' (one object per line) or 'text'
        config_file: Optional YAML settings file

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    settings = load_settings(config_file)
    if settings is None:
        return 1

    try:
        changes = ChangeExtractor(settings).extract_diff(source, staged=staged)
        write_changes(changes, output_format)
    except GitError as e:
        print(f"Failed to extract diff from {source}: {e}", file=sys.stderr)
        return 1

    return 0
