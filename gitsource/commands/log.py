"""Log command.

Thin command that extracts file changes from the commit history of a
repository and writes them to stdout as they are parsed.
"""

from __future__ import annotations

import sys

from gitsource.commands.settings import load_settings
from gitsource.infrastructure.git.errors import GitError
from gitsource.infrastructure.git.output import write_changes
from gitsource.services.change_extractor import ChangeExtractor


def cmd_log(
    source: str = ".",
    log_opts: str | None = None,
    output_format: str = "json",
    config_file: str | None = None,
) -> int:
    """Extract history changes and print them.

    Args:
        source: Repository directory
        log_opts: git log options; None uses the configured default
        output_format: 'json' (one object per line) or 'text'
        config_file: Optional YAML settings file

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    # --------------------------------------------------------
    # 1. Load settings
    # --------------------------------------------------------
    settings = load_settings(config_file)
    if settings is None:
        return 1

    # --------------------------------------------------------
    # 2. Extract and stream
    # --------------------------------------------------------
    try:
        changes = ChangeExtractor(settings).extract_log(source, log_opts)
        write_changes(changes, output_format)
    except GitError as e:
        print(f"Failed to extract history from {source}: {e}", file=sys.stderr)
        return 1

    return 0
