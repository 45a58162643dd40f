"""Settings loading shared by the commands."""

from __future__ import annotations

import sys

from gitsource.domain.settings import ExtractorSettings


def load_settings(config_file: str | None) -> ExtractorSettings | None:
    """Load settings, printing the problem and returning None on failure."""
    if config_file is None:
        return ExtractorSettings()
    try:
        return ExtractorSettings.from_file(config_file)
    except FileNotFoundError:
        print(f"Config file not found: {config_file}", file=sys.stderr)
    except ValueError as e:
        print(f"Invalid config file {config_file}: {e}", file=sys.stderr)
    return None
