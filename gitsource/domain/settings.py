"""Extraction settings.

Settings may be loaded from a YAML file. Parse-once pattern: the file is
parsed into a type-safe model at the boundary using from_file().
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

BOOTSTRAP_TIMEOUT = 10.0
COMMAND_TIMEOUT = 5 * 60.0


@dataclass(frozen=True)
class ExtractorSettings:
    """Deadlines and default log options for change extraction.

    Attributes:
        bootstrap_timeout: Seconds allowed for the two bootstrap config commands
        command_timeout: Seconds allowed for one git log or git diff
        log_opts: Default git log options, whitespace separated; empty scans
            the full history of all refs
    """

    bootstrap_timeout: float = BOOTSTRAP_TIMEOUT
    command_timeout: float = COMMAND_TIMEOUT
    log_opts: str = ""

    def __post_init__(self):
        for name in ("bootstrap_timeout", "command_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict | None) -> ExtractorSettings:
        """Parse settings from a dictionary.

        Args:
            data: Raw dictionary from YAML, or None for defaults

        Returns:
            Typed ExtractorSettings instance

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Settings must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        return cls(
            bootstrap_timeout=float(data.get("bootstrap_timeout", BOOTSTRAP_TIMEOUT)),
            command_timeout=float(data.get("command_timeout", COMMAND_TIMEOUT)),
            log_opts=str(data.get("log_opts") or ""),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> ExtractorSettings:
        """Load settings from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the content is invalid
        """
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(data)
