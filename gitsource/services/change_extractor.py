"""Change extraction service.

Core service that turns a source directory into a lazy stream of FileChange
records, either from the full commit history (git log) or from pending
changes in the working tree (git diff). Each call is a single-shot pipeline:
locate git, configure the directory, run the command, parse the output.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Iterator

from gitsource.domain.file_change import FileChange
from gitsource.domain.settings import ExtractorSettings
from gitsource.infrastructure.git.gitter import Deadline, Gitter
from gitsource.infrastructure.git.patch_parser import parse_patch

logger = logging.getLogger(__name__)


# ============================================================
# Argument builders
# ============================================================


def build_log_args(log_opts: str = "") -> list[str]:
    """Build git log arguments.

    Args:
        log_opts: Caller options, split on whitespace only (no shell quoting)
            and appended verbatim. Empty means all refs and full history.

    Returns:
        Argument list without the git binary
    """
    args = ["log", "--patch", "--unified=0"]
    extra = log_opts.split()
    if extra:
        args.extend(extra)
    else:
        args.extend(["--full-history", "--all"])
    return args


def build_diff_args(staged: bool = False) -> list[str]:
    """Build git diff arguments for the whole working tree.

    Args:
        staged: Compare the index to HEAD instead of the working tree to the index

    Returns:
        Argument list without the git binary
    """
    args = ["diff", "--unified=0"]
    if staged:
        args.extend(["--staged", "."])
    else:
        args.append(".")
    return args


# ============================================================
# Service
# ============================================================


class ChangeExtractor:
    """Extracts FileChange records from a git working tree.

    Stateless apart from its settings; a new Gitter is built and bootstrapped
    for every call. Failures before parsing raise from the call itself, so no
    iterator is ever returned alongside an error.
    """

    def __init__(self, settings: ExtractorSettings | None = None):
        """Initialize with extraction settings.

        Args:
            settings: Deadlines and default log options (default: built-in defaults)
        """
        self.settings = settings or ExtractorSettings()

    def extract_log(
        self, source: str | os.PathLike, log_opts: str | None = None
    ) -> Iterator[FileChange]:
        """Extract file changes from the commit history.

        Args:
            source: Repository directory
            log_opts: git log options overriding settings.log_opts

        Returns:
            Lazy iterator of FileChange records in commit order

        Raises:
            GitNotFoundError: If git is not installed
            PathResolutionError: If source cannot be made absolute
            GitConfigurationError: If the directory cannot be configured
            GitExecutionError: If git log fails or times out
        """
        if log_opts is None:
            log_opts = self.settings.log_opts
        logger.debug("Extracting history from %s", source)
        return self._run(source, build_log_args(log_opts))

    def extract_diff(
        self, source: str | os.PathLike, staged: bool = False
    ) -> Iterator[FileChange]:
        """Extract uncommitted file changes.

        Args:
            source: Repository directory
            staged: Report staged changes instead of unstaged ones

        Returns:
            Lazy iterator of FileChange records in path order

        Raises:
            Same as extract_log()
        """
        logger.debug("Extracting %s changes from %s", "staged" if staged else "unstaged", source)
        return self._run(source, build_diff_args(staged))

    def _run(self, source: str | os.PathLike, args: list[str]) -> Iterator[FileChange]:
        gitter = Gitter.for_directory(source, timeout=self.settings.bootstrap_timeout)
        output = gitter.execute(args, Deadline(self.settings.command_timeout))
        return parse_patch(io.BufferedReader(io.BytesIO(output)))


# ============================================================
# Module-level helpers
# ============================================================


def git_log(source: str | os.PathLike, log_opts: str = "") -> Iterator[FileChange]:
    """Extract history changes with default settings."""
    return ChangeExtractor().extract_log(source, log_opts)


def git_diff(source: str | os.PathLike, staged: bool = False) -> Iterator[FileChange]:
    """Extract working tree changes with default settings."""
    return ChangeExtractor().extract_diff(source, staged)
