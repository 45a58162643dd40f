"""Git command runner bound to one working directory.

Infrastructure component that wraps every subprocess call to git. A Gitter
is built once per extraction, configures git for the target directory, and
then runs commands against it under an explicit deadline.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from gitsource.domain.settings import BOOTSTRAP_TIMEOUT

from .errors import (
    GitConfigurationError,
    GitExecutionError,
    GitExitError,
    GitNotFoundError,
    GitStartError,
    GitTimeoutError,
    PathResolutionError,
)

logger = logging.getLogger(__name__)

GIT_BINARY = "git"

# Max uint16, so commits touching many files still get renames detected
# instead of delete+add pairs.
RENAME_LIMIT = 65535


# ============================================================
# Deadline
# ============================================================


class Deadline:
    """A fixed point in monotonic time shared by one or more invocations."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        self._expires_at = time.monotonic() + timeout

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0


# ============================================================
# Locating and resolving
# ============================================================


def locate_git(binary: str = GIT_BINARY) -> str:
    """Find the git executable on PATH.

    Args:
        binary: Executable name to look up

    Returns:
        Absolute path of the executable

    Raises:
        GitNotFoundError: If the executable is not on PATH
    """
    path = shutil.which(binary)
    if path is None:
        raise GitNotFoundError(binary)
    return os.path.abspath(path)


def resolve_directory(directory: str | os.PathLike) -> Path:
    """Lexically clean a directory and make it absolute.

    Raises:
        PathResolutionError: If the current directory cannot be queried
    """
    cleaned = os.path.normpath(os.fspath(directory))
    try:
        return Path(os.path.abspath(cleaned))
    except OSError as e:
        raise PathResolutionError(cleaned, str(e)) from e


# ============================================================
# Gitter
# ============================================================


@dataclass(frozen=True)
class Gitter:
    """Runs git commands against a single absolute working directory.

    Use for_directory() to build a configured instance. Not safe for
    concurrent invocations: git's own lock files in the directory are shared.
    """

    binary_path: str
    path: Path

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def for_directory(
        cls,
        directory: str | os.PathLike,
        timeout: float = BOOTSTRAP_TIMEOUT,
    ) -> Gitter:
        """Locate git, resolve the directory and bootstrap it.

        Args:
            directory: Working tree to operate on, relative or absolute
            timeout: Seconds allowed for both bootstrap commands together

        Returns:
            A Gitter ready for extraction

        Raises:
            GitNotFoundError: If git is not installed
            PathResolutionError: If the directory cannot be made absolute
            GitConfigurationError: If a bootstrap command fails
        """
        binary_path = locate_git()
        gitter = cls(binary_path=binary_path, path=resolve_directory(directory))
        gitter.bootstrap(Deadline(timeout))
        return gitter

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def bootstrap(self, deadline: Deadline) -> None:
        """Configure git so the directory can be scanned.

        Writes to git's *global* configuration: the directory is appended to
        ``safe.directory`` so git accepts it when owned by another user (as is
        common in containers and CI). Entries accumulate across calls and are
        never removed or read back. ``diff.renameLimit`` is raised for the
        repository itself. Both commands are idempotent.

        Raises:
            GitConfigurationError: If either command fails
        """
        for args in (
            ["config", "--add", "--global", "safe.directory", str(self.path)],
            ["config", "diff.renameLimit", str(RENAME_LIMIT)],
        ):
            try:
                self.execute(args, deadline)
            except GitExecutionError as e:
                raise GitConfigurationError(
                    f"failed to configure git for {self.path}: {e}"
                ) from e

    def execute(self, args: list[str], deadline: Deadline) -> bytes:
        """Run one git command and return its stdout.

        Paging is disabled and the working directory is pinned, so results do
        not depend on the caller's cwd or terminal. stderr is kept only for
        the error message.

        Args:
            args: git arguments, without the binary
            deadline: Deadline the command must finish by

        Returns:
            Raw stdout bytes

        Raises:
            GitStartError: If git could not be started or the deadline had
                already passed
            GitExitError: If git exited non-zero
            GitTimeoutError: If the deadline elapsed while git was running
        """
        full_args = ["--no-pager", "-C", str(self.path), *args]
        command = [GIT_BINARY, *full_args]

        if deadline.expired:
            raise GitStartError(command, "deadline exceeded before start")

        logger.debug("Running %s in %s", " ".join(command), self.path)
        try:
            result = subprocess.run(
                [self.binary_path, *full_args],
                cwd=self.path,
                capture_output=True,
                timeout=deadline.remaining(),
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise GitTimeoutError(command, deadline.timeout) from e
        except OSError as e:
            raise GitStartError(command, str(e)) from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise GitExitError(command, result.returncode, stderr)

        return result.stdout
