"""Exceptions raised while locating, configuring and running git.

Every failure surfaces to the immediate caller with enough context (the
attempted command line, trimmed stderr) to diagnose it without re-running.
Nothing here is retried.
"""

from __future__ import annotations


class GitError(Exception):
    """Base class for all git source errors."""

    pass


class GitNotFoundError(GitError):
    """Raised when the git executable cannot be found on PATH."""

    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(f"{binary} is required for executing but was not found on PATH")


class PathResolutionError(GitError):
    """Raised when a source directory cannot be made absolute."""

    def __init__(self, directory: str, reason: str):
        self.directory = directory
        super().__init__(f"{directory} is not an absolute path: {reason}")


class GitConfigurationError(GitError):
    """Raised when a bootstrap config command fails.

    The underlying execution error is chained as ``__cause__``.
    """

    pass


class GitExecutionError(GitError):
    """Base class for failures of a single git invocation."""

    def __init__(self, command: list[str], detail: str):
        self.command = command
        super().__init__(f"error executing '{self.command_line}'{detail}")

    @property
    def command_line(self) -> str:
        """The attempted command as a single string."""
        return " ".join(self.command)


class GitStartError(GitExecutionError):
    """Raised when git could not be run at all. No stderr is available."""

    def __init__(self, command: list[str], reason: str):
        self.reason = reason
        super().__init__(command, f": {reason}")


class GitExitError(GitExecutionError):
    """Raised when git ran and exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(command, f", output: {stderr} : exit status {returncode}")


class GitTimeoutError(GitExecutionError):
    """Raised when the deadline elapsed before git finished."""

    def __init__(self, command: list[str], timeout: float):
        self.timeout = timeout
        super().__init__(command, f": timed out after {timeout:g}s")


class PatchParseError(GitError):
    """Raised when patch text cannot be interpreted."""

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        super().__init__(f"patch line {line_number}: {message}")
