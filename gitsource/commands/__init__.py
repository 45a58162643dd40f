"""CLI command implementations."""

from gitsource.commands.diff import cmd_diff
from gitsource.commands.log import cmd_log

__all__ = ["cmd_diff", "cmd_log"]
