#!/usr/bin/env python3
"""CLI entry point for gitsource.

Usage:
    python -m gitsource <command> [options]

Commands:
    log     Extract file changes from the commit history
    diff    Extract uncommitted file changes from the working tree
"""

from __future__ import annotations

import argparse
import logging
import sys

from gitsource.commands.diff import cmd_diff
from gitsource.commands.log import cmd_log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitsource",
        description="Extract structured file changes from git",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  log     Extract file changes from the commit history
  diff    Extract uncommitted file changes from the working tree

Examples:
  gitsource log path/to/repo
  gitsource log path/to/repo --log-opts "--since=2020-01-01 main"
  gitsource diff path/to/repo --staged --format text
        """,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log each git command issued",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # log command
    parser_log = subparsers.add_parser(
        "log",
        help="Extract file changes from the commit history",
    )
    parser_log.add_argument(
        "source",
        nargs="?",
        default=".",
        help="Repository directory (default: current directory)",
    )
    parser_log.add_argument(
        "--log-opts",
        default=None,
        help="git log options, split on whitespace (default: --full-history --all)",
    )

    # diff command
    parser_diff = subparsers.add_parser(
        "diff",
        help="Extract uncommitted file changes from the working tree",
    )
    parser_diff.add_argument(
        "source",
        nargs="?",
        default=".",
        help="Repository directory (default: current directory)",
    )
    parser_diff.add_argument(
        "--staged",
        action="store_true",
        help="Report staged changes instead of unstaged ones",
    )

    for sub in (parser_log, parser_diff):
        sub.add_argument(
            "--format",
            choices=["json", "text"],
            default="json",
            help="Output format (default: json, one object per line)",
        )
        sub.add_argument(
            "--config",
            help="Path to a YAML settings file",
        )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Route to command implementations with explicit parameters
    if args.command == "log":
        return cmd_log(
            source=args.source,
            log_opts=args.log_opts,
            output_format=args.format,
            config_file=args.config,
        )

    elif args.command == "diff":
        return cmd_diff(
            source=args.source,
            staged=args.staged,
            output_format=args.format,
            config_file=args.config,
        )

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
