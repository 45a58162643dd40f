"""Tests for the log and diff commands and the CLI dispatcher."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from gitsource.__main__ import main
from gitsource.commands.diff import cmd_diff
from gitsource.commands.log import cmd_log
from gitsource.domain.file_change import FileChange
from gitsource.domain.settings import ExtractorSettings
from gitsource.infrastructure.git.errors import GitConfigurationError, PatchParseError


def _changes():
    return iter([FileChange(old_name="a.txt", new_name="a.txt")])


class TestCmdLog(unittest.TestCase):
    """Tests for cmd_log()."""

    @patch("gitsource.commands.log.ChangeExtractor")
    def test_prints_json_lines(self, mock_extractor_cls):
        mock_extractor_cls.return_value.extract_log.return_value = _changes()
        stdout = io.StringIO()

        with redirect_stdout(stdout):
            exit_code = cmd_log("/test/repo", log_opts="--max-count=1")

        self.assertEqual(exit_code, 0)
        mock_extractor_cls.return_value.extract_log.assert_called_once_with(
            "/test/repo", "--max-count=1"
        )
        self.assertEqual(json.loads(stdout.getvalue())["name"], "a.txt")

    @patch("gitsource.commands.log.ChangeExtractor")
    def test_git_error_returns_one(self, mock_extractor_cls):
        mock_extractor_cls.return_value.extract_log.side_effect = GitConfigurationError(
            "failed to configure git for /test/repo"
        )
        stderr = io.StringIO()

        with redirect_stderr(stderr):
            exit_code = cmd_log("/test/repo")

        self.assertEqual(exit_code, 1)
        self.assertIn("failed to configure git", stderr.getvalue())

    @patch("gitsource.commands.log.ChangeExtractor")
    def test_parse_error_during_streaming_returns_one(self, mock_extractor_cls):
        def broken():
            yield FileChange(new_name="a.txt")
            raise PatchParseError(7, "hunk truncated")

        mock_extractor_cls.return_value.extract_log.return_value = broken()

        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()) as stderr:
            exit_code = cmd_log("/test/repo")

        self.assertEqual(exit_code, 1)
        self.assertIn("patch line 7", stderr.getvalue())

    @patch("gitsource.commands.log.ChangeExtractor")
    def test_loads_config_file(self, mock_extractor_cls):
        mock_extractor_cls.return_value.extract_log.return_value = iter([])
        with tempfile.TemporaryDirectory() as tmp:
            config = Path(tmp) / "settings.yml"
            config.write_text("command_timeout: 12\n")

            with redirect_stdout(io.StringIO()):
                exit_code = cmd_log("/test/repo", config_file=str(config))

        self.assertEqual(exit_code, 0)
        mock_extractor_cls.assert_called_once_with(ExtractorSettings(command_timeout=12.0))

    def test_missing_config_file_returns_one(self):
        with redirect_stderr(io.StringIO()) as stderr:
            exit_code = cmd_log("/test/repo", config_file="/nonexistent/settings.yml")

        self.assertEqual(exit_code, 1)
        self.assertIn("Config file not found", stderr.getvalue())


class TestCmdDiff(unittest.TestCase):
    """Tests for cmd_diff()."""

    @patch("gitsource.commands.diff.ChangeExtractor")
    def test_passes_staged_flag(self, mock_extractor_cls):
        mock_extractor_cls.return_value.extract_diff.return_value = _changes()

        with redirect_stdout(io.StringIO()) as stdout:
            exit_code = cmd_diff("/test/repo", staged=True, output_format="text")

        self.assertEqual(exit_code, 0)
        mock_extractor_cls.return_value.extract_diff.assert_called_once_with(
            "/test/repo", staged=True
        )
        self.assertIn("File: a.txt (modified)", stdout.getvalue())


class TestMain(unittest.TestCase):
    """Tests for the argparse dispatcher."""

    @patch("gitsource.__main__.cmd_log", return_value=0)
    def test_routes_log(self, mock_cmd_log):
        exit_code = main(["log", "repo", "--log-opts=--all --since=2020-01-01", "--format", "text"])

        self.assertEqual(exit_code, 0)
        mock_cmd_log.assert_called_once_with(
            source="repo",
            log_opts="--all --since=2020-01-01",
            output_format="text",
            config_file=None,
        )

    @patch("gitsource.__main__.cmd_diff", return_value=0)
    def test_routes_diff_with_defaults(self, mock_cmd_diff):
        exit_code = main(["diff", "--staged"])

        self.assertEqual(exit_code, 0)
        mock_cmd_diff.assert_called_once_with(
            source=".",
            staged=True,
            output_format="json",
            config_file=None,
        )

    def test_no_command_prints_help(self):
        with redirect_stdout(io.StringIO()) as stdout:
            exit_code = main([])

        self.assertEqual(exit_code, 1)
        self.assertIn("usage:", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
