"""Tests for ExtractorSettings loading."""

import tempfile
import unittest
from pathlib import Path

from gitsource.domain.settings import ExtractorSettings


class TestExtractorSettings(unittest.TestCase):
    """Tests for ExtractorSettings factory methods."""

    def test_defaults(self):
        settings = ExtractorSettings()

        self.assertEqual(settings.bootstrap_timeout, 10.0)
        self.assertEqual(settings.command_timeout, 300.0)
        self.assertEqual(settings.log_opts, "")

    def test_from_dict_none_gives_defaults(self):
        self.assertEqual(ExtractorSettings.from_dict(None), ExtractorSettings())

    def test_from_dict_overrides(self):
        settings = ExtractorSettings.from_dict(
            {"command_timeout": 30, "log_opts": "--since=2020-01-01 main"}
        )

        self.assertEqual(settings.command_timeout, 30.0)
        self.assertEqual(settings.bootstrap_timeout, 10.0)
        self.assertEqual(settings.log_opts, "--since=2020-01-01 main")

    def test_from_dict_rejects_unknown_keys(self):
        with self.assertRaises(ValueError) as ctx:
            ExtractorSettings.from_dict({"retries": 3})

        self.assertIn("retries", str(ctx.exception))

    def test_rejects_non_positive_timeout(self):
        with self.assertRaises(ValueError):
            ExtractorSettings(command_timeout=0)

    def test_from_dict_rejects_non_mapping(self):
        with self.assertRaises(ValueError):
            ExtractorSettings.from_dict(["command_timeout"])

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "gitsource.yml"
            path.write_text("bootstrap_timeout: 5\nlog_opts: --max-count=10\n")

            settings = ExtractorSettings.from_file(path)

        self.assertEqual(settings.bootstrap_timeout, 5.0)
        self.assertEqual(settings.log_opts, "--max-count=10")

    def test_from_empty_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.yml"
            path.write_text("")

            self.assertEqual(ExtractorSettings.from_file(path), ExtractorSettings())

    def test_from_file_invalid_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yml"
            path.write_text("command_timeout: [unclosed\n")

            with self.assertRaises(ValueError):
                ExtractorSettings.from_file(path)

    def test_from_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            ExtractorSettings.from_file("/nonexistent/gitsource.yml")


if __name__ == "__main__":
    unittest.main()
