"""Unit tests for the command line entry point."""

import logging
import xml.etree.ElementTree as ET
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cartoon_rss.cli import main
from cartoon_rss.fetcher import FetchError
from cartoon_rss.scraper import NoItemsError

CLEAN_ENV = {
    "GITHUB_ACTIONS": "",
    "GITHUB_REPOSITORY": "",
    "GITHUB_PAGES_URL": "",
    "GITHUB_OUTPUT": "",
    "CARTOON_SOURCE_URL": "",
    "LOG_LEVEL": "INFO",
    "LOG_FORMAT": "text",
}


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers[:]
    yield
    root_logger.handlers[:] = original_handlers
    root_logger.setLevel(original_level)


class TestCliUnit:
    """Unit tests for the cartoon-rss command."""

    def test_help_exits_zero(self):
        """Both help flags print usage and exit successfully."""
        for flag in ("--help", "-h"):
            result = CliRunner().invoke(main, [flag], env=CLEAN_ENV)

            assert result.exit_code == 0
            assert "--verbose" in result.output
            assert "--output" in result.output

    def test_unreachable_source_still_writes_feed(self, tmp_path):
        """An unreachable source still produces an eight-item feed and exit 0."""
        output = tmp_path / "out" / "feed.xml"

        with patch("cartoon_rss.scraper.PageFetcher") as fetcher_class:
            fetcher_class.return_value.fetch.side_effect = FetchError(
                "https://www.evertkwok.nl/cartoon/", 3, "connection refused"
            )
            result = CliRunner().invoke(
                main, [f"--output={output}"], env=CLEAN_ENV
            )

        assert result.exit_code == 0, result.output
        assert "Total cartoons: 8" in result.output
        root = ET.fromstring(output.read_bytes())
        assert len(list(root.iter("item"))) == 8

    def test_verbose_logs_progress(self, tmp_path):
        """Verbose mode shows progress messages on the console."""
        output = tmp_path / "feed.xml"

        with patch("cartoon_rss.scraper.PageFetcher") as fetcher_class:
            fetcher_class.return_value.fetch.side_effect = FetchError(
                "https://www.evertkwok.nl/cartoon/", 3, "connection refused"
            )
            result = CliRunner().invoke(
                main, ["-v", "--output", str(output)], env=CLEAN_ENV
            )

        assert result.exit_code == 0, result.output
        assert "Falling back to demo data" in result.output
        assert "RSS feed written to" in result.output

    def test_quiet_mode_hides_info_logs(self, tmp_path):
        """Without --verbose only errors reach the console."""
        with patch("cartoon_rss.scraper.PageFetcher") as fetcher_class:
            fetcher_class.return_value.fetch.side_effect = FetchError(
                "https://www.evertkwok.nl/cartoon/", 3, "connection refused"
            )
            result = CliRunner().invoke(
                main, [f"--output={tmp_path / 'feed.xml'}"], env=CLEAN_ENV
            )

        assert result.exit_code == 0
        assert "RSS feed written to" not in result.output

    def test_zero_items_exits_one(self, tmp_path):
        """A run that ends with no items exits with status 1."""
        with patch("cartoon_rss.cli.run", side_effect=NoItemsError("No cartoons found")):
            result = CliRunner().invoke(
                main, [f"--output={tmp_path / 'feed.xml'}"], env=CLEAN_ENV
            )

        assert result.exit_code == 1
        assert "No cartoons found" in result.output

    def test_fatal_error_in_ci_emits_annotation(self, tmp_path):
        """Fatal errors in GitHub Actions add error annotations."""
        env = {**CLEAN_ENV, "GITHUB_ACTIONS": "true"}

        with patch("cartoon_rss.cli.run", side_effect=OSError("read-only filesystem")):
            result = CliRunner().invoke(
                main, [f"--output={tmp_path / 'feed.xml'}"], env=env
            )

        assert result.exit_code == 1
        assert "::error::Fatal error: read-only filesystem" in result.output
        assert "::error::RSS generation failed" in result.output

    def test_fatal_error_locally_exits_one(self, tmp_path):
        """Fatal errors outside CI exit 1 without workflow commands."""
        with patch("cartoon_rss.cli.run", side_effect=OSError("read-only filesystem")):
            result = CliRunner().invoke(
                main, [f"--output={tmp_path / 'feed.xml'}"], env=CLEAN_ENV
            )

        assert result.exit_code == 1
        assert "::error::" not in result.output

    def test_invalid_log_format_exits_one(self):
        """An unknown LOG_FORMAT exits 1 before any work starts."""
        env = {**CLEAN_ENV, "LOG_FORMAT": "xml"}

        result = CliRunner().invoke(main, [], env=env)

        assert result.exit_code == 1

    def test_invalid_log_level_exits_one(self):
        """An unknown LOG_LEVEL is reported cleanly instead of crashing."""
        env = {**CLEAN_ENV, "LOG_LEVEL": "verbose"}

        result = CliRunner().invoke(main, [], env=env)

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Unsupported LOG_LEVEL: VERBOSE" in result.output
