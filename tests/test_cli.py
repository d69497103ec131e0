"""
Tests for the cricketsync CLI module.
"""

import json

import pytest
import requests
from unittest.mock import patch
from click.testing import CliRunner

from cricketsync.cli import load_commands, main
from cricketsync.plugins.cli.sync import cli as sync_cli

MATCHES_URL = "https://docs.google.com/spreadsheets/d/e/matches/pub?output=csv"
TEAM_URL = "https://docs.google.com/spreadsheets/d/e/team/pub?output=csv"


def csv_response(body: bytes, status_code=200, reason="OK"):
    response = requests.models.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = body
    response.headers["Content-Type"] = "text/csv"
    return response


class TestCLICore:
    """Test cases for core CLI functionality."""

    def test_main_cli_group_creation(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Village cricket club sheet sync" in result.output

    def test_plugin_commands_registered(self):
        load_commands()
        assert {"sync", "sources", "info"} <= set(main.commands)

    @patch("cricketsync.cli.logger")
    def test_load_commands_with_plugin_error(self, mock_logger):
        """Test load_commands handles plugin loading errors gracefully."""
        with patch("cricketsync.cli.importlib.import_module") as mock_import:
            mock_import.side_effect = ImportError("Test import error")

            load_commands()

            mock_logger.error.assert_called()

    def test_invalid_log_level(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--log-level", "LOUD", "info"])
        assert result.exit_code != 0

    def test_invalid_environment_is_a_usage_error(self):
        runner = CliRunner()
        result = runner.invoke(main, ["info"], env={"REQUEST_TIMEOUT": "-1"})

        assert result.exit_code == 2
        assert "Invalid configuration" in result.output


class TestSyncCommand:
    """Test cases for the sync command."""

    def test_no_urls_configured(self, temp_dir):
        runner = CliRunner()
        with patch("cricketsync.fetcher.requests.get") as mock_get:
            result = runner.invoke(main, ["--data-dir", str(temp_dir / "data"), "sync"])

        assert result.exit_code == 1
        assert "No Google Sheet URLs provided" in result.output
        mock_get.assert_not_called()
        assert not (temp_dir / "data").exists()

    @patch("cricketsync.fetcher.requests.get")
    def test_single_source_sync(self, mock_get, temp_dir):
        mock_get.return_value = csv_response(b"Name, Score\nAlice , 10\nBob,notanumber")
        data_dir = temp_dir / "data"

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--data-dir", str(data_dir), "sync"],
            env={"MATCHES_SHEET_URL": MATCHES_URL},
        )

        assert result.exit_code == 0, result.output
        assert "Fetching Matches..." in result.output
        assert "(2 records)" in result.output
        assert "Team URL not provided (TEAM_SHEET_URL), skipping" in result.output
        assert "All data synced successfully" in result.output
        assert sorted(p.name for p in data_dir.iterdir()) == ["matches.json"]
        assert json.loads((data_dir / "matches.json").read_text(encoding="utf-8")) == [
            {"Name": "Alice", "Score": 10},
            {"Name": "Bob", "Score": "notanumber"},
        ]

    @patch("cricketsync.fetcher.requests.get")
    def test_http_error_exits_nonzero(self, mock_get, temp_dir):
        mock_get.return_value = csv_response(b"", status_code=404, reason="Not Found")
        data_dir = temp_dir / "data"

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--data-dir", str(data_dir), "sync"],
            env={"MATCHES_SHEET_URL": MATCHES_URL, "TEAM_SHEET_URL": TEAM_URL},
        )

        assert result.exit_code == 1
        assert "HTTP 404: Not Found" in result.output
        assert "Sync failed" in result.output
        assert mock_get.call_count == 1
        assert not data_dir.exists()

    @patch("cricketsync.fetcher.requests.get")
    def test_parse_warnings_are_printed(self, mock_get, temp_dir):
        mock_get.return_value = csv_response(b"Name,Name\nAlice,Bob\n")

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--data-dir", str(temp_dir), "sync"],
            env={"TEAM_SHEET_URL": TEAM_URL},
        )

        assert result.exit_code == 0, result.output
        assert "Parsing warnings:" in result.output
        assert "DuplicateHeader" in result.output

    @patch("cricketsync.fetcher.requests.get")
    def test_only_and_timeout_options(self, mock_get, temp_dir):
        mock_get.return_value = csv_response(b"Player\nAsha\n")

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--data-dir", str(temp_dir), "sync", "--only", "team", "--timeout", "5"],
            env={"MATCHES_SHEET_URL": MATCHES_URL, "TEAM_SHEET_URL": TEAM_URL},
        )

        assert result.exit_code == 0, result.output
        mock_get.assert_called_once_with(TEAM_URL, timeout=5.0, allow_redirects=False)
        assert sorted(p.name for p in temp_dir.iterdir()) == ["team.json"]

    def test_unknown_only_name(self, temp_dir):
        runner = CliRunner()
        result = runner.invoke(
            main, ["--data-dir", str(temp_dir), "sync", "--only", "fixtures"]
        )
        assert result.exit_code == 2

    @patch("cricketsync.fetcher.requests.get")
    def test_standalone_sync_script(self, mock_get, temp_dir):
        mock_get.return_value = csv_response(b"Caption,Year\nTea lady,1987\n")
        data_dir = temp_dir / "out"

        runner = CliRunner()
        result = runner.invoke(
            sync_cli,
            [],
            env={"FAMILY_SHEET_URL": TEAM_URL, "DATA_DIR": str(data_dir)},
        )

        assert result.exit_code == 0, result.output
        assert json.loads((data_dir / "family.json").read_text(encoding="utf-8")) == [
            {"Caption": "Tea lady", "Year": 1987}
        ]


class TestSourcesAndInfoCommands:
    """Test cases for the sources and info commands."""

    def test_sources_lists_configuration(self, temp_dir):
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--data-dir", str(temp_dir), "sources"],
            env={"MATCHES_SHEET_URL": MATCHES_URL},
        )

        assert result.exit_code == 0
        for name in ("matches", "highlights", "announcements", "team", "family"):
            assert name in result.output
        assert "1/5 sources configured" in result.output
        assert "https://docs.google.com/..." in result.output
        # the published sheet id stays out of the output
        assert "/d/e/matches" not in result.output

    def test_info(self, temp_dir):
        runner = CliRunner()
        result = runner.invoke(main, ["--data-dir", str(temp_dir), "info"])

        assert result.exit_code == 0
        assert "cricketsync version:" in result.output
        assert str(temp_dir) in result.output
        assert "Request timeout: none" in result.output
