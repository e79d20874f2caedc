"""
Tests for the CLI module.

These tests run the commands against small history dumps written to a
temporary directory.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from teampulse.cli import cli


@pytest.fixture
def history_file(tmp_path):
    path = tmp_path / "acme-api.json"
    path.write_text(
        json.dumps(
            [
                {
                    "hash": f"c{i}",
                    "author": author,
                    "date": f"2024-03-{day:02d}T10:00:00Z",
                    "files": [{"path": "src/app.py", "insertions": 10, "deletions": 2}],
                }
                for i, (author, day) in enumerate(
                    [("alice", 4), ("alice", 5), ("bob", 6), ("alice", 8), ("bot", 8)]
                )
            ]
        )
    )
    return path


class TestCLI:
    """Test cases for the main CLI functionality."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "analyze" in result.output
        assert "trends" in result.output
        assert "validate-config" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "TeamPulse Analytics" in result.output

    def test_analyze_json_output(self, history_file):
        result = CliRunner().invoke(cli, ["analyze", "-H", str(history_file), "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["metadata"]["repository"] == "acme-api"
        assert data["stats"]["totalCommits"] == 5

    def test_analyze_with_config_and_window(self, history_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("excludedUsers: [bot]\n")

        result = CliRunner().invoke(
            cli,
            [
                "analyze",
                "-H", str(history_file),
                "-c", str(config),
                "--since", "2024-03-05",
                "--first-day-of-week", "Monday",
                "--format", "json",
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["stats"]["totalCommits"] == 4
        assert data["stats"]["totalCommitsWithConfig"] == 3
        assert data["metadata"]["firstDayOfWeek"] == "monday"

    def test_analyze_table_writes_json_file(self, history_file, tmp_path):
        output = tmp_path / "report.json"
        result = CliRunner().invoke(cli, ["analyze", "-H", str(history_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Health score" in result.output
        assert json.loads(output.read_text())["stats"]["totalCommits"] == 5

    def test_config_dir_lookup(self, history_file, tmp_path):
        config_dir = tmp_path / "configs"
        config_dir.mkdir()
        (config_dir / "acme-api_config.yaml").write_text("excludedUsers: [bot, bob]\n")

        result = CliRunner().invoke(
            cli,
            ["analyze", "-H", str(history_file), "--config-dir", str(config_dir), "--format", "json"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["stats"]["allContributors"] == ["alice"]

    def test_bad_config_is_reported(self, history_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(
            "groupedAuthors:\n"
            "  - {primaryName: A, aliases: [x]}\n"
            "  - {primaryName: B, aliases: [x]}\n"
        )
        result = CliRunner().invoke(cli, ["analyze", "-H", str(history_file), "-c", str(config)])

        assert result.exit_code != 0
        assert "multiple contributors" in result.output

    def test_bad_history_is_reported(self, tmp_path):
        history = tmp_path / "broken.json"
        history.write_text('{"not": "a list"}')

        result = CliRunner().invoke(cli, ["analyze", "-H", str(history)])
        assert result.exit_code != 0
        assert "Error" in result.output

    def test_trends_command(self, history_file):
        result = CliRunner().invoke(cli, ["trends", "-H", str(history_file)])

        assert result.exit_code == 0, result.output
        assert "Forecast" in result.output

    @patch("teampulse.cli.configure_logging")
    def test_log_option_is_applied(self, mock_logging, history_file):
        CliRunner().invoke(cli, ["trends", "-H", str(history_file), "--log", "DEBUG"])
        mock_logging.assert_called_once_with("DEBUG")


class TestValidateConfig:
    def test_requires_a_file(self):
        result = CliRunner().invoke(cli, ["validate-config"])
        assert result.exit_code == 2

    def test_valid_files(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("groupedAuthors:\n  - {primaryName: A, aliases: [a]}\n")
        global_config = tmp_path / "global.yaml"
        global_config.write_text("firstDayOfWeek: monday\n")

        result = CliRunner().invoke(
            cli, ["validate-config", "-c", str(config), "--global-config", str(global_config)]
        )

        assert result.exit_code == 0
        assert "1 author groups" in result.output
        assert "first day of week is monday" in result.output

    def test_invalid_global_config(self, tmp_path):
        global_config = tmp_path / "global.yaml"
        global_config.write_text("firstDayOfWeek: friday\n")

        result = CliRunner().invoke(cli, ["validate-config", "--global-config", str(global_config)])
        assert result.exit_code == 1
        assert "firstDayOfWeek" in result.output
