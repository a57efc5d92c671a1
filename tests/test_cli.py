"""
Tests for the nlsearch CLI (nlsearch.cli.main) via click's CliRunner.
"""

import json

import pytest
from click.testing import CliRunner

from nlsearch.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestSearchCommand:

    def test_json_output(self, runner, json_file):
        result = runner.invoke(cli, ["search", str(json_file), "Alice", "-f", "json"])
        assert result.exit_code == 0, result.output
        decoded = json.loads(result.stdout)
        assert decoded[0]["node"] == "Alice"
        assert decoded[0]["path_string"] == "users[0].name"

    def test_console_output(self, runner, json_file):
        result = runner.invoke(cli, ["search", str(json_file), "Chicago"])
        assert result.exit_code == 0, result.output
        assert "users[2].city" in result.stdout
        assert "NLSEARCH" in result.stdout

    def test_compact_with_max_results(self, runner, json_file):
        result = runner.invoke(
            cli, ["search", str(json_file), "new york", "-f", "compact", "-n", "2"],
        )
        assert result.exit_code == 0, result.output
        assert len(result.stdout.strip().splitlines()) == 2

    def test_reads_stdin(self, runner, users):
        result = runner.invoke(
            cli, ["search", "-", "Bob", "-f", "json"], input=json.dumps(users),
        )
        assert result.exit_code == 0, result.output
        assert any(hit["node"] == "Bob" for hit in json.loads(result.stdout))

    def test_case_sensitive_flag(self, runner, json_file):
        result = runner.invoke(
            cli, ["search", str(json_file), "ALICE", "--case-sensitive", "-f", "json"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == []

    def test_no_keys_flag(self, runner, json_file):
        result = runner.invoke(
            cli, ["search", str(json_file), "users", "--no-keys", "-f", "json"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == []

    def test_explain(self, runner, json_file):
        result = runner.invoke(cli, ["search", str(json_file), "Alice", "--explain"])
        assert result.exit_code == 0, result.output
        assert "Explain: exact=yes" in result.stdout

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["search", str(tmp_path / "nope.json"), "x"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_json(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")
        result = runner.invoke(cli, ["search", str(bad), "x"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output
