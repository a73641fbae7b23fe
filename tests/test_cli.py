"""
Tests for the command line interface.
"""

import json

import pytest
from click.testing import CliRunner

from objdiff.cli.main import cli


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def snapshots(tmp_path):
    """Write a before/after pair of snapshots."""
    before = tmp_path / "before.json"
    after = tmp_path / "after.json"
    before.write_text(json.dumps({"name": "John", "tags": ["red", "blue"]}))
    after.write_text(json.dumps({"name": "Jane", "tags": ["blue", "green"]}))
    return str(before), str(after)


class TestDiffCommand:
    """Tests for `objdiff diff`."""

    def test_text_output(self, runner, snapshots):
        """Test the default text report."""
        result = runner.invoke(cli, ["diff", *snapshots])

        assert result.exit_code == 0
        assert '~ name: "John" -> "Jane"' in result.output
        assert '+[] tags: "green"' in result.output

    def test_json_output(self, runner, snapshots):
        """Test JSON output."""
        result = runner.invoke(cli, ["diff", *snapshots, "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 3
        assert {"path": ["tags"], "type": "arr_del", "value": "red"} in data

    def test_output_file(self, runner, snapshots, tmp_path):
        """Test writing the report to a file."""
        target = tmp_path / "changes.json"

        result = runner.invoke(cli, ["diff", *snapshots, "-f", "json", "-o", str(target)])

        assert result.exit_code == 0
        assert "Output written to" in result.output
        assert len(json.loads(target.read_text())) == 3

    def test_exit_code_with_changes(self, runner, snapshots):
        """Test --exit-code reports changes with status 1."""
        result = runner.invoke(cli, ["diff", *snapshots, "--exit-code"])

        assert result.exit_code == 1

    def test_exit_code_without_changes(self, runner, snapshots):
        """Test --exit-code is 0 for identical snapshots."""
        before, _ = snapshots

        result = runner.invoke(cli, ["diff", before, before, "--exit-code"])

        assert result.exit_code == 0
        assert "No changes." in result.output

    def test_invalid_json(self, runner, snapshots, tmp_path):
        """Test unreadable JSON is an input error."""
        broken = tmp_path / "broken.json"
        broken.write_text("{not json")

        result = runner.invoke(cli, ["diff", snapshots[0], str(broken)])

        assert result.exit_code == 2
        assert "invalid JSON" in result.output

    def test_not_diffable(self, runner, snapshots, tmp_path):
        """Test snapshots outside the grammar are rejected."""
        nested = tmp_path / "nested.json"
        nested.write_text(json.dumps({"members": [{"name": "a"}]}))

        result = runner.invoke(cli, ["diff", snapshots[0], str(nested)])

        assert result.exit_code == 2
        assert "members" in result.output

    def test_root_must_be_object(self, runner, snapshots, tmp_path):
        """Test a JSON array root is rejected."""
        array = tmp_path / "array.json"
        array.write_text("[1, 2]")

        result = runner.invoke(cli, ["diff", str(array), snapshots[1]])

        assert result.exit_code == 2

    def test_missing_file(self, runner, snapshots):
        """Test click rejects missing files."""
        result = runner.invoke(cli, ["diff", snapshots[0], "does-not-exist.json"])

        assert result.exit_code != 0

    def test_color(self, runner, snapshots):
        """Test --color adds ANSI codes to the text report."""
        result = runner.invoke(cli, ["diff", *snapshots, "--color"], color=True)

        assert result.exit_code == 0
        assert "\033[92m+[]\033[0m tags: \"green\"" in result.output

    def test_no_color(self, runner, snapshots):
        """Test --no-color keeps the text report plain."""
        result = runner.invoke(cli, ["diff", *snapshots, "--no-color"], color=True)

        assert result.exit_code == 0
        assert "\033[" not in result.output
        assert '+[] tags: "green"' in result.output


class TestLogLevel:
    """Tests for the --log-level option."""

    def test_option(self, runner, snapshots):
        """Test --log-level is accepted before the command."""
        result = runner.invoke(cli, ["--log-level", "DEBUG", "diff", *snapshots])

        assert result.exit_code == 0
        assert '~ name: "John" -> "Jane"' in result.output

    def test_environment_variable(self, runner, snapshots):
        """Test OBJDIFF_LOG_LEVEL is read case-insensitively."""
        result = runner.invoke(cli, ["diff", *snapshots], env={"OBJDIFF_LOG_LEVEL": "debug"})

        assert result.exit_code == 0

    def test_invalid_option(self, runner, snapshots):
        """Test an unknown level is a usage error."""
        result = runner.invoke(cli, ["--log-level", "LOUD", "diff", *snapshots])

        assert result.exit_code == 2
        assert "LOUD" in result.output

    def test_invalid_environment_variable(self, runner, snapshots):
        """Test an unknown level from the environment is a usage error."""
        result = runner.invoke(cli, ["diff", *snapshots], env={"OBJDIFF_LOG_LEVEL": "loud"})

        assert result.exit_code == 2


def test_version(runner):
    """Test the version option."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output
