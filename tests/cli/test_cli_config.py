"""Tests for ghrest config subcommands."""

import json

from typer.testing import CliRunner

from ghrest.cli.main import app

runner = CliRunner()


class TestConfigSetGet:
    def test_set_persists_across_invocations(self):
        result = runner.invoke(app, ["config", "set", "retry_delay_seconds", "5"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["config", "get", "retry_delay_seconds", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"key": "retry_delay_seconds", "value": 5}

    def test_session_only_is_not_persisted(self):
        result = runner.invoke(app, ["config", "set", "default_owner_name", "octocat", "--session-only"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["config", "get", "default_owner_name", "--format", "json"])
        assert json.loads(result.output)["value"] == ""

    def test_unknown_key(self):
        result = runner.invoke(app, ["config", "set", "no_such_setting", "1"])
        assert result.exit_code == 1
        assert "Unknown configuration key" in result.output

    def test_invalid_value(self):
        result = runner.invoke(app, ["config", "set", "retry_delay_seconds", "soon"])
        assert result.exit_code == 1
        assert "Invalid value" in result.output

    def test_list_json(self):
        result = runner.invoke(app, ["config", "list", "--format", "json"])
        data = json.loads(result.output)
        assert data["api_host_name"] == "github.com"
        assert data["maximum_retries_when_result_not_ready"] == 30


class TestConfigResetBackup:
    def test_reset(self):
        runner.invoke(app, ["config", "set", "default_owner_name", "octocat"])
        result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["config", "get", "default_owner_name", "--format", "json"])
        assert json.loads(result.output)["value"] == ""

    def test_backup_and_restore(self, tmp_path):
        backup = tmp_path / "backup.json"
        runner.invoke(app, ["config", "set", "default_owner_name", "octocat"])
        assert runner.invoke(app, ["config", "backup", str(backup)]).exit_code == 0

        runner.invoke(app, ["config", "set", "default_owner_name", "someone-else"])
        assert runner.invoke(app, ["config", "restore", str(backup)]).exit_code == 0

        result = runner.invoke(app, ["config", "get", "default_owner_name", "--format", "json"])
        assert json.loads(result.output)["value"] == "octocat"

    def test_backup_refuses_overwrite(self, tmp_path):
        backup = tmp_path / "backup.json"
        backup.write_text("{}")
        result = runner.invoke(app, ["config", "backup", str(backup)])
        assert result.exit_code == 1
        assert "exists" in result.output
