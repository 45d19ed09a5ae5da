# ==============================================================================
# Tests for the dynacache CLI
# ==============================================================================
"""
Tests for the CLI command tree and the cache/lock commands.

Help tests use the real app from dynacache.app to ensure the full command
tree is wired up. Command tests run against moto with settings taken from
environment variables, exercising the same settings -> client -> store path
the installed CLI uses.
"""

import json

import pytest
from typer.testing import CliRunner

from dynacache.app import app
from dynacache.cli import shared

from conftest import TABLE

runner = CliRunner()


@pytest.fixture()
def cli_env(dynamodb_client, monkeypatch):
    """Point settings at the moto table and reset the cached store."""
    monkeypatch.setenv("DYNAMODB_TABLE", TABLE)
    monkeypatch.setenv("DYNAMODB_REGION_NAME", "us-east-1")
    monkeypatch.setenv("CACHE_PREFIX", "cli")
    monkeypatch.setenv("CACHE_DEFAULT_TTL_SECONDS", "120")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    shared.get_store.cache_clear()
    yield dynamodb_client
    shared.get_store.cache_clear()


# ==============================================================================
# Help
# ==============================================================================


class TestHelp:
    def test_root_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "DynamoDB cache store and distributed lock CLI" in result.output

    def test_root_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        for cmd in [
            "get",
            "put",
            "add",
            "forever",
            "increment",
            "decrement",
            "forget",
            "flush",
            "lock",
            "table",
            "config",
            "status",
        ]:
            assert cmd in result.output, f"Missing command: {cmd}"

    def test_lock_help(self):
        result = runner.invoke(app, ["lock", "--help"])
        assert result.exit_code == 0
        for cmd in ["acquire", "release", "force-release", "owner"]:
            assert cmd in result.output


# ==============================================================================
# Cache Commands
# ==============================================================================


class TestCacheCommands:
    def test_put_and_get(self, cli_env):
        result = runner.invoke(app, ["put", "greeting", "hello"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["get", "greeting"])
        assert result.exit_code == 0
        assert result.output.strip() == "hello"

    def test_put_uses_prefix_and_default_ttl(self, cli_env):
        result = runner.invoke(app, ["put", "greeting", "hello"])
        assert "ttl 120s" in result.output

        item = cli_env.get_item(TableName=TABLE, Key={"key": {"S": "cli:greeting"}})["Item"]
        assert "B" in item["value"]

    def test_get_missing(self, cli_env):
        result = runner.invoke(app, ["get", "missing"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_get_json(self, cli_env):
        runner.invoke(app, ["put", "data", '{"a": [1, 2]}', "--type", "json"])
        result = runner.invoke(app, ["get", "data", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"key": "data", "found": True, "value": {"a": [1, 2]}}

    def test_numeric_string_is_stored_as_string(self, cli_env):
        runner.invoke(app, ["put", "code", "42"])
        result = runner.invoke(app, ["get", "code", "--json"])
        assert json.loads(result.output)["value"] == "42"

    def test_counter(self, cli_env):
        runner.invoke(app, ["put", "views", "10", "--type", "int", "--ttl", "60"])

        result = runner.invoke(app, ["increment", "views", "--by", "5"])
        assert result.exit_code == 0
        assert result.output.strip() == "15"

        result = runner.invoke(app, ["decrement", "views", "--by", "3"])
        assert result.output.strip() == "12"

    def test_increment_missing(self, cli_env):
        result = runner.invoke(app, ["increment", "missing"])
        assert result.exit_code == 1
        assert "not found or expired" in result.output

    def test_bad_int_value(self, cli_env):
        result = runner.invoke(app, ["put", "views", "ten", "--type", "int"])
        assert result.exit_code != 0

    def test_add(self, cli_env):
        result = runner.invoke(app, ["add", "once", "first"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["add", "once", "second"])
        assert result.exit_code == 1
        assert "already holds a live value" in result.output

    def test_forever_and_forget(self, cli_env):
        runner.invoke(app, ["forever", "keep", "me"])
        assert runner.invoke(app, ["get", "keep"]).output.strip() == "me"

        result = runner.invoke(app, ["forget", "keep"])
        assert result.exit_code == 0
        assert runner.invoke(app, ["get", "keep"]).exit_code == 1

    def test_flush_fails(self, cli_env):
        runner.invoke(app, ["put", "a", "1"])
        result = runner.invoke(app, ["flush"])
        assert result.exit_code == 1
        assert "does not support flushing" in result.output
        assert runner.invoke(app, ["get", "a"]).exit_code == 0


# ==============================================================================
# Lock Commands
# ==============================================================================


class TestLockCommands:
    def test_acquire_and_release(self, cli_env):
        result = runner.invoke(app, ["lock", "acquire", "job", "--ttl", "30"])
        assert result.exit_code == 0
        owner = result.output.strip()
        assert owner

        result = runner.invoke(app, ["lock", "owner", "job"])
        assert result.output.strip() == owner

        result = runner.invoke(app, ["lock", "release", "job", "--owner", owner])
        assert result.exit_code == 0

        result = runner.invoke(app, ["lock", "owner", "job"])
        assert result.exit_code == 1

    def test_acquire_held_lock(self, cli_env):
        runner.invoke(app, ["lock", "acquire", "job", "--owner", "worker-1"])
        result = runner.invoke(app, ["lock", "acquire", "job", "--owner", "worker-2"])
        assert result.exit_code == 1

    def test_release_wrong_owner(self, cli_env):
        runner.invoke(app, ["lock", "acquire", "job", "--owner", "worker-1"])
        result = runner.invoke(app, ["lock", "release", "job", "--owner", "worker-2"])
        assert result.exit_code == 1

    def test_force_release(self, cli_env):
        runner.invoke(app, ["lock", "acquire", "job", "--owner", "worker-1"])
        result = runner.invoke(app, ["lock", "force-release", "job"])
        assert result.exit_code == 0
        assert runner.invoke(app, ["lock", "owner", "job"]).exit_code == 1


# ==============================================================================
# Operational Commands
# ==============================================================================


class TestOperationalCommands:
    def test_status_json(self, cli_env):
        result = runner.invoke(app, ["status", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["prefix"] == "cli:"
        assert data["tables"][0]["name"] == TABLE
        assert data["tables"][0]["reachable"] is True
        assert data["tables"][0]["key_attribute"] == "key"

    def test_table_create_existing(self, cli_env):
        result = runner.invoke(app, ["table", "create"])
        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_config_show_json_masks_secrets(self, cli_env, monkeypatch):
        monkeypatch.setenv("DYNAMODB_AWS_ACCESS_KEY_ID", "AKIAEXAMPLE")
        monkeypatch.setenv("DYNAMODB_AWS_SECRET_ACCESS_KEY", "super-secret")
        result = runner.invoke(app, ["config", "show", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["dynamodb"]["table"] == TABLE
        assert data["dynamodb"]["aws_secret_access_key"] == "********"
        assert data["cache"]["prefix"] == "cli"
