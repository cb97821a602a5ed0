"""Tests for the command-line interface."""

import json

import pytest

from erp_migration.cli import main

ENV_VARS = [
    "PRODUCT", "MODE", "COMPANY", "ION_BASE_URL", "DB_TYPE", "DB_PORT",
    "MIGRATION_BATCH_SIZE", "MIGRATION_CONCURRENCY", "MIGRATION_PARALLEL",
    "LOAD_ERROR_RATE", "TARGET_URL", "DRY_RUN", "LOG_LEVEL",
]


@pytest.fixture
def cli(tmp_path, monkeypatch):
    """Run the CLI against an empty .env with a clean environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("")

    def run(*args):
        return main(["--env-file", str(env_file), *args])

    return run


def test_list(cli, capsys):
    assert cli("list") == 0
    out = capsys.readouterr().out
    assert "42 Migration Objects" in out
    assert "BUSINESS_PARTNER" in out


def test_list_json(cli, capsys):
    assert cli("list", "--json") == 0
    objects = json.loads(capsys.readouterr().out)
    assert len(objects) == 42
    assert objects[0]["object_id"] == "GL_BALANCE"


def test_waves_subset(cli, capsys):
    assert cli("waves", "GL_ACCOUNT_MASTER", "GL_BALANCE") == 0
    out = capsys.readouterr().out
    assert out.index("GL_ACCOUNT_MASTER") < out.index("GL_BALANCE")
    assert "Wave 2 (1 objects)" in out


def test_run_json(cli, capsys):
    assert cli("run", "GL_ACCOUNT_MASTER", "--json") == 0
    report = json.loads(capsys.readouterr().out)
    assert report["mode"] == "mock"
    assert report["results"][0]["object_id"] == "GL_ACCOUNT_MASTER"
    assert report["results"][0]["status"] == "completed"


def test_run_writes_report(cli, capsys, tmp_path):
    output = tmp_path / "report.json"
    assert cli("run", "BANK_MASTER", "--sequential", "--output", str(output)) == 0
    out = capsys.readouterr().out
    assert "MIGRATION RUN COMPLETE" in out
    assert json.loads(output.read_text())["stats"]["completed"] == 1


def test_run_with_load_errors(cli, capsys):
    assert cli("run", "BANK_MASTER", "--error-rate", "0.5", "--json") == 0
    result = json.loads(capsys.readouterr().out)["results"][0]
    assert result["status"] == "completed_with_errors"


def test_unknown_object(cli, capsys):
    assert cli("run", "NOPE") == 2
    assert "NOPE" in capsys.readouterr().err


def test_invalid_config(cli, monkeypatch, capsys):
    monkeypatch.setenv("MIGRATION_BATCH_SIZE", "zero")
    assert cli("list") == 2
    assert "MIGRATION_BATCH_SIZE" in capsys.readouterr().err


def test_health_mock(cli, capsys, monkeypatch):
    monkeypatch.setenv("PRODUCT", "m3")
    assert cli("health") == 0
    report = json.loads(capsys.readouterr().out)
    assert report["health"]["ok"] is True
    assert report["settings"]["product"] == "M3"
