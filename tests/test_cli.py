"""Tests for the assetledger CLI."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from assetledger import __version__
from assetledger.cli import app
from assetledger.observability import configure_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch) -> Iterator[None]:
    for name in ("LEDGER_STORAGE_BACKEND", "LEDGER_STORAGE_PATH", "LEDGER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    # The CLI points the log handler at the runner's stderr; re-point it.
    configure_logging(force=True)


@pytest.fixture
def db_args(tmp_path: Path) -> list[str]:
    return ["--backend", "sqlite", "--db-path", str(tmp_path / "cli.db")]


def _run(db_args: list[str], *args: str):
    return runner.invoke(app, [*db_args, *args])


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestCommands:
    """Each command against a SQLite file shared across invocations."""

    def test_init_and_list(self, db_args: list[str]) -> None:
        assert _run(db_args, "init").exit_code == 0

        result = _run(db_args, "list")

        assert result.exit_code == 0
        listed = json.loads(result.stdout)
        assert [entry["Key"] for entry in listed] == ["asset1", "asset2"]
        assert listed[0]["Record"]["approvalOne"] == 0

    def test_create_read_and_approve(self, db_args: list[str]) -> None:
        created = _run(db_args, "create", "asset3", "desc", "Org2")
        assert created.exit_code == 0
        assert json.loads(created.stdout) == {"operation": "CreateAsset", "status": "ok"}

        assert _run(db_args, "approve-first", "asset3").exit_code == 0
        assert _run(db_args, "approve-second", "asset3").exit_code == 0

        record = json.loads(_run(db_args, "read", "asset3").stdout)
        assert record == {
            "ID": "asset3",
            "description": "desc",
            "owner": "Org2",
            "approvalOne": 1,
            "approvalTwo": 1,
            "registered": 1,
        }

    def test_create_with_flags(self, db_args: list[str]) -> None:
        _run(db_args, "create", "asset3", "desc", "Org2", "--approval-one", "1")

        assert json.loads(_run(db_args, "read", "asset3").stdout)["approvalOne"] == 1

    def test_update_transfer_delete(self, db_args: list[str]) -> None:
        _run(db_args, "create", "asset3", "desc", "Org2")

        assert _run(db_args, "update", "asset3", "new", "Org2", "1", "0", "0").exit_code == 0
        assert _run(db_args, "transfer", "asset3", "Org4").exit_code == 0
        record = json.loads(_run(db_args, "read", "asset3").stdout)
        assert (record["description"], record["owner"], record["approvalOne"]) == (
            "new",
            "Org4",
            1,
        )

        assert _run(db_args, "delete", "asset3").exit_code == 0
        assert json.loads(_run(db_args, "exists", "asset3").stdout) is False

    def test_invoke_generic(self, db_args: list[str]) -> None:
        result = _run(db_args, "invoke", "CreateAsset", "asset3", "desc", "Org2", "0", "0", "0")
        assert result.exit_code == 0

        exists = _run(db_args, "invoke", "AssetExists", "asset3", "--evaluate")
        assert json.loads(exists.stdout) is True

    def test_operations(self, db_args: list[str]) -> None:
        result = _run(db_args, "operations")

        assert result.exit_code == 0
        metadata = json.loads(result.stdout)
        assert metadata["contract"] == "asset-ledger"
        assert "ApproveRequestTwo" in [op["name"] for op in metadata["operations"]]


class TestErrors:
    """Ledger errors exit with code 1 and a JSON error body."""

    def test_read_missing(self, db_args: list[str]) -> None:
        result = _run(db_args, "read", "ghost")

        assert result.exit_code == 1
        assert "ledger:asset/not_found" in result.output

    def test_create_duplicate(self, db_args: list[str]) -> None:
        _run(db_args, "create", "asset3", "desc", "Org2")

        result = _run(db_args, "create", "asset3", "desc", "Org2")

        assert result.exit_code == 1
        assert "ledger:asset/already_exists" in result.output

    def test_invoke_bad_arguments(self, db_args: list[str]) -> None:
        result = _run(db_args, "invoke", "TransferAsset", "asset3")

        assert result.exit_code == 1
        assert "ledger:contract/invalid_arguments" in result.output

    def test_unknown_backend(self) -> None:
        result = runner.invoke(app, ["--backend", "postgres", "list"])

        assert result.exit_code == 2

    def test_memory_backend_forgets_between_invocations(self) -> None:
        assert runner.invoke(app, ["--backend", "memory", "init"]).exit_code == 0

        result = runner.invoke(app, ["--backend", "memory", "read", "asset1"])

        assert result.exit_code == 1


class TestLogLevel:
    """Where the CLI takes its log level from."""

    def test_defaults_to_warning(self, db_args: list[str]) -> None:
        assert _run(db_args, "list").exit_code == 0

        assert logging.getLogger().level == logging.WARNING

    def test_env_variable_honored(self, db_args: list[str], monkeypatch) -> None:
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "error")

        assert _run(db_args, "list").exit_code == 0

        assert logging.getLogger().level == logging.ERROR

    def test_option_overrides_env(self, db_args: list[str], monkeypatch) -> None:
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "ERROR")

        result = runner.invoke(app, ["--log-level", "critical", *db_args, "list"])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.CRITICAL
