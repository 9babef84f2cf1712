"""Tests for LedgerConfig."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from assetledger.config import DEFAULT_DB_PATH, DEFAULT_SCAN_PAGE_SIZE, LedgerConfig


class TestLedgerConfigDefaults:
    """Defaults with an empty environment."""

    def test_defaults(self) -> None:
        config = LedgerConfig.from_env({})

        assert config.storage_backend == "memory"
        assert config.storage_path == Path(DEFAULT_DB_PATH)
        assert config.scan_page_size == DEFAULT_SCAN_PAGE_SIZE
        assert config.log_format == "console"
        assert config.log_level == "INFO"
        assert config.service_name == "asset-ledger"

    def test_frozen(self) -> None:
        config = LedgerConfig()

        with pytest.raises(ValidationError):
            config.storage_backend = "sqlite"  # type: ignore[misc]


class TestLedgerConfigFromEnv:
    """Environment overrides."""

    def test_reads_every_variable(self) -> None:
        config = LedgerConfig.from_env(
            {
                "LEDGER_STORAGE_BACKEND": " SQLite ",
                "LEDGER_STORAGE_PATH": "/tmp/ledger.db",
                "LEDGER_SCAN_PAGE_SIZE": "25",
                "LEDGER_LOG_FORMAT": "JSON",
                "LEDGER_LOG_LEVEL": "debug",
                "LEDGER_SERVICE_NAME": "ledger-node-1",
            }
        )

        assert config.storage_backend == "sqlite"
        assert config.storage_path == Path("/tmp/ledger.db")
        assert config.scan_page_size == 25
        assert config.log_format == "json"
        assert config.log_level == "DEBUG"
        assert config.service_name == "ledger-node-1"

    @pytest.mark.parametrize(
        "environ",
        [
            {"LEDGER_STORAGE_BACKEND": "postgres"},
            {"LEDGER_SCAN_PAGE_SIZE": "0"},
            {"LEDGER_SCAN_PAGE_SIZE": "many"},
            {"LEDGER_LOG_FORMAT": "xml"},
        ],
    )
    def test_invalid_values_rejected(self, environ: dict[str, str]) -> None:
        with pytest.raises(ValidationError):
            LedgerConfig.from_env(environ)

    def test_defaults_to_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("LEDGER_SCAN_PAGE_SIZE", "7")

        assert LedgerConfig.from_env().scan_page_size == 7
