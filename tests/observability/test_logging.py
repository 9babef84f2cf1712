"""Tests for structured logging configuration."""

import json
import logging
from unittest.mock import patch

from assetledger.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.startswith("{")]


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_respects_log_level(self) -> None:
        """configure_logging sets the root log level."""
        configure_logging(log_format="console", log_level="WARNING", force=True)

        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_from_environment_variables(self) -> None:
        """configure_logging reads LEDGER_* variables when no arguments are given."""
        with patch.dict(
            "os.environ",
            {
                "LEDGER_LOG_FORMAT": "json",
                "LEDGER_LOG_LEVEL": "ERROR",
                "LEDGER_SERVICE_NAME": "env-service",
            },
        ):
            configure_logging(force=True)

            assert logging.getLogger().level == logging.ERROR

    def test_json_output_goes_to_stderr(self, capsys) -> None:
        """JSON records land on stderr with the service name bound."""
        configure_logging(log_format="json", log_level="INFO", service_name="svc", force=True)

        get_logger("test.json").info("ledger.test.event", number=42)

        captured = capsys.readouterr()
        [record] = [r for r in _json_lines(captured.err) if r["event"] == "ledger.test.event"]
        assert record["number"] == 42
        assert record["service"] == "svc"
        assert record["level"] == "info"
        assert captured.out == ""

    def test_level_filters_records(self, capsys) -> None:
        configure_logging(log_format="json", log_level="WARNING", force=True)

        get_logger("test.filter").info("ledger.test.hidden")

        assert "ledger.test.hidden" not in capsys.readouterr().err

    def test_does_not_reconfigure_by_default(self) -> None:
        """A second call without force is a no-op."""
        configure_logging(log_format="console", log_level="DEBUG", force=True)
        configure_logging(log_format="json", log_level="ERROR")

        assert logging.getLogger().level == logging.DEBUG


class TestContextBinding:
    """bind_context, unbind_context and clear_context."""

    def test_bound_values_appear_until_unbound(self, capsys) -> None:
        configure_logging(log_format="json", log_level="INFO", force=True)
        logger = get_logger("test.context")

        bind_context(tx_id="tx_1", operation="CreateAsset")
        logger.info("ledger.test.bound")
        unbind_context("tx_id")
        logger.info("ledger.test.unbound")
        clear_context()
        logger.info("ledger.test.cleared")

        records = {r["event"]: r for r in _json_lines(capsys.readouterr().err)}
        assert records["ledger.test.bound"]["tx_id"] == "tx_1"
        assert "tx_id" not in records["ledger.test.unbound"]
        assert records["ledger.test.unbound"]["operation"] == "CreateAsset"
        assert "operation" not in records["ledger.test.cleared"]
