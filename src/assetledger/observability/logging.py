"""Structured logging for the asset ledger.

Every ledger event is a structlog record with a dotted event name
(``ledger.asset.created``, ``ledger.tx.committed``, ...) and keyword fields.
Records are rendered either as colored console lines or as one JSON object
per line, always on stderr so that CLI results on stdout stay parseable.

The gateway binds ``tx_id`` and ``operation`` for the duration of each
invocation, so every event emitted by contract code carries the transaction
it belongs to without passing it around.

Environment Variables:
    LEDGER_LOG_FORMAT: "json" or "console" (default: console)
    LEDGER_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default: INFO)
    LEDGER_SERVICE_NAME: Value of the ``service`` field (default: asset-ledger)

Example:
    >>> configure_logging(log_format="json", log_level="INFO")
    >>> bind_context(tx_id="tx_01H...", operation="CreateAsset")
    >>> get_logger("assetledger.contract.registry").info(
    ...     "ledger.asset.created", asset_id="asset3", owner="Org2"
    ... )
"""

import logging
import os
import sys
from typing import Any

import structlog
from structlog.typing import Processor

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_SERVICE_NAME = "asset-ledger"

ENV_LOG_FORMAT = "LEDGER_LOG_FORMAT"
ENV_LOG_LEVEL = "LEDGER_LOG_LEVEL"
ENV_SERVICE_NAME = "LEDGER_SERVICE_NAME"

_logging_configured = False


def _env_setting(name: str, default: str) -> str:
    return os.environ.get(name, default)


def _shared_processors() -> list[Processor]:
    """Processors applied to ledger events and to plain stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Arguments left as None fall back to the LEDGER_* environment variables.
    The first call wins unless force is set; the CLI forces reconfiguration
    once its options are parsed.

    Args:
        log_format: "json" or "console".
        log_level: Minimum level name, case-insensitive.
        service_name: Bound as ``service`` on every record.
        force: Replace an existing configuration.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    log_format = (log_format or _env_setting(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)).lower()
    log_level = (log_level or _env_setting(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
    service_name = service_name or _env_setting(ENV_SERVICE_NAME, DEFAULT_SERVICE_NAME)

    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    structlog.contextvars.bind_contextvars(service=service_name)

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return the ledger logger for a module, configuring defaults on first use."""
    if not _logging_configured:
        configure_logging()

    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every event logged from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Detach the given fields, e.g. ``tx_id`` once an invocation ends."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Detach every bound field, including ``service``."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SERVICE_NAME",
    "ENV_LOG_FORMAT",
    "ENV_LOG_LEVEL",
    "ENV_SERVICE_NAME",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
