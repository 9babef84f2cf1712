"""Process-level configuration for the asset ledger.

Configuration is an explicit, immutable object built once at process start
and passed to the pieces that need it (world state factory, CLI, logging).

Environment Variables:
    LEDGER_STORAGE_BACKEND: "memory" or "sqlite" (default: memory)
    LEDGER_STORAGE_PATH: SQLite file path (default: ledger_state.db)
    LEDGER_SCAN_PAGE_SIZE: Entries fetched per range scan page (default: 100)
    LEDGER_LOG_FORMAT / LEDGER_LOG_LEVEL / LEDGER_SERVICE_NAME: see
        assetledger.observability.logging
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import Field

from assetledger.models.base import LedgerBaseModel
from assetledger.observability.logging import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SERVICE_NAME,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    ENV_SERVICE_NAME,
)

LEDGER_STORAGE_BACKEND_ENV = "LEDGER_STORAGE_BACKEND"
LEDGER_STORAGE_PATH_ENV = "LEDGER_STORAGE_PATH"
LEDGER_SCAN_PAGE_SIZE_ENV = "LEDGER_SCAN_PAGE_SIZE"

DEFAULT_DB_PATH = "ledger_state.db"
DEFAULT_SCAN_PAGE_SIZE = 100

StorageBackend = Literal["memory", "sqlite"]


class LedgerConfig(LedgerBaseModel):
    """Settings for one ledger process.

    Attributes:
        storage_backend: World state backend ("memory" or "sqlite").
        storage_path: SQLite database file (ignored for memory).
        scan_page_size: Entries fetched per range scan page.
        log_format: "console" or "json".
        log_level: Minimum log level name.
        service_name: Service name bound into every log line.
    """

    storage_backend: StorageBackend = "memory"
    storage_path: Path = Path(DEFAULT_DB_PATH)
    scan_page_size: int = Field(default=DEFAULT_SCAN_PAGE_SIZE, ge=1)
    log_format: Literal["console", "json"] = DEFAULT_LOG_FORMAT
    log_level: str = DEFAULT_LOG_LEVEL
    service_name: str = DEFAULT_SERVICE_NAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LedgerConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Raises:
            pydantic.ValidationError: If a value is not acceptable, e.g. an
                unknown backend name.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if LEDGER_STORAGE_BACKEND_ENV in env:
            values["storage_backend"] = env[LEDGER_STORAGE_BACKEND_ENV].strip().lower()
        if LEDGER_STORAGE_PATH_ENV in env:
            values["storage_path"] = Path(env[LEDGER_STORAGE_PATH_ENV].strip())
        if LEDGER_SCAN_PAGE_SIZE_ENV in env:
            values["scan_page_size"] = env[LEDGER_SCAN_PAGE_SIZE_ENV].strip()
        if ENV_LOG_FORMAT in env:
            values["log_format"] = env[ENV_LOG_FORMAT].strip().lower()
        if ENV_LOG_LEVEL in env:
            values["log_level"] = env[ENV_LOG_LEVEL].strip().upper()
        if ENV_SERVICE_NAME in env:
            values["service_name"] = env[ENV_SERVICE_NAME]
        return cls.model_validate(values)


__all__ = [
    "DEFAULT_DB_PATH",
    "DEFAULT_SCAN_PAGE_SIZE",
    "LEDGER_SCAN_PAGE_SIZE_ENV",
    "LEDGER_STORAGE_BACKEND_ENV",
    "LEDGER_STORAGE_PATH_ENV",
    "LedgerConfig",
]
