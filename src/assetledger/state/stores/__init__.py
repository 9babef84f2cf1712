"""World state storage backends.

This package provides WorldState implementations:
- InMemoryWorldState (from stores.memory)
- SQLiteWorldState (from stores.sqlite)

Factory:
- create_world_state() builds a WorldState from a LedgerConfig
  (default: LedgerConfig.from_env(), i.e. memory backend).
"""

from __future__ import annotations

from assetledger.config import LedgerConfig
from assetledger.state.stores.memory import InMemoryWorldState
from assetledger.state.stores.sqlite import SQLiteWorldState
from assetledger.state.world_state import WorldState


def create_world_state(config: LedgerConfig | None = None) -> WorldState:
    """Create a WorldState from configuration.

    Use "memory" for tests and "sqlite" for persistent state.

    Args:
        config: Process configuration. Defaults to LedgerConfig.from_env().

    Returns:
        Configured WorldState instance.
    """
    config = config or LedgerConfig.from_env()
    if config.storage_backend == "sqlite":
        return SQLiteWorldState(db_path=config.storage_path, scan_page_size=config.scan_page_size)
    return InMemoryWorldState(scan_page_size=config.scan_page_size)


__all__ = [
    "InMemoryWorldState",
    "SQLiteWorldState",
    "create_world_state",
]
