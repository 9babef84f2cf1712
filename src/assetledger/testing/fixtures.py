"""Pytest fixtures for asset ledger tests.

Fixtures (use with pytest, e.g. ``pytest_plugins = ["assetledger.testing.fixtures"]``):
    world_state: Empty in-memory world state.
    sqlite_world_state: Empty SQLite world state in a temporary file.
    ledger_tx: Open transaction context on world_state.
    gateway: Gateway over world_state with the full contract registry.
    seeded_gateway: gateway after InitLedger has been committed.

Context managers:
    committed_tx(): Yields a transaction context and commits it on exit.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest

from assetledger.gateway import Gateway
from assetledger.state.stores.memory import InMemoryWorldState
from assetledger.state.stores.sqlite import SQLiteWorldState
from assetledger.state.transaction import LedgerTransaction
from assetledger.state.world_state import WorldState


@pytest.fixture
def world_state() -> InMemoryWorldState:
    """Create an empty in-memory world state for the test."""
    return InMemoryWorldState()


@pytest.fixture
def sqlite_world_state(tmp_path: Path) -> SQLiteWorldState:
    """Create an empty SQLite world state in an isolated file."""
    return SQLiteWorldState(db_path=tmp_path / "ledger_test.db")


@pytest.fixture
def ledger_tx(world_state: InMemoryWorldState) -> LedgerTransaction:
    """Open a transaction on world_state (not committed automatically)."""
    return world_state.begin()


@pytest.fixture
def gateway(world_state: InMemoryWorldState) -> Gateway:
    """Gateway over world_state with every contract operation registered."""
    return Gateway(world_state)


@pytest.fixture
def seeded_gateway(gateway: Gateway) -> Gateway:
    """Gateway whose world state holds the default assets."""
    gateway.submit("InitLedger")
    return gateway


@contextmanager
def committed_tx(world: WorldState) -> Iterator[LedgerTransaction]:
    """Yield a transaction context and commit it when the block exits cleanly.

    Example:
        >>> with committed_tx(world) as tx:
        ...     create_asset(tx, "asset3", "desc", "Org2", 0, 0, 0)
    """
    tx = world.begin()
    try:
        yield tx
    except BaseException:
        world.abort(tx)
        raise
    world.commit(tx)


__all__ = [
    "committed_tx",
    "gateway",
    "ledger_tx",
    "seeded_gateway",
    "sqlite_world_state",
    "world_state",
]
