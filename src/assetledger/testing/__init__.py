"""Asset ledger testing utilities.

Modules:
    fixtures: Pytest fixtures (world_state, sqlite_world_state, ledger_tx,
              gateway, seeded_gateway) and the committed_tx() context manager.
    mocks: FaultyContext, a transaction context wrapper that injects store
           failures and records port calls.
"""

from assetledger.testing.mocks import FaultyContext

__all__ = ["FaultyContext"]
