"""World state access for the asset ledger.

Contract code sees only the TransactionContext port; the backends and
the transaction implementation stand in for the platform's state database.

Example:
    >>> from assetledger.state import InMemoryWorldState
    >>> world = InMemoryWorldState()
    >>> tx = world.begin()
    >>> tx.put_state("asset1", b"{}")
    >>> world.commit(tx)
    1
"""

from assetledger.state.context import KV, StateIterator, TransactionContext
from assetledger.state.stores import InMemoryWorldState, SQLiteWorldState, create_world_state
from assetledger.state.transaction import LedgerTransaction, RangeScanIterator
from assetledger.state.world_state import WorldState

__all__ = [
    "KV",
    "InMemoryWorldState",
    "LedgerTransaction",
    "RangeScanIterator",
    "SQLiteWorldState",
    "StateIterator",
    "TransactionContext",
    "WorldState",
    "create_world_state",
]
