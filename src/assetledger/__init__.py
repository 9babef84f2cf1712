"""Asset Ledger: asset registry with a two-party approval workflow.

The contract runs as transactional business logic over a versioned
key-value world state. Each invocation reads and writes through a
transaction context; the gateway commits or aborts the result.

Example:
    >>> from assetledger import Gateway, InMemoryWorldState
    >>> gateway = Gateway(InMemoryWorldState())
    >>> gateway.submit("CreateAsset", "asset3", "desc", "Org2", "0", "0", "0")
    >>> gateway.evaluate("ReadAsset", "asset3").owner
    'Org2'
"""

__version__ = "0.1.0"

from assetledger.config import LedgerConfig
from assetledger.errors import (
    AssetAlreadyExistsError,
    AssetNotFoundError,
    DecodeFailureError,
    InvalidArgumentsError,
    LedgerError,
    MVCCConflictError,
    OperationNotFoundError,
    StoreFailureError,
    TransactionClosedError,
)
from assetledger.gateway import Gateway
from assetledger.models import Asset, QueryResult
from assetledger.state import InMemoryWorldState, SQLiteWorldState, create_world_state

__all__ = [
    "__version__",
    "Asset",
    "AssetAlreadyExistsError",
    "AssetNotFoundError",
    "DecodeFailureError",
    "Gateway",
    "InMemoryWorldState",
    "InvalidArgumentsError",
    "LedgerConfig",
    "LedgerError",
    "MVCCConflictError",
    "OperationNotFoundError",
    "QueryResult",
    "SQLiteWorldState",
    "StoreFailureError",
    "TransactionClosedError",
    "create_world_state",
]
