"""Asset contract: registry, approval workflow, bulk query and seed routine.

Every function takes the transaction context of the current invocation as
its first argument. create_contract_registry() maps invocation names to
these functions.
"""

from assetledger.contract.approval import (
    ApprovalState,
    approval_state,
    approve_first,
    approve_second,
)
from assetledger.contract.dispatch import (
    Operation,
    OperationRegistry,
    create_contract_registry,
    to_wire,
)
from assetledger.contract.query import get_all_assets
from assetledger.contract.registry import (
    asset_exists,
    create_asset,
    delete_asset,
    read_asset,
    transfer_asset,
    update_asset,
)
from assetledger.contract.seed import DEFAULT_ASSETS, init_ledger

__all__ = [
    "DEFAULT_ASSETS",
    "ApprovalState",
    "Operation",
    "OperationRegistry",
    "approval_state",
    "approve_first",
    "approve_second",
    "asset_exists",
    "create_asset",
    "create_contract_registry",
    "delete_asset",
    "get_all_assets",
    "init_ledger",
    "read_asset",
    "to_wire",
    "transfer_asset",
    "update_asset",
]
