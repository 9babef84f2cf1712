"""Seed routine that writes the default assets."""

from __future__ import annotations

from assetledger.contract.registry import put_asset
from assetledger.models.asset import Asset
from assetledger.observability import get_logger
from assetledger.state.context import TransactionContext

logger = get_logger(__name__)

DEFAULT_ASSETS: tuple[Asset, ...] = (
    Asset(id="asset1", description="myAsset", owner="Org1"),
    Asset(id="asset2", description="anotherAsset", owner="Org1"),
)


def init_ledger(ctx: TransactionContext) -> None:
    """Write the default assets, overwriting whatever is stored at their keys.

    Writes stop at the first failure; earlier writes in the same invocation
    are not undone here.

    Raises:
        StoreFailureError: If a write fails.
    """
    for asset in DEFAULT_ASSETS:
        put_asset(ctx, asset)
    logger.info("ledger.seeded", asset_ids=[asset.id for asset in DEFAULT_ASSETS])


__all__ = ["DEFAULT_ASSETS", "init_ledger"]
