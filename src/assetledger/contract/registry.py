"""Asset registry: create, read, update, delete, transfer and existence checks.

Every operation takes the transaction context of the current invocation and
holds no state of its own. Records are re-read from the world state before
they are mutated, and every write stores the complete record.

Example:
    >>> create_asset(ctx, "asset3", "desc", "Org2", 0, 0, 0)
    >>> read_asset(ctx, "asset3").owner
    'Org2'
"""

from __future__ import annotations

from assetledger.errors import AssetAlreadyExistsError, AssetNotFoundError
from assetledger.models.asset import Asset, decode_asset, encode_asset
from assetledger.observability import get_logger
from assetledger.state.context import TransactionContext

logger = get_logger(__name__)


def put_asset(ctx: TransactionContext, asset: Asset) -> None:
    """Encode and write the full record under its ID."""
    ctx.put_state(asset.id, encode_asset(asset))


def asset_exists(ctx: TransactionContext, asset_id: str) -> bool:
    """Return True when a record with asset_id exists in the world state.

    Raises:
        StoreFailureError: If the read itself fails.
    """
    return ctx.get_state(asset_id) is not None


def create_asset(
    ctx: TransactionContext,
    asset_id: str,
    description: str,
    owner: str,
    approval_one: int,
    approval_two: int,
    registered: int,
) -> None:
    """Issue a new asset with exactly the given field values.

    Raises:
        AssetAlreadyExistsError: If asset_id is already taken.
    """
    if asset_exists(ctx, asset_id):
        raise AssetAlreadyExistsError(asset_id)

    asset = Asset(
        id=asset_id,
        description=description,
        owner=owner,
        approval_one=approval_one,
        approval_two=approval_two,
        registered=registered,
    )
    put_asset(ctx, asset)
    logger.info("ledger.asset.created", asset_id=asset_id, owner=owner)


def read_asset(ctx: TransactionContext, asset_id: str) -> Asset:
    """Return the asset stored under asset_id.

    Raises:
        AssetNotFoundError: If no record exists.
        DecodeFailureError: If the stored bytes are not an asset.
    """
    raw = ctx.get_state(asset_id)
    if raw is None:
        raise AssetNotFoundError(asset_id)
    return decode_asset(asset_id, raw)


def update_asset(
    ctx: TransactionContext,
    asset_id: str,
    description: str,
    owner: str,
    approval_one: int,
    approval_two: int,
    registered: int,
) -> None:
    """Overwrite an existing asset with the given values.

    This is a full overwrite, not a merge: approval flags are replaced too,
    so callers wanting a partial update must read the record first.

    Raises:
        AssetNotFoundError: If no record exists.
    """
    if not asset_exists(ctx, asset_id):
        raise AssetNotFoundError(asset_id)

    asset = Asset(
        id=asset_id,
        description=description,
        owner=owner,
        approval_one=approval_one,
        approval_two=approval_two,
        registered=registered,
    )
    put_asset(ctx, asset)
    logger.info("ledger.asset.updated", asset_id=asset_id)


def delete_asset(ctx: TransactionContext, asset_id: str) -> None:
    """Remove an asset from the world state.

    Raises:
        AssetNotFoundError: If no record exists.
    """
    if not asset_exists(ctx, asset_id):
        raise AssetNotFoundError(asset_id)

    ctx.del_state(asset_id)
    logger.info("ledger.asset.deleted", asset_id=asset_id)


def transfer_asset(ctx: TransactionContext, asset_id: str, new_owner: str) -> None:
    """Change the owner of an asset, leaving every other field unchanged."""
    asset = read_asset(ctx, asset_id)
    put_asset(ctx, asset.model_copy(update={"owner": new_owner}))
    logger.info(
        "ledger.asset.transferred",
        asset_id=asset_id,
        from_owner=asset.owner,
        to_owner=new_owner,
    )


__all__ = [
    "asset_exists",
    "create_asset",
    "delete_asset",
    "put_asset",
    "read_asset",
    "transfer_asset",
    "update_asset",
]
