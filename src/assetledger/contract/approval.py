"""Two-step approval workflow layered on asset records.

The workflow state is derived from the two approval flags; it is never
stored on its own. Transitions are unordered and idempotent:

    UNAPPROVED (0,0) --approve_first--> FIRST_APPROVED (1,0)
    UNAPPROVED (0,0) --approve_second--> SECOND_APPROVED_ONLY (0,1), registered
    FIRST_APPROVED   --approve_second--> BOTH_APPROVED (1,1), registered
    SECOND_APPROVED_ONLY --approve_first--> BOTH_APPROVED (1,1)

approve_second marks the asset registered whether or not the first
approval has happened. There is no reject or revoke transition; only a
full update_asset clears the flags.
"""

from __future__ import annotations

from enum import Enum

from assetledger.contract.registry import put_asset, read_asset
from assetledger.models.asset import Asset
from assetledger.observability import get_logger
from assetledger.state.context import TransactionContext

logger = get_logger(__name__)


class ApprovalState(str, Enum):
    """Approval state derived from (approval_one, approval_two)."""

    UNAPPROVED = "unapproved"
    FIRST_APPROVED = "first_approved"
    SECOND_APPROVED_ONLY = "second_approved_only"
    BOTH_APPROVED = "both_approved"


def approval_state(asset: Asset) -> ApprovalState:
    """Derive the approval state of an asset; any non-zero flag counts as set.

    Example:
        >>> approval_state(Asset(id="a", description="", owner="Org1", approval_one=1))
        <ApprovalState.FIRST_APPROVED: 'first_approved'>
    """
    first, second = bool(asset.approval_one), bool(asset.approval_two)
    if first and second:
        return ApprovalState.BOTH_APPROVED
    if first:
        return ApprovalState.FIRST_APPROVED
    if second:
        return ApprovalState.SECOND_APPROVED_ONLY
    return ApprovalState.UNAPPROVED


def _apply(ctx: TransactionContext, asset_id: str, step: str, **flags: int) -> Asset:
    asset = read_asset(ctx, asset_id)
    updated = asset.model_copy(update=flags)
    put_asset(ctx, updated)
    logger.info(
        "ledger.approval.transition",
        asset_id=asset_id,
        step=step,
        from_state=approval_state(asset).value,
        to_state=approval_state(updated).value,
        registered=updated.registered,
    )
    return updated


def approve_first(ctx: TransactionContext, asset_id: str) -> None:
    """Record the first approval: sets approval_one to 1, nothing else.

    Raises:
        AssetNotFoundError: If no record exists.
    """
    _apply(ctx, asset_id, "first", approval_one=1)


def approve_second(ctx: TransactionContext, asset_id: str) -> None:
    """Record the second approval and register the asset.

    Sets approval_two and registered to 1 regardless of approval_one.

    Raises:
        AssetNotFoundError: If no record exists.
    """
    _apply(ctx, asset_id, "second", approval_two=1, registered=1)


__all__ = ["ApprovalState", "approval_state", "approve_first", "approve_second"]
