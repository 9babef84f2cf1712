"""Bulk enumeration of every asset in the world state."""

from __future__ import annotations

from assetledger.models.asset import QueryResult, decode_asset
from assetledger.observability import get_logger
from assetledger.state.context import TransactionContext

logger = get_logger(__name__)

# An empty start and end key scans the whole namespace.
OPEN_RANGE = ("", "")


def get_all_assets(ctx: TransactionContext) -> list[QueryResult]:
    """Return every stored asset in key order.

    The first record that fails to decode aborts the whole query; no partial
    list is returned. The scan is closed on every exit path.

    Raises:
        DecodeFailureError: If any stored value is not an asset.
        StoreFailureError: If the scan fails.
    """
    results: list[QueryResult] = []
    with ctx.get_state_by_range(*OPEN_RANGE) as scan:
        for entry in scan:
            asset = decode_asset(entry.key, entry.value)
            results.append(QueryResult(key=entry.key, record=asset))
    logger.debug("ledger.query.all_assets", count=len(results))
    return results


__all__ = ["get_all_assets"]
