"""Asset ledger data models.

Example:
    >>> from assetledger.models import Asset, encode_asset, decode_asset
    >>> asset = Asset(id="asset9", description="pump", owner="Org2")
    >>> decode_asset("asset9", encode_asset(asset)) == asset
    True
"""

from assetledger.models.asset import Asset, QueryResult, decode_asset, encode_asset
from assetledger.models.base import LedgerBaseModel

__all__ = [
    "Asset",
    "LedgerBaseModel",
    "QueryResult",
    "decode_asset",
    "encode_asset",
]
