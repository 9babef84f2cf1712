"""Observability module for the asset ledger.

Example:
    >>> from assetledger.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("ledger.asset.created", asset_id="asset3")
"""

from assetledger.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
