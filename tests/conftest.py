"""Shared pytest fixtures for asset ledger tests.

World state, transaction and gateway fixtures come from
assetledger.testing.fixtures; this module adds sample data.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from assetledger.models.asset import Asset
from assetledger.observability import clear_context

pytest_plugins = ["assetledger.testing.fixtures"]


@pytest.fixture(autouse=True)
def _clear_log_context() -> Iterator[None]:
    """Keep bound log context (tx_id, operation) from leaking between tests."""
    yield
    clear_context()


@pytest.fixture
def sample_asset() -> Asset:
    """Asset used by the end-to-end scenarios."""
    return Asset(id="asset3", description="desc", owner="Org2")


@pytest.fixture
def sample_asset_bytes() -> bytes:
    """Wire encoding of sample_asset."""
    return (
        b'{"ID":"asset3","description":"desc","owner":"Org2",'
        b'"approvalOne":0,"approvalTwo":0,"registered":0}'
    )
