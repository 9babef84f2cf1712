"""Tests for Gateway submit and evaluate."""

import json

import pytest

from assetledger.contract.dispatch import OperationRegistry
from assetledger.errors import (
    AssetAlreadyExistsError,
    AssetNotFoundError,
    OperationNotFoundError,
)
from assetledger.gateway import Gateway
from assetledger.models.asset import Asset
from assetledger.observability import configure_logging, get_logger
from assetledger.state.context import TransactionContext
from assetledger.state.stores.memory import InMemoryWorldState


def _log_events(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.startswith("{")]


class TestSubmit:
    """submit() commits on success and aborts on error."""

    def test_submit_commits(self, gateway: Gateway, world_state: InMemoryWorldState) -> None:
        assert gateway.submit("CreateAsset", "asset3", "desc", "Org2", "0", "0", "0") is None

        assert "asset3" in world_state.dump()
        assert gateway.evaluate("AssetExists", "asset3") is True

    def test_submit_error_commits_nothing(
        self, seeded_gateway: Gateway, world_state: InMemoryWorldState
    ) -> None:
        before = world_state.dump()

        with pytest.raises(AssetAlreadyExistsError):
            seeded_gateway.submit("CreateAsset", "asset1", "d", "o", 0, 0, 0)

        assert world_state.dump() == before

    def test_partial_write_set_discarded(self, world_state: InMemoryWorldState) -> None:
        """Writes buffered before a failure never reach the world state."""
        registry = OperationRegistry(name="test")

        def write_then_fail(ctx: TransactionContext, key: str) -> None:
            ctx.put_state(key, b"partial")
            raise AssetNotFoundError("missing")

        registry.register("WriteThenFail", write_then_fail)
        gateway = Gateway(world_state, registry)

        with pytest.raises(AssetNotFoundError):
            gateway.submit("WriteThenFail", "k")

        assert world_state.dump() == {}

    def test_unknown_operation(self, gateway: Gateway) -> None:
        with pytest.raises(OperationNotFoundError):
            gateway.submit("Nope")


class TestEvaluate:
    """evaluate() never commits."""

    def test_evaluate_returns_result(self, seeded_gateway: Gateway) -> None:
        asset = seeded_gateway.evaluate("ReadAsset", "asset1")

        assert isinstance(asset, Asset)
        assert asset.description == "myAsset"

    def test_evaluate_discards_writes(
        self, gateway: Gateway, world_state: InMemoryWorldState
    ) -> None:
        gateway.evaluate("CreateAsset", "asset3", "desc", "Org2", 0, 0, 0)

        assert world_state.dump() == {}

    def test_evaluate_missing_asset(self, gateway: Gateway) -> None:
        with pytest.raises(AssetNotFoundError):
            gateway.evaluate("ReadAsset", "asset9")


class TestGatewayLogging:
    """Invocation events carry the bound transaction context."""

    def test_committed_event_has_tx_context(self, gateway: Gateway, capsys) -> None:
        configure_logging(log_format="json", log_level="INFO", force=True)

        gateway.submit("InitLedger")

        events = _log_events(capsys.readouterr().err)
        committed = [e for e in events if e["event"] == "ledger.tx.committed"]
        assert len(committed) == 1
        assert committed[0]["operation"] == "InitLedger"
        assert committed[0]["tx_id"].startswith("tx_")
        assert committed[0]["writes"] == 2

    def test_aborted_event_and_context_unbound(self, gateway: Gateway, capsys) -> None:
        configure_logging(log_format="json", log_level="INFO", force=True)

        with pytest.raises(AssetNotFoundError):
            gateway.submit("DeleteAsset", "asset9")

        events = _log_events(capsys.readouterr().err)
        aborted = [e for e in events if e["event"] == "ledger.tx.aborted"]
        assert aborted[0]["error"] == "AssetNotFoundError"
        assert aborted[0]["operation"] == "DeleteAsset"

        get_logger("test.gateway").info("after")
        [after] = [e for e in _log_events(capsys.readouterr().err) if e["event"] == "after"]
        assert "tx_id" not in after
