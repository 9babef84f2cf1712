"""Gateway: runs one named invocation inside one world state transaction.

The gateway stands in for the platform around the contract. For each
invocation it opens a transaction context, dispatches the operation, and
then either commits the write set (submit) or discards it (evaluate). Any
error aborts the transaction and is re-raised unchanged, so no invocation
ever leaves a partial write set behind.

Example:
    >>> gateway = Gateway(InMemoryWorldState())
    >>> gateway.submit("InitLedger")
    >>> [r.key for r in gateway.evaluate("GetAllAssets")]
    ['asset1', 'asset2']
"""

from __future__ import annotations

from typing import Any

from assetledger.contract.dispatch import OperationRegistry, create_contract_registry
from assetledger.errors import LedgerError
from assetledger.observability import bind_context, get_logger, unbind_context
from assetledger.state.transaction import LedgerTransaction
from assetledger.state.world_state import WorldState

logger = get_logger(__name__)


class Gateway:
    """Submit and evaluate contract invocations against a world state.

    Attributes:
        world_state: Backend the transactions run against.
        registry: Operation registry used for dispatch.
    """

    def __init__(
        self,
        world_state: WorldState,
        registry: OperationRegistry | None = None,
    ) -> None:
        self.world_state = world_state
        self.registry = registry or create_contract_registry()

    def _run(self, name: str, args: tuple[Any, ...], commit: bool) -> Any:
        tx: LedgerTransaction = self.world_state.begin()
        bind_context(tx_id=tx.tx_id, operation=name)
        try:
            try:
                result = self.registry.invoke(tx, name, args)
            except Exception as exc:
                self.world_state.abort(tx)
                logger.warning(
                    "ledger.tx.aborted",
                    error=type(exc).__name__,
                    message=str(exc),
                )
                raise
            if not commit:
                self.world_state.abort(tx)
                logger.debug("ledger.tx.evaluated", reads=len(tx.read_set))
                return result
            try:
                commit_seq = self.world_state.commit(tx)
            except LedgerError as exc:
                logger.warning("ledger.tx.rejected", code=exc.code, message=exc.message)
                raise
            logger.info(
                "ledger.tx.committed",
                commit_seq=commit_seq,
                writes=len(tx.write_set),
            )
            return result
        finally:
            unbind_context("tx_id", "operation")

    def submit(self, name: str, *args: Any) -> Any:
        """Invoke an operation and commit its writes.

        Raises:
            LedgerError: Any domain error from the operation (nothing is
                committed), or MVCCConflictError if the read set went stale.
        """
        return self._run(name, args, commit=True)

    def evaluate(self, name: str, *args: Any) -> Any:
        """Invoke an operation without committing anything."""
        return self._run(name, args, commit=False)


__all__ = ["Gateway"]
