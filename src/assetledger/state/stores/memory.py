"""In-memory WorldState implementation.

Stores committed entries in a dictionary. Useful for tests and for
evaluating invocations without touching disk; nothing survives a restart.
"""

from __future__ import annotations

import threading

from assetledger.config import DEFAULT_SCAN_PAGE_SIZE
from assetledger.errors import MVCCConflictError
from assetledger.observability import get_logger
from assetledger.state.transaction import LedgerTransaction
from assetledger.state.world_state import (
    ABSENT_VERSION,
    VersionedEntry,
    VersionedValue,
)

logger = get_logger(__name__)


class InMemoryWorldState:
    """In-memory implementation of WorldState.

    This implementation is thread-safe using RLock for concurrent access.
    Commits are serialized; validation and apply happen under one lock.
    """

    def __init__(self, scan_page_size: int = DEFAULT_SCAN_PAGE_SIZE) -> None:
        self._lock = threading.RLock()
        self._entries: dict[str, tuple[bytes, int]] = {}
        self._commit_seq = 0
        self._scan_page_size = scan_page_size

    def read(self, key: str) -> VersionedValue:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return VersionedValue(None, ABSENT_VERSION)
            return VersionedValue(*entry)

    def read_range_page(
        self, start_key: str, end_key: str, after_key: str | None, limit: int
    ) -> list[VersionedEntry]:
        with self._lock:
            keys = sorted(
                key
                for key in self._entries
                if key >= start_key
                and (not end_key or key < end_key)
                and (after_key is None or key > after_key)
            )
            return [VersionedEntry(key, *self._entries[key]) for key in keys[:limit]]

    def begin(self, tx_id: str | None = None) -> LedgerTransaction:
        return LedgerTransaction(self, tx_id=tx_id, scan_page_size=self._scan_page_size)

    def commit(self, tx: LedgerTransaction) -> int:
        with self._lock:
            try:
                for key, read_version in tx.read_set.items():
                    current = self.read(key).version
                    if current != read_version:
                        raise MVCCConflictError(
                            tx_id=tx.tx_id,
                            key=key,
                            read_version=read_version,
                            current_version=current,
                        )
                if tx.write_set:
                    self._commit_seq += 1
                for key, value in tx.write_set.items():
                    if value is None:
                        self._entries.pop(key, None)
                    else:
                        self._entries[key] = (value, self._commit_seq)
            finally:
                tx.close()
            logger.debug(
                "ledger.state.committed",
                tx_id=tx.tx_id,
                writes=len(tx.write_set),
                commit_seq=self._commit_seq,
            )
            return self._commit_seq

    def abort(self, tx: LedgerTransaction) -> None:
        tx.close()
        logger.debug("ledger.state.aborted", tx_id=tx.tx_id, discarded=len(tx.write_set))

    def dump(self) -> dict[str, bytes]:
        with self._lock:
            return {key: value for key, (value, _) in sorted(self._entries.items())}


__all__ = ["InMemoryWorldState"]
