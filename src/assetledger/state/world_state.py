"""World state interfaces for the local ledger harness.

The world state is a versioned key-value store. Every committed write
stamps the key with the store's commit sequence number; an absent key has
version 0. Transactions record the versions they read and the store
rejects a commit whose read set no longer matches (MVCC validation).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from assetledger.state.transaction import LedgerTransaction

ABSENT_VERSION = 0


class VersionedValue(NamedTuple):
    """A committed value and the version it was written at."""

    value: bytes | None
    version: int


class VersionedEntry(NamedTuple):
    """A committed entry returned by a range page."""

    key: str
    value: bytes
    version: int


@runtime_checkable
class VersionedReader(Protocol):
    """Read side of a world state, used by transaction contexts."""

    def read(self, key: str) -> VersionedValue:
        """Return the committed value and version for key."""
        ...

    def read_range_page(
        self, start_key: str, end_key: str, after_key: str | None, limit: int
    ) -> list[VersionedEntry]:
        """Return up to limit committed entries in key order.

        Args:
            start_key: Inclusive lower bound ("" for unbounded).
            end_key: Exclusive upper bound ("" for unbounded).
            after_key: If set, only keys strictly greater than this.
            limit: Maximum number of entries to return.
        """
        ...


@runtime_checkable
class WorldState(VersionedReader, Protocol):
    """Protocol for world state backends.

    Backends hand out transaction contexts, then commit or abort them.
    Implementations can use various backends (memory, SQLite, ...).
    """

    def begin(self, tx_id: str | None = None) -> LedgerTransaction:
        """Open a new transaction context."""
        ...

    def commit(self, tx: LedgerTransaction) -> int:
        """Validate and apply the transaction's write set atomically.

        Returns:
            The commit sequence number stamped on written keys.

        Raises:
            MVCCConflictError: If a key in the read set changed.
        """
        ...

    def abort(self, tx: LedgerTransaction) -> None:
        """Discard the transaction's write set."""
        ...

    def dump(self) -> dict[str, bytes]:
        """Return a copy of the committed key/value pairs."""
        ...


__all__ = [
    "ABSENT_VERSION",
    "VersionedEntry",
    "VersionedReader",
    "VersionedValue",
    "WorldState",
]
