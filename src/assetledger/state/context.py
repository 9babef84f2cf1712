"""State access port consumed by the asset contract.

A transaction context is the only way contract code touches the world
state. It is scoped to one invocation:

- ``get_state`` observes committed state only; writes made earlier in the
  same transaction are not visible to later reads.
- ``put_state`` and ``del_state`` are buffered in a write set; the last
  write to a key wins.
- ``get_state_by_range`` returns a forward-only iterator over committed
  entries in key order. ``start`` is inclusive, ``end`` exclusive, and an
  empty string leaves that side unbounded. The iterator must be closed.

Implementations raise StoreFailureError when the underlying store fails.
"""

from __future__ import annotations

from collections.abc import Iterator
from types import TracebackType
from typing import NamedTuple, Protocol, runtime_checkable


class KV(NamedTuple):
    """A single key/value entry yielded by a range scan."""

    key: str
    value: bytes


@runtime_checkable
class StateIterator(Protocol):
    """Forward-only, non-restartable iterator over range scan results."""

    def __iter__(self) -> Iterator[KV]: ...

    def __next__(self) -> KV: ...

    def close(self) -> None:
        """Release the scan. Safe to call more than once."""
        ...

    def __enter__(self) -> StateIterator: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class TransactionContext(Protocol):
    """Per-invocation handle on the world state."""

    @property
    def tx_id(self) -> str:
        """Identifier of the enclosing transaction."""
        ...

    def get_state(self, key: str) -> bytes | None:
        """Return the committed value for key, or None if absent."""
        ...

    def put_state(self, key: str, value: bytes) -> None:
        """Buffer a write of value under key."""
        ...

    def del_state(self, key: str) -> None:
        """Buffer a delete of key."""
        ...

    def get_state_by_range(self, start_key: str, end_key: str) -> StateIterator:
        """Open a range scan over [start_key, end_key)."""
        ...


__all__ = ["KV", "StateIterator", "TransactionContext"]
