"""Transaction context implementation shared by all world state backends.

A LedgerTransaction buffers writes and records the version of every key it
reads, including keys visited by a range scan. Backends only provide the
committed read side (VersionedReader) and apply the write set on commit.
"""

from __future__ import annotations

from types import TracebackType

from assetledger.config import DEFAULT_SCAN_PAGE_SIZE
from assetledger.errors import StoreFailureError, TransactionClosedError
from assetledger.models.ids import generate_id
from assetledger.state.context import KV
from assetledger.state.world_state import VersionedEntry, VersionedReader


def _check_key(operation: str, key: str) -> None:
    if not isinstance(key, str) or not key:
        raise StoreFailureError(operation, "key must be a non-empty string", key=key)


class RangeScanIterator:
    """Lazy, forward-only iterator over a committed key range.

    Entries are fetched from the backend one page at a time; each visited
    key is added to the owning transaction's read set.
    """

    def __init__(
        self,
        tx: LedgerTransaction,
        start_key: str,
        end_key: str,
        page_size: int = DEFAULT_SCAN_PAGE_SIZE,
    ) -> None:
        self._tx = tx
        self._start_key = start_key
        self._end_key = end_key
        self._page_size = page_size
        self._page: list[VersionedEntry] = []
        self._last_key: str | None = None
        self._exhausted = False
        self.closed = False

    def __iter__(self) -> RangeScanIterator:
        return self

    def __next__(self) -> KV:
        if self.closed:
            raise StopIteration
        if not self._page:
            if self._exhausted:
                raise StopIteration
            self._fetch_page()
            if not self._page:
                raise StopIteration
        entry = self._page.pop(0)
        self._last_key = entry.key
        self._tx._record_read(entry.key, entry.version)
        return KV(entry.key, entry.value)

    def _fetch_page(self) -> None:
        self._tx._ensure_open()
        page = self._tx._reader.read_range_page(
            self._start_key, self._end_key, self._last_key, self._page_size
        )
        if len(page) < self._page_size:
            self._exhausted = True
        self._page = list(page)

    def close(self) -> None:
        self.closed = True
        self._page = []
        self._tx._scans.discard(self)

    def __enter__(self) -> RangeScanIterator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class LedgerTransaction:
    """Transaction context handed to contract code for one invocation.

    Attributes:
        read_set: Key -> version observed by the first read of that key.
        write_set: Key -> new value, or None for a delete.
    """

    def __init__(
        self,
        reader: VersionedReader,
        tx_id: str | None = None,
        scan_page_size: int = DEFAULT_SCAN_PAGE_SIZE,
    ) -> None:
        self._reader = reader
        self._tx_id = tx_id or f"tx_{generate_id()}"
        self._scan_page_size = scan_page_size
        self._scans: set[RangeScanIterator] = set()
        self.read_set: dict[str, int] = {}
        self.write_set: dict[str, bytes | None] = {}
        self.closed = False

    @property
    def tx_id(self) -> str:
        return self._tx_id

    @property
    def open_scans(self) -> int:
        """Number of range scans opened and not yet closed."""
        return len(self._scans)

    def _ensure_open(self) -> None:
        if self.closed:
            raise TransactionClosedError(self._tx_id)

    def _record_read(self, key: str, version: int) -> None:
        self.read_set.setdefault(key, version)

    def get_state(self, key: str) -> bytes | None:
        self._ensure_open()
        _check_key("get", key)
        value, version = self._reader.read(key)
        self._record_read(key, version)
        return value

    def put_state(self, key: str, value: bytes) -> None:
        self._ensure_open()
        _check_key("put", key)
        if not isinstance(value, (bytes, bytearray)):
            raise StoreFailureError("put", "value must be bytes", key=key)
        self.write_set[key] = bytes(value)

    def del_state(self, key: str) -> None:
        self._ensure_open()
        _check_key("delete", key)
        self.write_set[key] = None

    def get_state_by_range(self, start_key: str, end_key: str) -> RangeScanIterator:
        self._ensure_open()
        scan = RangeScanIterator(self, start_key, end_key, self._scan_page_size)
        self._scans.add(scan)
        return scan

    def close(self) -> None:
        """Mark the context unusable; called by the backend on commit/abort."""
        for scan in list(self._scans):
            scan.close()
        self.closed = True


__all__ = ["DEFAULT_SCAN_PAGE_SIZE", "LedgerTransaction", "RangeScanIterator"]
