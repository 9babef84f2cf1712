"""SQLite-backed WorldState (persistent, file-based)."""

from __future__ import annotations

import asyncio
import sqlite3
from pathlib import Path
from typing import Any, cast

import aiosqlite

from assetledger.config import DEFAULT_DB_PATH, DEFAULT_SCAN_PAGE_SIZE
from assetledger.errors import MVCCConflictError, StoreFailureError
from assetledger.observability import get_logger
from assetledger.state.transaction import LedgerTransaction
from assetledger.state.world_state import (
    ABSENT_VERSION,
    VersionedEntry,
    VersionedValue,
)

WORLD_STATE_TABLE = "world_state"
META_TABLE = "ledger_meta"
COMMIT_SEQ_NAME = "commit_seq"

logger = get_logger(__name__)


def _run_sync(coro: Any) -> Any:
    """Run an async coroutine from sync code (creates new loop or uses existing)."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    import concurrent.futures

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(asyncio.run, coro)
        return future.result()


class SQLiteWorldState:
    """SQLite-backed WorldState; state persists across process restarts.

    Uses aiosqlite; sync methods wrap async calls so the store conforms to
    the sync WorldState protocol. Each commit runs in a single
    ``BEGIN IMMEDIATE`` transaction so validation and apply are atomic
    across processes sharing the file.
    """

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        scan_page_size: int = DEFAULT_SCAN_PAGE_SIZE,
    ) -> None:
        self._db_path = Path(db_path)
        self._scan_page_size = scan_page_size

    @property
    def db_path(self) -> Path:
        return self._db_path

    async def _ensure_tables(self, conn: aiosqlite.Connection) -> None:
        """Create world state tables if not exists."""
        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {WORLD_STATE_TABLE} (
                key TEXT PRIMARY KEY,
                value BLOB NOT NULL,
                version INTEGER NOT NULL
            )
            """
        )
        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {META_TABLE} (
                name TEXT PRIMARY KEY,
                value INTEGER NOT NULL
            )
            """
        )
        await conn.commit()

    async def _read_impl(self, key: str) -> VersionedValue:
        async with aiosqlite.connect(self._db_path) as conn:
            await self._ensure_tables(conn)
            cursor = await conn.execute(
                f"SELECT value, version FROM {WORLD_STATE_TABLE} WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
            if row is None:
                return VersionedValue(None, ABSENT_VERSION)
            return VersionedValue(bytes(row[0]), row[1])

    async def _read_range_page_impl(
        self, start_key: str, end_key: str, after_key: str | None, limit: int
    ) -> list[VersionedEntry]:
        clauses = ["key >= ?"]
        params: list[Any] = [start_key]
        if end_key:
            clauses.append("key < ?")
            params.append(end_key)
        if after_key is not None:
            clauses.append("key > ?")
            params.append(after_key)
        params.append(limit)
        async with aiosqlite.connect(self._db_path) as conn:
            await self._ensure_tables(conn)
            cursor = await conn.execute(
                f"""
                SELECT key, value, version FROM {WORLD_STATE_TABLE}
                WHERE {" AND ".join(clauses)}
                ORDER BY key
                LIMIT ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [VersionedEntry(r[0], bytes(r[1]), r[2]) for r in rows]

    async def _commit_impl(self, tx: LedgerTransaction) -> int:
        async with aiosqlite.connect(self._db_path, isolation_level=None) as conn:
            await self._ensure_tables(conn)
            await conn.execute("BEGIN IMMEDIATE")
            try:
                for key, read_version in tx.read_set.items():
                    cursor = await conn.execute(
                        f"SELECT version FROM {WORLD_STATE_TABLE} WHERE key = ?",
                        (key,),
                    )
                    row = await cursor.fetchone()
                    current = row[0] if row is not None else ABSENT_VERSION
                    if current != read_version:
                        raise MVCCConflictError(
                            tx_id=tx.tx_id,
                            key=key,
                            read_version=read_version,
                            current_version=current,
                        )
                cursor = await conn.execute(
                    f"SELECT value FROM {META_TABLE} WHERE name = ?",
                    (COMMIT_SEQ_NAME,),
                )
                row = await cursor.fetchone()
                commit_seq = row[0] if row is not None else 0
                if tx.write_set:
                    commit_seq += 1
                    await conn.execute(
                        f"INSERT OR REPLACE INTO {META_TABLE} (name, value) VALUES (?, ?)",
                        (COMMIT_SEQ_NAME, commit_seq),
                    )
                for key, value in tx.write_set.items():
                    if value is None:
                        await conn.execute(
                            f"DELETE FROM {WORLD_STATE_TABLE} WHERE key = ?", (key,)
                        )
                    else:
                        await conn.execute(
                            f"""
                            INSERT OR REPLACE INTO {WORLD_STATE_TABLE} (key, value, version)
                            VALUES (?, ?, ?)
                            """,
                            (key, value, commit_seq),
                        )
                await conn.execute("COMMIT")
                return commit_seq
            except BaseException:
                await conn.execute("ROLLBACK")
                raise

    async def _dump_impl(self) -> dict[str, bytes]:
        async with aiosqlite.connect(self._db_path) as conn:
            await self._ensure_tables(conn)
            cursor = await conn.execute(
                f"SELECT key, value FROM {WORLD_STATE_TABLE} ORDER BY key"
            )
            rows = await cursor.fetchall()
            return {r[0]: bytes(r[1]) for r in rows}

    def read(self, key: str) -> VersionedValue:
        """Read committed value and version (sync wrapper)."""
        try:
            return cast(VersionedValue, _run_sync(self._read_impl(key)))
        except (sqlite3.Error, OSError) as exc:
            raise StoreFailureError("get", str(exc), key=key) from exc

    def read_range_page(
        self, start_key: str, end_key: str, after_key: str | None, limit: int
    ) -> list[VersionedEntry]:
        """Read one page of a key range (sync wrapper)."""
        try:
            return cast(
                list[VersionedEntry],
                _run_sync(self._read_range_page_impl(start_key, end_key, after_key, limit)),
            )
        except (sqlite3.Error, OSError) as exc:
            raise StoreFailureError(
                "range",
                str(exc),
                details={"start_key": start_key, "end_key": end_key},
            ) from exc

    def begin(self, tx_id: str | None = None) -> LedgerTransaction:
        return LedgerTransaction(self, tx_id=tx_id, scan_page_size=self._scan_page_size)

    def commit(self, tx: LedgerTransaction) -> int:
        """Validate the read set and apply the write set (sync wrapper)."""
        try:
            commit_seq = cast(int, _run_sync(self._commit_impl(tx)))
        except (sqlite3.Error, OSError) as exc:
            raise StoreFailureError("commit", str(exc), details={"tx_id": tx.tx_id}) from exc
        finally:
            tx.close()
        logger.debug(
            "ledger.state.committed",
            tx_id=tx.tx_id,
            writes=len(tx.write_set),
            commit_seq=commit_seq,
        )
        return commit_seq

    def abort(self, tx: LedgerTransaction) -> None:
        tx.close()
        logger.debug("ledger.state.aborted", tx_id=tx.tx_id, discarded=len(tx.write_set))

    def dump(self) -> dict[str, bytes]:
        """Return all committed entries (sync wrapper)."""
        try:
            return cast(dict[str, bytes], _run_sync(self._dump_impl()))
        except (sqlite3.Error, OSError) as exc:
            raise StoreFailureError("dump", str(exc)) from exc


__all__ = ["DEFAULT_DB_PATH", "SQLiteWorldState"]
