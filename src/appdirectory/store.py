"""Persistent key-value store backing the directory cache.

The directory needs a synchronous ``get``/``set`` over string values that
survives restarts. ``SqliteStore`` satisfies that on top of aiosqlite: the
whole table is loaded into memory by ``init_db()`` at startup, reads are
served from that snapshot, and each ``set`` schedules a write-through on the
running event loop. ``flush()`` waits for outstanding writes.

All operations catch ``aiosqlite.Error`` internally and degrade gracefully:
write failures are logged and the value stays queued for the next flush.
Read failures while loading the snapshot are logged and the store starts
empty. Infrastructure errors never cross the store boundary, so a failing
disk can never interrupt a directory query. Only creating the table in
``init_db()`` is fatal: it runs once at startup, and a database that cannot
be opened stops the process.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import aiosqlite
import structlog

log = structlog.get_logger()

_CREATE_KV_TABLE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL
)
"""


class MemoryStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteStore:
    """SQLite-backed store implementing StoreProtocol."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db
        self._data: dict[str, str] = {}
        self._dirty: dict[str, str] = {}
        self._pending: set[asyncio.Task[None]] = set()
        # One write in flight at a time, so batches commit in the order they were taken
        self._write_lock = asyncio.Lock()

    async def init_db(self) -> None:
        """Create the table, set WAL mode and load all rows. Called once at startup.

        A failed load is non-fatal: the store starts from an empty snapshot.
        """
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_KV_TABLE)
        await self._db.commit()

        try:
            cursor = await self._db.execute("SELECT key, value FROM kv_store")
            rows = await cursor.fetchall()
        except aiosqlite.Error:
            log.warning("store_read_error", exc_info=True)
            self._data = {}
            return
        self._data = {row[0]: row[1] for row in rows}
        log.debug("store_loaded", keys=len(self._data))

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        """Update the snapshot and schedule the write. Never raises."""
        self._data[key] = value
        self._dirty[key] = value
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet: the value is written by the next flush()
            return
        task = loop.create_task(self._write_dirty())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def flush(self) -> None:
        """Wait for scheduled writes and persist anything still queued."""
        if self._pending:
            await asyncio.gather(*self._pending)
        await self._write_dirty()

    async def aclose(self) -> None:
        """Flush outstanding writes and close the connection."""
        await self.flush()
        await self._db.close()

    async def _write_dirty(self) -> None:
        async with self._write_lock:
            if not self._dirty:
                return
            # Values set back-to-back (catalog + url) land in one transaction
            batch = self._dirty
            self._dirty = {}
            now = datetime.now(UTC).isoformat()
            try:
                await self._db.executemany(
                    "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                    [(key, value, now) for key, value in batch.items()],
                )
                await self._db.commit()
            except aiosqlite.Error:
                log.warning("store_write_error", keys=sorted(batch), exc_info=True)
                for key, value in batch.items():
                    # Re-queue only if nothing newer has been set since
                    if key not in self._dirty and self._data.get(key) == value:
                        self._dirty[key] = value
