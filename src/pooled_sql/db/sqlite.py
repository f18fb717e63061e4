import asyncio
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import aiosqlite

from pooled_sql.config import DbConfig, config
from pooled_sql.core.errors import ConnectionReleasedError, PoolAcquireTimeoutError, PoolClosedError
from pooled_sql.models.result import ResultSet, UpdateResult
from pooled_sql.utils.resizable_semaphore import ResizableAsyncSemaphore

logger = logging.getLogger(__name__)


def _generates_keys(sql: str) -> bool:
    # lastrowid is connection-wide, only trust it right after an insert
    words = sql.split(None, 1)
    return bool(words) and words[0].upper() in ("INSERT", "REPLACE")


class SQLiteConnection:
    """A pooled aiosqlite connection borrowed by exactly one caller."""

    def __init__(self, pool: "SQLitePool", conn: aiosqlite.Connection):
        self._pool = pool
        self._conn = conn
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    @property
    def raw(self) -> aiosqlite.Connection:
        """The underlying aiosqlite connection."""
        self._check_open()
        return self._conn

    async def query(self, sql: str) -> ResultSet:
        """Execute a statement and fetch all rows."""
        return await self._fetch(sql, ())

    async def query_with_params(self, sql: str, params: Sequence[Any]) -> ResultSet:
        """Execute a parameterized statement and fetch all rows."""
        return await self._fetch(sql, params)

    async def update(self, sql: str) -> UpdateResult:
        """Execute an INSERT, UPDATE or DELETE statement and commit it."""
        return await self._modify(sql, ())

    async def update_with_params(self, sql: str, params: Sequence[Any]) -> UpdateResult:
        """Execute a parameterized INSERT, UPDATE or DELETE statement and commit it."""
        return await self._modify(sql, params)

    async def release(self) -> None:
        """Return the connection to the pool."""
        self._check_open()
        self._released = True
        await self._pool._put_back(self._conn)

    async def _fetch(self, sql: str, params: Sequence[Any]) -> ResultSet:
        self._check_open()
        async with self._conn.execute(sql, tuple(params)) as cursor:
            rows = await cursor.fetchall()
            columns = [column[0] for column in cursor.description or ()]
        return ResultSet(columns=columns, results=[tuple(row) for row in rows])

    async def _modify(self, sql: str, params: Sequence[Any]) -> UpdateResult:
        self._check_open()
        try:
            async with self._conn.execute(sql, tuple(params)) as cursor:
                updated = cursor.rowcount
                last_row_id = cursor.lastrowid
            await self._conn.commit()
        except Exception:
            try:
                await self._conn.rollback()
            except Exception as rollback_error:
                logger.warning(f"Rollback after failed statement also failed: {rollback_error!r}")
            raise

        keys = [last_row_id] if _generates_keys(sql) and last_row_id and updated > 0 else []
        return UpdateResult(updated=max(updated, 0), keys=keys)

    def _check_open(self) -> None:
        if self._released:
            raise ConnectionReleasedError("Connection has already been returned to the pool")


class SQLitePool:
    """Bounded asynchronous pool of SQLite connections."""

    def __init__(
        self,
        path: Union[str, Path],
        max_size: int = 5,
        acquire_timeout: Optional[float] = 10.0,
        enable_wal: bool = True,
    ):
        if max_size < 1:
            raise ValueError("Pool max_size must be at least 1")
        self._path = str(path)
        self._acquire_timeout = acquire_timeout
        self._enable_wal = enable_wal
        self._semaphore = ResizableAsyncSemaphore(max_size)
        self._idle: List[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()
        self._closed = False

    @classmethod
    def from_config(cls, db_config: Optional[DbConfig] = None) -> "SQLitePool":
        db_config = db_config or config.db
        return cls(
            db_config.path,
            max_size=db_config.pool_max_size,
            acquire_timeout=db_config.acquire_timeout_sec,
            enable_wal=db_config.enable_wal,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def acquire(self) -> SQLiteConnection:
        """
        Borrow a connection, opening a new one if no idle connection exists.

        Raises:
            PoolClosedError: If the pool has been closed
            PoolAcquireTimeoutError: If the pool stayed exhausted for the whole timeout
        """
        if self._closed:
            raise PoolClosedError("Pool is closed")

        if not await self._semaphore.acquire(self._acquire_timeout):
            raise PoolAcquireTimeoutError(self._acquire_timeout)

        try:
            if self._closed:
                raise PoolClosedError("Pool is closed")
            async with self._lock:
                conn = self._idle.pop() if self._idle else None
            if conn is None:
                conn = await self._connect()
        except BaseException:
            await self._semaphore.release()
            raise

        return SQLiteConnection(self, conn)

    async def resize(self, new_max: int) -> None:
        """Change the number of connections that may be borrowed at once."""
        if new_max < 1:
            raise ValueError("Pool max_size must be at least 1")
        await self._semaphore.resize(new_max)
        logger.info(f"Resized SQLite pool for {self._path} to {new_max} connections")

    async def close(self) -> None:
        """Close idle connections and refuse further acquires."""
        async with self._lock:
            if self._closed:
                return
            self._closed = True
            idle, self._idle = self._idle, []

        for conn in idle:
            await conn.close()
        logger.info(f"SQLite pool for {self._path} closed")

    def stats(self) -> Dict[str, Any]:
        return {
            "max_size": self._semaphore.max_permits,
            "in_use": self._semaphore.in_use,
            "idle": len(self._idle),
            "closed": self._closed,
        }

    async def _connect(self) -> aiosqlite.Connection:
        logger.debug(f"Opening SQLite connection to {self._path}")
        conn = await aiosqlite.connect(self._path)
        try:
            conn.row_factory = sqlite3.Row

            # Enable foreign keys
            await conn.execute("PRAGMA foreign_keys = ON")

            if self._enable_wal:
                await conn.execute("PRAGMA journal_mode = WAL")
        except BaseException:
            await conn.close()
            raise
        return conn

    async def _put_back(self, conn: aiosqlite.Connection) -> None:
        try:
            # Idle connections never carry a transaction into the next borrower
            if conn.in_transaction:
                logger.warning(f"Rolling back uncommitted transaction on released connection to {self._path}")
                try:
                    await conn.rollback()
                except Exception:
                    await conn.close()
                    raise

            async with self._lock:
                if not self._closed:
                    self._idle.append(conn)
                    return
            await conn.close()
        finally:
            await self._semaphore.release()
