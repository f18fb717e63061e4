import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

from pooled_sql.config import AppConfig, config as default_config
from pooled_sql.core.executor import ScopedExecutor, default_executor
from pooled_sql.core.interfaces import ResourceHandle
from pooled_sql.core.outcome import Outcome
from pooled_sql.db.sqlite import SQLitePool
from pooled_sql.models.operation import Operation
from pooled_sql.models.result import ResultSet, UpdateResult

logger = logging.getLogger(__name__)


class SQLClient:
    """
    Asynchronous SQL client over a connection pool.

    The one-shot methods borrow a connection, run a single statement and
    always hand the connection back before returning. They never raise:
    the result is an Outcome, whose ``result()`` re-raises on failure.
    """

    def __init__(self, pool, executor: Optional[ScopedExecutor] = None):
        self._pool = pool
        self._executor = executor or default_executor

    @property
    def pool(self):
        return self._pool

    @asynccontextmanager
    async def get_connection(self) -> AsyncIterator[ResourceHandle]:
        """
        Borrow a connection for several statements.

        The connection is returned to the pool when the block exits.
        """
        conn = await self._pool.acquire()
        try:
            yield conn
        finally:
            await conn.release()

    async def execute(self, operation: Operation) -> Outcome[Any]:
        return await self._executor.execute(self._pool, operation)

    async def query(self, sql: str) -> Outcome[ResultSet]:
        return await self._executor.query(self._pool, sql)

    async def query_with_params(self, sql: str, params: Sequence[Any]) -> Outcome[ResultSet]:
        return await self._executor.query_with_params(self._pool, sql, params)

    async def update(self, sql: str) -> Outcome[UpdateResult]:
        return await self._executor.update(self._pool, sql)

    async def update_with_params(self, sql: str, params: Sequence[Any]) -> Outcome[UpdateResult]:
        return await self._executor.update_with_params(self._pool, sql, params)

    async def close(self) -> None:
        """Close the client and release all pooled connections."""
        await self._pool.close()


def create_client(app_config: Optional[AppConfig] = None) -> SQLClient:
    """Build a client backed by an SQLite pool configured from *app_config*."""
    app_config = app_config or default_config
    logger.info(
        f"Creating SQL client for {app_config.db.path} "
        f"(max {app_config.db.pool_max_size} connections)"
    )
    return SQLClient(SQLitePool.from_config(app_config.db))
