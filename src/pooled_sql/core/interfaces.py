"""Capabilities consumed by the scoped executor."""
from typing import Any, Protocol, Sequence

from pooled_sql.models.result import ResultSet, UpdateResult


class ResourceHandle(Protocol):
    """A connection borrowed from a pool for the duration of one scoped execution."""

    async def query(self, sql: str) -> ResultSet:
        """
        Execute a statement that returns rows.

        Args:
            sql: Statement to execute

        Returns:
            The rows produced by the statement
        """
        ...

    async def query_with_params(self, sql: str, params: Sequence[Any]) -> ResultSet:
        """
        Execute a parameterized statement that returns rows.

        Args:
            sql: Statement to execute
            params: Positional parameters bound to the statement

        Returns:
            The rows produced by the statement
        """
        ...

    async def update(self, sql: str) -> UpdateResult:
        """
        Execute an INSERT, UPDATE or DELETE statement.

        Args:
            sql: Statement to execute

        Returns:
            Affected row count and generated keys
        """
        ...

    async def update_with_params(self, sql: str, params: Sequence[Any]) -> UpdateResult:
        """
        Execute a parameterized INSERT, UPDATE or DELETE statement.

        Args:
            sql: Statement to execute
            params: Positional parameters bound to the statement

        Returns:
            Affected row count and generated keys
        """
        ...

    async def release(self) -> None:
        """Return the connection to its pool. Must be called exactly once."""
        ...


class ResourcePool(Protocol):
    """Source of connection handles."""

    async def acquire(self) -> ResourceHandle:
        """
        Borrow a connection from the pool.

        Raises:
            Exception: If no connection can be provided (closed, exhausted, connect error)
        """
        ...
