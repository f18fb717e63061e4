"""Exceptions raised by the bundled connection pool."""


class PooledSQLError(Exception):
    """Base class for errors raised by pooled_sql itself."""


class PoolClosedError(PooledSQLError):
    """Raised when acquiring from a pool that has been closed."""


class PoolAcquireTimeoutError(PooledSQLError):
    """Raised when no connection became available within the acquire timeout."""

    def __init__(self, timeout: float):
        super().__init__(f"Timed out after {timeout}s waiting for a pooled connection")
        self.timeout = timeout


class ConnectionReleasedError(PooledSQLError):
    """Raised when a connection handle is used or released after it was returned to the pool."""
