"""
Scoped execution of one operation against one pooled connection.

    acquire → operation → release → compose

• The release runs exactly once whenever the acquire succeeded, on every
  exit path, including caller cancellation.
• A release failure wins over the operation outcome, successful or not.
• Nothing derived from Exception escapes run(); every failure comes back as
  a Failure outcome tagged with the step that produced it.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from pooled_sql.core.interfaces import ResourceHandle, ResourcePool
from pooled_sql.core.outcome import Failure, FailureStage, Outcome, Success
from pooled_sql.models.operation import Operation, OperationKind
from pooled_sql.models.result import ResultSet, UpdateResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

OperationFn = Callable[[ResourceHandle], Awaitable[T]]


class ExecutionState(str, Enum):
    """States a single scoped execution moves through."""
    IDLE = "idle"
    ACQUIRING = "acquiring"
    EXECUTING = "executing"
    RELEASING = "releasing"
    SUCCEEDED = "succeeded"
    FAILED_ACQUIRE = "failed_acquire"
    FAILED_OPERATION = "failed_operation"
    FAILED_RELEASE = "failed_release"


_TERMINAL_STATES = {
    FailureStage.ACQUIRE: ExecutionState.FAILED_ACQUIRE,
    FailureStage.OPERATION: ExecutionState.FAILED_OPERATION,
    FailureStage.RELEASE: ExecutionState.FAILED_RELEASE,
}


async def _capture(stage: FailureStage, func: Callable[..., Awaitable[T]], *args: Any) -> Outcome[T]:
    """Await *func(*args)* and turn any raised Exception into a Failure."""
    try:
        return Success(await func(*args))
    except Exception as exc:
        return Failure(exc, stage)


def compose(op_outcome: Outcome[T], release_outcome: Outcome[Any]) -> Outcome[T]:
    """
    Combine the operation and release outcomes into the caller's result.

    A failed release always wins and the operation outcome is discarded
    (kept only as ``superseded``). Otherwise the operation outcome stands.
    """
    if release_outcome.failed:
        return Failure(release_outcome.cause, FailureStage.RELEASE, superseded=op_outcome)
    return op_outcome


def bind(operation: Operation) -> OperationFn[Any]:
    """Return the handle call that runs *operation*."""
    statement, params = operation.statement, operation.params

    if operation.kind is OperationKind.QUERY:
        if operation.has_params:
            return lambda conn: conn.query_with_params(statement, params)
        return lambda conn: conn.query(statement)

    if operation.has_params:
        return lambda conn: conn.update_with_params(statement, params)
    return lambda conn: conn.update(statement)


class ScopedExecutor:
    """Runs operations against pooled connections with guaranteed release."""

    async def run(self, pool: ResourcePool, operation: OperationFn[T], label: str = "operation") -> Outcome[T]:
        """
        Acquire a connection, run *operation* on it, release it and compose the result.

        Args:
            pool: Pool to borrow the connection from
            operation: Coroutine function taking the borrowed connection
            label: Name used when tracing state transitions

        Returns:
            Success with the operation payload, or Failure with the winning cause
        """
        self._trace(label, ExecutionState.IDLE)
        self._trace(label, ExecutionState.ACQUIRING)
        acquired = await _capture(FailureStage.ACQUIRE, pool.acquire)
        if acquired.failed:
            self._trace(label, ExecutionState.FAILED_ACQUIRE)
            return acquired

        handle = acquired.payload
        outcome = None
        self._trace(label, ExecutionState.EXECUTING)
        try:
            outcome = await _capture(FailureStage.OPERATION, operation, handle)
        finally:
            self._trace(label, ExecutionState.RELEASING)
            released = await self._release(handle)
            # outcome stays None only when a BaseException is propagating
            if outcome is None and released.failed:
                logger.warning(
                    "Releasing connection after interrupted %s failed (%r)",
                    label, released.cause,
                )

        result = compose(outcome, released)
        if released.failed:
            logger.warning(
                "Releasing connection after %s failed (%r); discarding %s outcome",
                label, released.cause, "failed" if outcome.failed else "successful",
            )

        self._trace(label, ExecutionState.SUCCEEDED if result.succeeded else _TERMINAL_STATES[result.stage])
        return result

    async def execute(self, pool: ResourcePool, operation: Operation) -> Outcome[Any]:
        """Run an Operation value against a connection from *pool*."""
        return await self.run(pool, bind(operation), label=operation.kind.value)

    async def query(self, pool: ResourcePool, sql: str) -> Outcome[ResultSet]:
        return await self.execute(pool, Operation.query(sql))

    async def query_with_params(self, pool: ResourcePool, sql: str, params: Sequence[Any]) -> Outcome[ResultSet]:
        return await self.execute(pool, Operation.query(sql, params))

    async def update(self, pool: ResourcePool, sql: str) -> Outcome[UpdateResult]:
        return await self.execute(pool, Operation.mutation(sql))

    async def update_with_params(self, pool: ResourcePool, sql: str, params: Sequence[Any]) -> Outcome[UpdateResult]:
        return await self.execute(pool, Operation.mutation(sql, params))

    @staticmethod
    async def _release(handle: ResourceHandle) -> Outcome[None]:
        # Shielded so a cancelled caller still hands the connection back
        return await asyncio.shield(_capture(FailureStage.RELEASE, handle.release))

    @staticmethod
    def _trace(label: str, state: ExecutionState) -> None:
        logger.debug("Scoped %s: %s", label, state.value)


# Stateless; safe to share across concurrent callers
default_executor = ScopedExecutor()
