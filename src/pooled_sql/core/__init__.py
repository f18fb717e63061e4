"""Scoped execution against pooled connections."""

from pooled_sql.core.executor import ExecutionState, ScopedExecutor, default_executor
from pooled_sql.core.interfaces import ResourceHandle, ResourcePool
from pooled_sql.core.outcome import Failure, FailureStage, Outcome, Success

__all__ = [
    'ExecutionState',
    'Failure',
    'FailureStage',
    'Outcome',
    'ResourceHandle',
    'ResourcePool',
    'ScopedExecutor',
    'Success',
    'default_executor',
]
