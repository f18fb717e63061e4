"""Asynchronous SQL client with scoped, always-released pooled connections."""

from pooled_sql.client import SQLClient, create_client
from pooled_sql.core import Failure, FailureStage, Outcome, ScopedExecutor, Success
from pooled_sql.db.sqlite import SQLiteConnection, SQLitePool
from pooled_sql.models import Operation, OperationKind, ResultSet, UpdateResult

__version__ = "0.1.0"

__all__ = [
    'Failure',
    'FailureStage',
    'Operation',
    'OperationKind',
    'Outcome',
    'ResultSet',
    'SQLClient',
    'SQLiteConnection',
    'SQLitePool',
    'ScopedExecutor',
    'Success',
    'UpdateResult',
    'create_client',
]
