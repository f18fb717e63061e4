"""Operation values and result payloads."""

from pooled_sql.models.operation import Operation, OperationKind
from pooled_sql.models.result import ResultSet, UpdateResult

__all__ = [
    'Operation',
    'OperationKind',
    'ResultSet',
    'UpdateResult',
]
