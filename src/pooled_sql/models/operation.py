from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict


class OperationKind(str, Enum):
    """Kinds of work that can be run against a pooled connection."""
    QUERY = "query"         # Returns a ResultSet
    MUTATION = "mutation"   # Returns an UpdateResult


class Operation(BaseModel):
    """A statement, its optional positional parameters and its kind."""
    model_config = ConfigDict(frozen=True)

    statement: str
    params: Optional[Tuple[Any, ...]] = None
    kind: OperationKind = OperationKind.QUERY

    @classmethod
    def query(cls, statement: str, params: Optional[Sequence[Any]] = None) -> "Operation":
        return cls(statement=statement, params=params, kind=OperationKind.QUERY)

    @classmethod
    def mutation(cls, statement: str, params: Optional[Sequence[Any]] = None) -> "Operation":
        return cls(statement=statement, params=params, kind=OperationKind.MUTATION)

    @property
    def has_params(self) -> bool:
        return self.params is not None
