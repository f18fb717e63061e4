from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, Field


class ResultSet(BaseModel):
    """Rows returned by a query, in order, with their column names."""
    columns: List[str] = Field(default_factory=list)
    results: List[Tuple[Any, ...]] = Field(default_factory=list)

    @property
    def rows(self) -> List[Dict[str, Any]]:
        """Rows as column-name to value mappings."""
        return [dict(zip(self.columns, row)) for row in self.results]

    @property
    def num_rows(self) -> int:
        return len(self.results)

    @property
    def num_columns(self) -> int:
        return len(self.columns)


class UpdateResult(BaseModel):
    """Summary of an INSERT, UPDATE or DELETE statement."""
    updated: int = 0  # Number of affected rows
    keys: List[Any] = Field(default_factory=list)  # Generated keys, if any
