"""
Tagged results for scoped executions.

Every step of a scoped execution (acquire, operation, release) produces an
outcome, and the executor hands exactly one composed outcome back to the
caller. Failures keep the original exception object as their cause.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class FailureStage(str, Enum):
    """Step of a scoped execution that produced a failure."""
    ACQUIRE = "acquire"
    OPERATION = "operation"
    RELEASE = "release"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a payload."""
    payload: T

    @property
    def succeeded(self) -> bool:
        return True

    @property
    def failed(self) -> bool:
        return False

    @property
    def cause(self) -> None:
        return None

    def result(self) -> T:
        return self.payload


@dataclass(frozen=True)
class Failure:
    """
    Failed outcome carrying the exception that caused it.

    When a release failure wins over the operation's own outcome, the
    discarded operation outcome is kept in *superseded*. It never changes
    *cause*.
    """
    cause: BaseException
    stage: FailureStage
    superseded: Optional[Union[Success[Any], "Failure"]] = None

    @property
    def succeeded(self) -> bool:
        return False

    @property
    def failed(self) -> bool:
        return True

    def result(self) -> Any:
        """Re-raise the cause."""
        raise self.cause


Outcome = Union[Success[T], Failure]
