from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Outcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a persistence call. Only OK is truthy, so `if not result:`
    covers both "no match" and "operation failed"; check `.outcome` when
    the two must be told apart.
    """
    outcome: Outcome
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: T = None) -> "Result[T]":
        return cls(Outcome.OK, value)

    @classmethod
    def not_found(cls) -> "Result[T]":
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> "Result[T]":
        return cls(Outcome.FAILED, error=error)

    @property
    def is_not_found(self) -> bool:
        return self.outcome is Outcome.NOT_FOUND

    @property
    def is_failed(self) -> bool:
        return self.outcome is Outcome.FAILED

    def __bool__(self) -> bool:
        return self.outcome is Outcome.OK
