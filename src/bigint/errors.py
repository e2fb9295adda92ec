# src/bigint/errors.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Closed set of failure kinds. The value is the default message."""
    DIVISION_BY_ZERO = "Division by zero"
    INVALID_INPUT = "Invalid input"
    OUT_OF_RANGE = "Value out of range"
    # Reserved: nothing raises these (no bounded-width feature exists yet)
    OVERFLOW = "Arithmetic overflow"
    UNDERFLOW = "Arithmetic underflow"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title().replace(" ", "")


class BigIntError(ArithmeticError):
    """The single error type of the library; branch on `.kind`."""

    def __init__(self, kind: ErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"BigIntError({self.kind.name}, {self.message!r})"


class UserInputError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    value: T | None = None
    error: BigIntError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """
    Call fn and fold a BigIntError into a Result instead of raising.
    Anything that is not a BigIntError still propagates.
    """
    try:
        return Result(value=fn(*args, **kwargs))
    except BigIntError as e:
        return Result(error=e)
