"""Result — the two-track (railway) value every pipeline step returns.

Invariants:
    - A Result is exactly one of Ok(value) or Err(error)
    - Once on the Err track, bind/map never call their function
    - The error carried by Err is never inspected or rewrapped here

Design Decisions:
    - Frozen dataclasses over a tagged dict: pattern-matchable, hashable, comparable
    - Err carries an IdentityError instance, not (kind, message): one source of truth
      for code/kind/status lives on the exception class
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from identity_access.core.errors import IdentityError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Success track."""
    value: T

    def is_ok(self) -> bool:
        return True

    def bind(self, fn: "Callable[[T], Result[U]]") -> "Result[U]":
        return fn(self.value)

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err:
    """Failure track — terminal for the current invocation."""
    error: IdentityError

    def is_ok(self) -> bool:
        return False

    def bind(self, fn: Callable) -> "Err":
        return self

    def map(self, fn: Callable) -> "Err":
        return self


Result = Union[Ok[T], Err]


def first_err(results: "list[Result]") -> Err | None:
    """First Err in list order, or None when every result is Ok."""
    for result in results:
        if isinstance(result, Err):
            return result
    return None


def collect(results: "list[Result]") -> "Result[tuple]":
    """Join results in order: Ok(tuple of values) or the first Err."""
    err = first_err(results)
    if err is not None:
        return err
    return Ok(tuple(r.value for r in results))
