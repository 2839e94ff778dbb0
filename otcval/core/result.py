"""Result[T, E] for otcval.

Valuation code never raises for expected failures (missing market data,
unregistered cash-flow variants). It returns Ok[T] on success or Err[E]
carrying an error value, and callers pattern-match on the two variants.

Free functions: unwrap, sequence.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, NoReturn, final


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful computation."""

    value: T

    def unwrap(self) -> T:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed computation carrying an error value."""

    error: E

    def unwrap(self) -> NoReturn:
        raise RuntimeError(f"Called unwrap on Err: {self.error}")


type Result[T, E] = Ok[T] | Err[E]


def unwrap[T](result: Ok[T] | Err[Any]) -> T:
    """Extract the Ok value or raise RuntimeError. Test and boundary code only."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, Err):
        raise RuntimeError(f"unwrap on Err: {result.error}")
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")


def sequence[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Collect results into one list. Stops at the first Err and returns it."""
    values: list[T] = []
    for r in results:
        if isinstance(r, Err):
            return r
        values.append(r.value)
    return Ok(values)
