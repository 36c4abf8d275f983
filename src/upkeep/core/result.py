"""
Result envelope for consistent success/failure handling.

Every job step returns ``Ok`` with the collaborator's exit status or ``Err``
with a typed :class:`~upkeep.core.errors.JobError`. Steps compose with
``and_then`` so the first failure short-circuits the rest of a job without
exception-based control flow, and the engine can collect heterogeneous
outcomes from many workers without catching anything.

Architecture:
    ::

        ┌─────────────────┬─────────────────┬─────────────────────────┐
        │     Ok[T]       │     Err[T]      │     Utilities           │
        │   (Success)     │   (Failure)     │                         │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: Exc    │ • partition_results()   │
        │ • map()         │ • map_err()     │                         │
        │ • and_then()    │ • unwrap_or()   │                         │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> from upkeep.core.result import Ok, Err
    >>> Ok(0).and_then(lambda _: Ok(0))
    Ok(0)
    >>> Err(ValueError("boom")).and_then(lambda _: Ok(0)).is_err()
    True

Tags:
    result-pattern, error-handling, short-circuit, upkeep
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from upkeep.core.errors import UpkeepError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Apply f to the value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """No-op for Ok."""
        return self

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to the next fallible step."""
        return f(self.value)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result containing the error that stopped the computation."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err: later steps never run."""
        return Err(self.error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, UpkeepError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]


def partition_results(
    results: list[Result[T]],
) -> tuple[list[T], list[Exception]]:
    """
    Partition results into successes and failures.

    Args:
        results: List of Result[T] to partition

    Returns:
        Tuple of (list of successful values, list of errors)
    """
    values = []
    errors = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                errors.append(error)
    return values, errors


__all__ = ["Err", "Ok", "Result", "partition_results"]
