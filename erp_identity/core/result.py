"""Result types for railway-oriented programming.

Lifecycle operations report failures as values instead of raising, so the
calling layer can branch on a stable error code without string matching.

Usage:
    result = await manager.soft_delete(actor, cmd)
    match result:
        case Success():
            ...
        case Failure(error=error):
            print(error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
