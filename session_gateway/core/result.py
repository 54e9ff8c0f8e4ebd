"""Result types for railway-oriented programming.

Operations that touch the durable store or the cache can fail in expected
ways (timeouts, connectivity, constraint violations). Those failures travel
as values instead of exceptions so every caller has to decide what to do
with them.

Usage:
    result = await repository.find_active_by_token(token)
    match result:
        case Success(value=None):
            ...  # no active record
        case Success(value=record):
            ...  # record found
        case Failure(error=error):
            ...  # store failure
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: Payload of the operation.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Error describing the failure.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
