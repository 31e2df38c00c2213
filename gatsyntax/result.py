"""Result type for boundary operations (loading files, parsing input) that can fail."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


type Result[T, E] = Ok[T] | Err[E]


def unwrap[V](result: "Result[V, Exception]") -> V:
    """Return the value of an Ok, or raise the error of an Err."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            raise error
