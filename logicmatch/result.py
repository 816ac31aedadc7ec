"""Result type for searches that can fail without it being a bug.

A matching search that finds no solution is an ordinary outcome, so it is
returned as Err(...) rather than raised:

    match solve(problem):
        case Ok(solution):
            ...
        case Err(NoSolution() as e):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def unwrap(self):
        raise self.error


Result = Ok[T] | Err[E]
