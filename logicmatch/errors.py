"""Errors raised by the matching core.

All of them are immediate, synchronous failures. Nothing here retries or
recovers; the caller decides what to do.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .matching import Constraint


class MatchingError(Exception):
    """Base class for every error raised by logicmatch."""


class InvariantViolation(MatchingError, ValueError):
    """A constraint was built from an expression containing metavariables."""


class WrongTargetType(MatchingError, TypeError):
    """A substitution was asked to act on something it cannot act on."""


class WrongClassification(MatchingError, ValueError):
    """An operation was invoked on a constraint of the wrong complexity class."""


class NoSolution(MatchingError):
    """A matching problem has no solution; constraint is where it broke."""

    def __init__(self, message: str, constraint: Constraint) -> None:
        super().__init__(message)
        self.constraint = constraint


class UnsupportedConstraint(MatchingError):
    """The search reached a constraint it does not know how to resolve."""

    def __init__(self, message: str, constraint: Constraint) -> None:
        super().__init__(message)
        self.constraint = constraint
