"""First-order matching search over a Problem.

Built entirely from the Constraint primitives:

1. Pick the pending constraint of lowest complexity (first one on ties).
2. failure       -> the problem has no solution
   success       -> drop it
   instantiation -> record it, substitute it into every pending pattern
   children      -> replace it with its child constraints
   EFA           -> stop; higher-order matching is not attempted here
3. Repeat until nothing is pending.

Because the lowest complexity is always taken first, an EFA constraint is
only reached once everything first-order has been resolved.

The search never mutates the problem it is given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .concepts import LogicConcept
from .errors import MatchingError, NoSolution, UnsupportedConstraint
from .matching import Complexity, Constraint, Problem
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)


class Solution:
    """A consistent set of metavariable instantiations.

    Maps each metavariable's name to the applicable Constraint
    (metavariable, expression) that instantiates it. Metavariables are
    identified by name: two metavariables with the same text but different
    attributes are one variable with conflicting instantiations, so a
    Solution refuses to hold both.
    """

    def __init__(self, *instantiations: Constraint) -> None:
        self._by_name: dict[str, Constraint] = {}
        for constraint in instantiations:
            if not constraint.can_be_applied():
                raise ValueError(
                    f"Not an instantiation of a metavariable: {constraint!r}"
                )
            name = constraint.pattern.text()
            existing = self._by_name.get(name)
            if existing is not None and not existing.equals(constraint):
                raise ValueError(
                    f"Conflicting instantiations of {name}: {existing!r}, {constraint!r}"
                )
            self._by_name[name] = constraint

    def metavariables(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def instantiation(self, name: str) -> LogicConcept | None:
        constraint = self._by_name.get(name)
        return None if constraint is None else constraint.expression

    def extended(self, constraint: Constraint) -> Solution | None:
        """This solution plus one more instantiation, or None on a conflict."""
        name = constraint.pattern.text()
        existing = self._by_name.get(name)
        if existing is not None:
            return self if existing.equals(constraint) else None
        return Solution(*self._by_name.values(), constraint)

    def instantiate(self, pattern: LogicConcept) -> LogicConcept:
        """A copy of pattern with every known metavariable substituted."""
        result = pattern.copy()
        for constraint in self._by_name.values():
            result = constraint.apply_to(result)
        return result

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._by_name))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Solution):
            return NotImplemented
        return self._by_name.keys() == other._by_name.keys() and all(
            c.equals(other._by_name[name]) for name, c in self._by_name.items()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        from .render import render

        inner = ", ".join(
            f"{name} := {render(c.expression)}" for name, c in self._by_name.items()
        )
        return f"Solution({inner})"


def solve(problem: Problem) -> Result[Solution, MatchingError]:
    """Find the unique first-order solution of problem, if there is one.

    Returns Ok(solution), Err(NoSolution) when some constraint fails, or
    Err(UnsupportedConstraint) when only EFA constraints remain.
    """
    pending = list(problem.constraints)
    solution = Solution()
    while pending:
        index, complexity = min(
            ((i, c.complexity()) for i, c in enumerate(pending)),
            key=lambda pair: pair[1],
        )
        constraint = pending.pop(index)
        logger.debug(
            "Resolving %r (%s), %d pending", constraint, complexity.name, len(pending)
        )
        match complexity:
            case Complexity.FAILURE:
                return Err(NoSolution(f"Constraint cannot match: {constraint!r}", constraint))
            case Complexity.SUCCESS:
                continue
            case Complexity.INSTANTIATION:
                extended = solution.extended(constraint)
                if extended is None:
                    return Err(
                        NoSolution(
                            f"Conflicting instantiation: {constraint!r}", constraint
                        )
                    )
                solution = extended
                pending = [constraint.applied_to(c) for c in pending]
            case Complexity.CHILDREN:
                pending.extend(constraint.children())
            case Complexity.EFA:
                logger.warning(
                    "Stopping at higher-order constraint %r; EFA matching is "
                    "not supported",
                    constraint,
                )
                return Err(
                    UnsupportedConstraint(
                        f"Cannot resolve EFA constraint: {constraint!r}", constraint
                    )
                )
    logger.debug("Solved with %r", solution)
    return Ok(solution)


def match(pattern: LogicConcept, expression: LogicConcept) -> Result[Solution, MatchingError]:
    """Match a single pattern against a single expression."""
    return solve(Problem(pattern, expression))
