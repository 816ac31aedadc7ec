"""Constraints and problems: the primitive layer of pattern matching.

A Constraint pairs a *pattern* (which may contain metavariables) with an
*expression* (which may not). A constraint can be:

- classified into one of five complexity classes (see Complexity)
- decomposed into child constraints when both sides have the same shape
- applied as a substitution, when its pattern is a single metavariable,
  either in place (apply_to) or functionally (applied_to)

A Problem is an ordered collection of constraints. Searching a problem for
solutions lives in solver.py and is built only from these primitives.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import IntEnum
from typing import Final

from .concepts import Application, ConceptKind, LogicConcept, Symbol
from .errors import InvariantViolation, WrongClassification, WrongTargetType

logger = logging.getLogger(__name__)

# The type tag marking a Symbol as a metavariable. Shared process-wide; any
# component may test node.is_a(METAVARIABLE).
METAVARIABLE: Final = "LDE MV"

# The type tag of the head symbol that marks an expression function
# application (see new_efa).
EFA_MARKER: Final = "LDE EFA"


# ---------------------------------------------------------------------------
# Metavariable and EFA vocabulary
# ---------------------------------------------------------------------------


def contains_a_metavariable(concept: LogicConcept) -> bool:
    """True if concept or any node beneath it is tagged as a metavariable."""
    return concept.has_descendant_satisfying(lambda node: node.is_a(METAVARIABLE))


def is_a_metavariable(concept: LogicConcept) -> bool:
    """True only for a Symbol tagged as a metavariable.

    A compound node carrying the tag does not count.
    """
    return concept.kind == ConceptKind.SYMBOL and concept.is_a(METAVARIABLE)


def new_efa(operator: LogicConcept, *operands: LogicConcept) -> Application:
    """Build an expression function application: operator applied to operands.

    The operator may be, or contain, a metavariable standing for an unknown
    function. The result is an Application headed by the reserved EFA marker
    symbol, so (EFA P x) reads "P applied to x" in higher-order matching.
    """
    return Application(Symbol(EFA_MARKER).make_into_a(EFA_MARKER), operator, *operands)


def is_an_efa(concept: LogicConcept) -> bool:
    if concept.kind != ConceptKind.APPLICATION or concept.num_children() < 3:
        return False
    head = concept.child(0)
    return head.kind == ConceptKind.SYMBOL and head.is_a(EFA_MARKER)


# ---------------------------------------------------------------------------
# Complexity classes
# ---------------------------------------------------------------------------


class Complexity(IntEnum):
    """How a constraint should be resolved, from simplest to hardest."""

    FAILURE = 0         # cannot match
    SUCCESS = 1         # already matched, nothing to do
    INSTANTIATION = 2   # pattern is a bare metavariable
    CHILDREN = 3        # same shape on both sides, match child by child
    EFA = 4             # higher-order: pattern is an expression function application


_COMPLEXITY_NAMES: Final = {
    Complexity.FAILURE: "failure",
    Complexity.SUCCESS: "success",
    Complexity.INSTANTIATION: "instantiation",
    Complexity.CHILDREN: "children",
    Complexity.EFA: "EFA",
}


# ---------------------------------------------------------------------------
# Constraint
# ---------------------------------------------------------------------------


class Constraint:
    """A (pattern, expression) pair.

    Invariant: the expression contains no metavariable anywhere, root
    included. Construction enforces it.

    Constraints hold *shared references* to their nodes. copy() is shallow:
    the copy pairs the very same pattern and expression objects, so a
    mutation made through one is visible through the other. Use
    applied_to() when an independent result is needed.
    """

    metavariable: Final = METAVARIABLE

    def __init__(self, pattern: LogicConcept, expression: LogicConcept) -> None:
        for side, node in (("pattern", pattern), ("expression", expression)):
            if not isinstance(node, LogicConcept):
                raise TypeError(
                    f"The {side} of a constraint must be a LogicConcept, "
                    f"not a {type(node).__name__}"
                )
        if contains_a_metavariable(expression):
            raise InvariantViolation(
                "The expression in a constraint may not contain metavariables"
            )
        self._pattern = pattern
        self._expression = expression

    @property
    def pattern(self) -> LogicConcept:
        return self._pattern

    @property
    def expression(self) -> LogicConcept:
        return self._expression

    contains_a_metavariable = staticmethod(contains_a_metavariable)

    def copy(self) -> Constraint:
        duplicate = Constraint.__new__(Constraint)
        duplicate._pattern = self._pattern
        duplicate._expression = self._expression
        return duplicate

    def equals(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return False
        return self._pattern.equals(other._pattern) and self._expression.equals(
            other._expression
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        from .render import render

        return f"Constraint{render(self)}"

    # -- classification -----------------------------------------------------

    def complexity(self) -> Complexity:
        """Classify this constraint from the current shapes of both sides.

        Checked from most to least specific: EFA pattern, bare metavariable,
        metavariable-free pattern (success or failure by equality),
        same-shaped Applications or Bindings, and failure otherwise.
        """
        pattern, expression = self._pattern, self._expression
        if is_an_efa(pattern):
            result = Complexity.EFA
        elif is_a_metavariable(pattern):
            result = Complexity.INSTANTIATION
        elif not contains_a_metavariable(pattern):
            result = (
                Complexity.SUCCESS if pattern.equals(expression) else Complexity.FAILURE
            )
        else:
            match pattern.kind:
                case ConceptKind.APPLICATION | ConceptKind.BINDING if (
                    expression.kind == pattern.kind
                    and expression.num_children() == pattern.num_children()
                ):
                    result = Complexity.CHILDREN
                case _:
                    result = Complexity.FAILURE
        logger.debug("Classified %r as %s", self, _COMPLEXITY_NAMES[result])
        return result

    def complexity_name(self) -> str:
        return _COMPLEXITY_NAMES[self.complexity()]

    def children(self) -> list[Constraint]:
        """One constraint per child position, left to right.

        For Bindings this covers the head, every bound variable and the body.
        """
        complexity = self.complexity()
        if complexity != Complexity.CHILDREN:
            raise WrongClassification(
                "Cannot compute children for this type of constraint "
                f"({_COMPLEXITY_NAMES[complexity]})"
            )
        return [
            Constraint(p, e)
            for p, e in zip(self._pattern.children(), self._expression.children())
        ]

    # -- substitution -------------------------------------------------------

    def can_be_applied(self) -> bool:
        """True iff the pattern is a single metavariable Symbol."""
        return is_a_metavariable(self._pattern)

    def _require_applicable(self) -> None:
        if not self.can_be_applied():
            raise WrongClassification(
                "Cannot apply a constraint whose pattern is not a metavariable"
            )

    @staticmethod
    def _substitute_in_place(
        metavariable: LogicConcept, expression: LogicConcept, target: LogicConcept
    ) -> LogicConcept:
        """Replace every occurrence of metavariable beneath target.

        Returns the resulting root, which is a fresh copy of expression when
        target itself was an occurrence.
        """
        # Collected up front so the walk never visits inserted copies.
        occurrences = [n for n in target.subtree() if n.equals(metavariable)]
        result = target
        for occurrence in occurrences:
            replacement = expression.copy()
            occurrence.replace_with(replacement)
            if occurrence is target:
                result = replacement
        if occurrences:
            logger.debug(
                "Substituted %s for %d occurrence(s) of %s",
                expression,
                len(occurrences),
                metavariable,
            )
        return result

    def apply_to(self, target: LogicConcept | Problem) -> LogicConcept | Problem:
        """Substitute in place: every occurrence of the metavariable in target
        is replaced by a copy of the expression.

        target may be a LogicConcept or a Problem (whose patterns are all
        substituted). A Constraint target is refused: writing into its
        pattern here would bypass the checks its constructor makes. Use
        applied_to() for that.

        Returns the substituted root. That is target itself, except when
        target was a parentless occurrence of the metavariable, which cannot
        be swapped in place; the replacement is returned instead.
        """
        if isinstance(target, Constraint):
            raise WrongTargetType(
                "Cannot apply a constraint to that (in-place substitution into "
                "a constraint is not allowed; use applied_to())"
            )
        if not isinstance(target, (LogicConcept, Problem)):
            raise WrongTargetType(
                f"Cannot apply a constraint to that ({type(target).__name__})"
            )
        self._require_applicable()
        # Taken before the loop: this constraint may itself be a member of
        # the problem, and its pattern is rewritten along with the others.
        metavariable, expression = self._pattern, self._expression
        if isinstance(target, Problem):
            for constraint in target.constraints:
                constraint._pattern = self._substitute_in_place(
                    metavariable, expression, constraint._pattern
                )
            return target
        return self._substitute_in_place(metavariable, expression, target)

    def applied_to(
        self, target: LogicConcept | Constraint | Problem | list | tuple
    ) -> LogicConcept | Constraint | Problem | list:
        """Substitute functionally, returning a new result; target is untouched.

        Accepts a LogicConcept (returns a new tree), a Constraint (returns a
        new Constraint with a substituted pattern), a Problem (returns a new
        Problem of the same size and order), or a list/tuple of these
        (returns a list).
        """
        self._require_applicable()
        match target:
            case LogicConcept():
                return self._substitute_in_place(
                    self._pattern, self._expression, target.copy()
                )
            case Constraint():
                return Constraint(
                    self.applied_to(target.pattern), target.expression.copy()
                )
            case Problem():
                return Problem(*(self.applied_to(c) for c in target.constraints))
            case list() | tuple():
                return [self.applied_to(item) for item in target]
            case _:
                raise WrongTargetType(
                    f"Cannot apply a constraint to that ({type(target).__name__})"
                )


# ---------------------------------------------------------------------------
# Problem
# ---------------------------------------------------------------------------


class Problem:
    """An ordered collection of constraints to be solved together.

    Duplicates are allowed and insertion order is kept.
    """

    def __init__(self, *args: LogicConcept | Constraint) -> None:
        self._constraints: list[Constraint] = []
        self.add(*args)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return tuple(self._constraints)

    def __len__(self) -> int:
        return len(self._constraints)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(tuple(self._constraints))

    def is_empty(self) -> bool:
        return not self._constraints

    def add(self, *args: LogicConcept | Constraint) -> None:
        """Append constraints, in order.

        Each argument is either a ready-made Constraint or a pattern node
        immediately followed by its expression node:

            problem.add(P1, E1, P2, E2)
            problem.add(Constraint(P1, E1), P2, E2)
        """
        i = 0
        while i < len(args):
            arg = args[i]
            if isinstance(arg, Constraint):
                self._constraints.append(arg)
                i += 1
            elif isinstance(arg, LogicConcept):
                if i + 1 >= len(args) or not isinstance(args[i + 1], LogicConcept):
                    raise TypeError(
                        "Each pattern added to a problem must be followed by an expression"
                    )
                self._constraints.append(Constraint(arg, args[i + 1]))
                i += 2
            else:
                raise TypeError(
                    f"Cannot add a {type(arg).__name__} to a problem"
                )

    def copy(self) -> Problem:
        """A new problem holding shallow copies of these constraints."""
        return Problem(*(c.copy() for c in self._constraints))

    def plus(self, *args: LogicConcept | Constraint) -> Problem:
        result = self.copy()
        result.add(*args)
        return result

    def without(self, constraint: Constraint) -> Problem:
        """A copy of this problem lacking that exact constraint object."""
        return Problem(*(c.copy() for c in self._constraints if c is not constraint))

    def first(self, predicate: Callable[[Constraint], bool]) -> Constraint | None:
        return next((c for c in self._constraints if predicate(c)), None)

    def equals(self, other: object) -> bool:
        if not isinstance(other, Problem) or len(self) != len(other):
            return False
        return all(a.equals(b) for a, b in zip(self._constraints, other._constraints))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Problem):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        from .render import render

        return f"Problem{render(self)}"
