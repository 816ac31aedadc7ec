"""logicmatch: Expression trees and constraint-based pattern matching."""

from .concepts import (
    Application,
    Binding,
    ConceptKind,
    Environment,
    LogicConcept,
    Symbol,
)
from .errors import (
    InvariantViolation,
    MatchingError,
    NoSolution,
    UnsupportedConstraint,
    WrongClassification,
    WrongTargetType,
)
from .matching import (
    EFA_MARKER,
    METAVARIABLE,
    Complexity,
    Constraint,
    Problem,
    contains_a_metavariable,
    is_a_metavariable,
    is_an_efa,
    new_efa,
)
from .solver import Solution, match, solve
from .render import render
from .helpers import app, bind, efa, env, mv, sym
from .result import Ok, Err, Result

__all__ = [
    # Concepts
    "Application", "Binding", "ConceptKind", "Environment", "LogicConcept",
    "Symbol",
    # Errors
    "InvariantViolation", "MatchingError", "NoSolution",
    "UnsupportedConstraint", "WrongClassification", "WrongTargetType",
    # Matching
    "EFA_MARKER", "METAVARIABLE", "Complexity", "Constraint", "Problem",
    "contains_a_metavariable", "is_a_metavariable", "is_an_efa", "new_efa",
    # Solver
    "Solution", "match", "solve",
    # Rendering
    "render",
    # Helpers
    "app", "bind", "efa", "env", "mv", "sym",
    # Result
    "Ok", "Err", "Result",
]
