"""Render concepts, constraints and problems as one-line text.

Used by __repr__ and in log messages. The output is for people to read;
nothing parses it back.

    (f ?X)              Application with a metavariable operand
    (∀ x , (P x))       Binding
    { a b }             Environment
    [ a b ]             generic LogicConcept
    (@ ?P x)            expression function application
    ((f ?X), (f a))     Constraint
    {((f ?X), (f a))}   Problem
"""

from __future__ import annotations

import json

from .concepts import ConceptKind, LogicConcept
from .matching import EFA_MARKER, METAVARIABLE, Constraint, Problem

_SPECIAL = set("()[]{},\"")


def render_symbol_text(text: str) -> str:
    if not text or any(ch.isspace() or ch in _SPECIAL for ch in text):
        return json.dumps(text, ensure_ascii=False)
    return text


def render_concept(concept: LogicConcept) -> str:
    inner = " ".join(render_concept(c) for c in concept.children())
    match concept.kind:
        case ConceptKind.SYMBOL:
            if concept.is_a(EFA_MARKER):
                return "@"
            text = render_symbol_text(concept.text() or "")
            return f"?{text}" if concept.is_a(METAVARIABLE) else text
        case ConceptKind.APPLICATION:
            return f"({inner})"
        case ConceptKind.BINDING:
            parts = [render_concept(c) for c in concept.children()]
            if len(parts) < 2:
                return f"({' '.join(parts)} ,)"
            return f"({' '.join(parts[:-1])} , {parts[-1]})"
        case ConceptKind.ENVIRONMENT:
            return f"{{ {inner} }}" if inner else "{ }"
        case ConceptKind.CONCEPT:
            return f"[ {inner} ]" if inner else "[ ]"
    raise TypeError(f"Unknown concept kind: {concept.kind}")


def render_constraint(constraint: Constraint) -> str:
    return (
        f"({render_concept(constraint.pattern)}, "
        f"{render_concept(constraint.expression)})"
    )


def render_problem(problem: Problem) -> str:
    return "{" + ", ".join(render_constraint(c) for c in problem.constraints) + "}"


def render(item: LogicConcept | Constraint | Problem) -> str:
    if isinstance(item, LogicConcept):
        return render_concept(item)
    elif isinstance(item, Constraint):
        return render_constraint(item)
    elif isinstance(item, Problem):
        return render_problem(item)
    raise TypeError(f"Cannot render a {type(item).__name__}")
