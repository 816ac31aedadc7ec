"""Builder helpers for constructing expression trees by hand.

Strings are accepted wherever a node is expected and become plain Symbols,
so patterns read close to their written form:

    app("f", mv("X"))            (f ?X)
    bind("∀", "x", app("P", "x"))  (∀ x , (P x))
"""

from logicmatch.concepts import (
    Application,
    Binding,
    Environment,
    LogicConcept,
    Symbol,
)
from logicmatch.matching import METAVARIABLE, Constraint, Problem, new_efa

Node = LogicConcept | str


def _node(item: Node) -> LogicConcept:
    return Symbol(item) if isinstance(item, str) else item


def sym(text: str) -> Symbol:
    return Symbol(text)


def mv(text: str) -> Symbol:
    """A metavariable symbol."""
    return Symbol(text).make_into_a(METAVARIABLE)


def app(*children: Node) -> Application:
    return Application(*(_node(c) for c in children))


def bind(head: Node, *rest: Node) -> Binding:
    """Binding(head, bound variables..., body); the last argument is the body."""
    return Binding(_node(head), *(_node(c) for c in rest))


def env(*children: Node) -> Environment:
    return Environment(*(_node(c) for c in children))


def efa(operator: Node, *operands: Node) -> Application:
    return new_efa(_node(operator), *(_node(c) for c in operands))


def constraint(pattern: Node, expression: Node) -> Constraint:
    return Constraint(_node(pattern), _node(expression))


def problem(*pairs: tuple[Node, Node]) -> Problem:
    """A Problem from (pattern, expression) pairs."""
    return Problem(*(constraint(p, e) for p, e in pairs))
