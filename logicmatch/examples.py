"""Worked matching examples.

Each function builds a Problem and returns it together with a title. Run
this file to see every problem, its complexity breakdown and its solution.
"""

from logicmatch.helpers import app, bind, efa, env, mv
from logicmatch.matching import Problem
from logicmatch.render import render
from logicmatch.result import Err, Ok
from logicmatch.solver import solve

# ===================================================================
# Examples
# ===================================================================


def modus_ponens() -> tuple[str, Problem]:
    """Match the rule A, A ⇒ B against concrete premises."""
    p = app("P", "x")
    q = app("Q", "x")
    return "Modus ponens", Problem(
        mv("A"), p,
        app("⇒", mv("A"), mv("B")), app("⇒", p.copy(), q),
    )


def commutativity() -> tuple[str, Problem]:
    """Instantiate (+ a b) = (+ b a) from one side."""
    return "Commutativity of +", Problem(
        app("=", app("+", mv("a"), mv("b")), app("+", mv("b"), mv("a"))),
        app("=", app("+", "1", "2"), app("+", "2", "1")),
    )


def universal_elimination() -> tuple[str, Problem]:
    """Match a quantified pattern, binder and all."""
    return "Quantifier shape", Problem(
        bind("∀", "x", app(mv("R"), "x", "x")),
        bind("∀", "x", app("≤", "x", "x")),
    )


def inconsistent() -> tuple[str, Problem]:
    """The same metavariable cannot stand for two different things."""
    return "Inconsistent instantiation", Problem(
        app("f", mv("X"), mv("X")),
        app("f", "a", "b"),
    )


def environment_mismatch() -> tuple[str, Problem]:
    """Environments never decompose, so a pattern inside one cannot match."""
    return "Environment pattern", Problem(
        env(mv("X"), "b"),
        env("a", "b"),
    )


def higher_order() -> tuple[str, Problem]:
    """An EFA pattern: P applied to x, with P unknown."""
    return "Higher-order pattern", Problem(
        efa(mv("P"), "x"),
        app("+", "x", "1"),
    )


ALL_EXAMPLES = [
    modus_ponens,
    commutativity,
    universal_elimination,
    inconsistent,
    environment_mismatch,
    higher_order,
]


# ===================================================================
# Main: solve all examples, print the outcome
# ===================================================================


def main() -> None:
    for build in ALL_EXAMPLES:
        title, problem = build()
        print(f"{'=' * 60}")
        print(f"  {title}")
        print(f"{'=' * 60}")
        for constraint in problem:
            print(f"  {render(constraint)}  [{constraint.complexity_name()}]")
        match solve(problem):
            case Ok(solution):
                print(f"  solved: {solution!r}")
            case Err(error):
                print(f"  {type(error).__name__}: {error}")
        print()


if __name__ == "__main__":
    main()
