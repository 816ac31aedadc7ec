"""Tests for the Problem collection in logicmatch/matching.py."""

import pytest

from logicmatch import Constraint, Problem, Symbol
from logicmatch.helpers import app, bind, mv


def pairs():
    return [
        (app("f", mv("X")), app("f", "a")),
        (bind("∀", "x", mv("P")), bind("∀", "x", app("Q", "x"))),
        (mv("Y"), Symbol("b")),
    ]


class TestAdd:
    def test_pairs_in_order(self):
        items = pairs()
        prob = Problem()
        prob.add(*(node for pair in items for node in pair))
        assert len(prob.constraints) == 3
        for constraint, (P, E) in zip(prob.constraints, items):
            assert constraint.pattern is P
            assert constraint.expression is E

    def test_constructor_takes_the_same_arguments(self):
        (P1, E1), (P2, E2), _ = pairs()
        prob = Problem(P1, E1, P2, E2)
        assert len(prob) == 2
        assert prob.constraints[1].pattern is P2

    def test_ready_made_constraints(self):
        (P1, E1), (P2, E2), _ = pairs()
        C = Constraint(P1, E1)
        prob = Problem(C, P2, E2)
        assert prob.constraints[0] is C
        assert prob.constraints[1].expression is E2

    def test_duplicates_are_kept(self):
        C = Constraint(mv("X"), Symbol("a"))
        prob = Problem(C, C, C.copy())
        assert len(prob) == 3
        assert prob.constraints[0] is prob.constraints[1]

    def test_add_appends(self):
        prob = Problem(mv("X"), Symbol("a"))
        prob.add(mv("Y"), Symbol("b"))
        assert [c.pattern.text() for c in prob] == ["X", "Y"]

    def test_unpaired_pattern(self):
        with pytest.raises(TypeError):
            Problem(mv("X"), Symbol("a"), mv("Y"))

    def test_pattern_followed_by_constraint(self):
        with pytest.raises(TypeError):
            Problem(mv("X"), Constraint(mv("Y"), Symbol("b")))

    def test_not_a_node(self):
        with pytest.raises(TypeError):
            Problem("X", Symbol("a"))

    def test_expression_invariant_still_applies(self):
        with pytest.raises(ValueError, match="may not contain metavariables"):
            Problem(mv("X"), mv("Y"))

    def test_constraints_view_is_read_only(self):
        prob = Problem(mv("X"), Symbol("a"))
        assert isinstance(prob.constraints, tuple)
        with pytest.raises(AttributeError):
            prob.constraints = ()  # type: ignore[misc]


class TestCollection:
    def test_empty(self):
        assert Problem().is_empty()
        assert not Problem(mv("X"), Symbol("a")).is_empty()

    def test_copy_is_shallow(self):
        prob = Problem(*(n for pair in pairs() for n in pair))
        duplicate = prob.copy()
        assert duplicate is not prob
        assert duplicate.equals(prob)
        for original, copied in zip(prob, duplicate):
            assert copied is not original
            assert copied.pattern is original.pattern

    def test_plus(self):
        prob = Problem(mv("X"), Symbol("a"))
        bigger = prob.plus(mv("Y"), Symbol("b"))
        assert len(prob) == 1
        assert len(bigger) == 2

    def test_without(self):
        prob = Problem(*(n for pair in pairs() for n in pair))
        target = prob.constraints[1]
        smaller = prob.without(target)
        assert len(prob) == 3
        assert len(smaller) == 2
        assert all(c.pattern is not target.pattern for c in smaller)

    def test_first(self):
        prob = Problem(*(n for pair in pairs() for n in pair))
        found = prob.first(lambda c: c.can_be_applied())
        assert found is prob.constraints[2]
        assert prob.first(lambda c: False) is None

    def test_equality_is_ordered(self):
        a = Problem(mv("X"), Symbol("a"), mv("Y"), Symbol("b"))
        b = Problem(mv("X"), Symbol("a"), mv("Y"), Symbol("b"))
        c = Problem(mv("Y"), Symbol("b"), mv("X"), Symbol("a"))
        assert a == b
        assert a != c
        assert a != Problem(mv("X"), Symbol("a"))


class TestSubstitution:
    def test_in_place_keeps_size_and_expressions(self):
        items = pairs()
        prob = Problem(*(n for pair in items for n in pair))
        C = Constraint(mv("X"), Symbol("a"))
        C.apply_to(prob)
        assert len(prob) == 3
        assert prob.constraints[0].pattern.equals(app("f", "a"))
        for constraint, (_, E) in zip(prob, items):
            assert constraint.expression is E

    def test_functional_leaves_original(self):
        prob = Problem(*(n for pair in pairs() for n in pair))
        snapshot = Problem(*(n for pair in pairs() for n in pair))
        C = Constraint(mv("P"), app("R", "x"))
        result = C.applied_to(prob)
        assert prob.equals(snapshot)
        assert len(result) == len(prob)
        assert result.constraints[1].pattern.equals(bind("∀", "x", app("R", "x")))
        assert result.constraints[0].pattern.equals(prob.constraints[0].pattern)
