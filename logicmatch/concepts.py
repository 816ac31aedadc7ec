"""Logic concepts: the expression trees that matching operates on.

A logic concept is a node in a hierarchy representing a logical or
mathematical expression. Nodes come in four variants plus the generic base:

- Symbol: a leaf holding one atomic token (x, +, 42, ∀)
- Application: operator first, then operands, e.g. (f x y)
- Binding: head, bound variables, body, e.g. (∀ x y , P)
- Environment: a grouped block of siblings with no operator head

Every node also carries an attribute table (used for type tags such as
"metavariable") and a dirty flag. The dirty flag never changes implicitly;
callers set it explicitly, optionally forcing the same value onto every
ancestor.
"""

from __future__ import annotations

import copy as _copy
import logging
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import Any, Self

logger = logging.getLogger(__name__)

# Type tags live in the attribute table under this prefix, so that tags and
# ordinary attributes share one table and one equality rule.
TYPE_PREFIX = "_type_"


class ConceptKind(Enum):
    CONCEPT = "concept"
    SYMBOL = "symbol"
    APPLICATION = "application"
    BINDING = "binding"
    ENVIRONMENT = "environment"


def _type_key(type_name: str) -> str:
    return TYPE_PREFIX + type_name


def retain_concepts(candidates: Iterable[object]) -> list[LogicConcept]:
    """Keep only the LogicConcept instances among candidate children.

    Relative order is preserved. Anything else (strings, numbers, None,
    foreign objects) is dropped rather than rejected.
    """
    kept = [c for c in candidates if isinstance(c, LogicConcept)]
    if logger.isEnabledFor(logging.DEBUG):
        dropped = [c for c in candidates if not isinstance(c, LogicConcept)]
        if dropped:
            logger.debug(
                "Dropped %d non-concept child argument(s): %r", len(dropped), dropped
            )
    return kept


# ---------------------------------------------------------------------------
# Generic node
# ---------------------------------------------------------------------------


class LogicConcept:
    """A node in an expression hierarchy.

    The node exclusively owns its children. Adopting a node that already
    sits in another hierarchy detaches it from its old parent first.

    copy() is a deep clone: children, attributes and dirty flags are all
    duplicated, and nothing is shared with the original.
    """

    def __init__(self, *children: object) -> None:
        self._parent: LogicConcept | None = None
        self._children: list[LogicConcept] = []
        self._attributes: dict[str, Any] = {}
        self._dirty = True
        for child in retain_concepts(list(children)):
            self.insert_child(child)

    @property
    def kind(self) -> ConceptKind:
        return ConceptKind.CONCEPT

    # -- structure ----------------------------------------------------------

    def num_children(self) -> int:
        return len(self._children)

    def child(self, index: int) -> LogicConcept:
        if not 0 <= index < len(self._children):
            raise IndexError(
                f"Child index {index} out of range for a node with "
                f"{len(self._children)} children"
            )
        return self._children[index]

    def children(self) -> tuple[LogicConcept, ...]:
        return tuple(self._children)

    def parent(self) -> LogicConcept | None:
        return self._parent

    def index_in_parent(self) -> int | None:
        if self._parent is None:
            return None
        # Identity, not structural equality: siblings may be equal copies.
        for i, sibling in enumerate(self._parent._children):
            if sibling is self:
                return i
        raise AssertionError("Node is missing from its parent's children")

    def ancestors(self) -> Iterator[LogicConcept]:
        """Strict ancestors, nearest first."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def subtree(self) -> Iterator[LogicConcept]:
        """This node and all of its descendants, in pre-order."""
        yield self
        for child in self._children:
            yield from child.subtree()

    def has_descendant_satisfying(
        self, predicate: Callable[[LogicConcept], bool]
    ) -> bool:
        """True if this node or any node beneath it satisfies predicate."""
        return any(predicate(node) for node in self.subtree())

    def text(self) -> str | None:
        """The atomic token of a leaf; compound nodes have none."""
        return None

    # -- mutation -----------------------------------------------------------

    def insert_child(self, child: LogicConcept, index: int | None = None) -> None:
        if not isinstance(child, LogicConcept):
            raise TypeError(f"Cannot insert a {type(child).__name__} as a child")
        if child is self or any(a is child for a in self.ancestors()):
            raise ValueError("Cannot make a node a child of itself or its descendant")
        child.remove()
        if index is None:
            self._children.append(child)
        else:
            self._children.insert(index, child)
        child._parent = self

    def remove(self) -> None:
        """Detach this node from its parent, if it has one."""
        if self._parent is None:
            return
        index = self.index_in_parent()
        assert index is not None
        del self._parent._children[index]
        self._parent = None

    def replace_with(self, other: LogicConcept) -> None:
        """Put other in this node's place within its parent.

        A parentless node has no place to fill, so this is then a no-op.
        """
        if self._parent is None or other is self:
            return
        parent = self._parent
        index = self.index_in_parent()
        self.remove()
        parent.insert_child(other, index)

    # -- attributes ---------------------------------------------------------

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set_attribute(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def clear_attributes(self, *keys: str) -> None:
        """Remove the given attributes, or all of them if none are named."""
        if not keys:
            self._attributes.clear()
            return
        for key in keys:
            self._attributes.pop(key, None)

    def attribute_keys(self) -> tuple[str, ...]:
        return tuple(self._attributes)

    def is_a(self, type_name: str) -> bool:
        return self._attributes.get(_type_key(type_name)) is True

    def make_into_a(self, type_name: str) -> Self:
        self._attributes[_type_key(type_name)] = True
        return self

    def unmake_into_a(self, type_name: str) -> Self:
        self._attributes.pop(_type_key(type_name), None)
        return self

    def as_a(self, type_name: str) -> Self:
        """A copy of this node tagged with type_name; self is unchanged.

        Convenient for inline construction, e.g. Symbol("X").as_a(METAVARIABLE).
        """
        return self.copy().make_into_a(type_name)

    # -- dirty flag ---------------------------------------------------------

    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self, value: bool = True, propagate: bool = False) -> None:
        """Set this node's dirty flag.

        With propagate=True the same value overwrites every ancestor's flag
        as well. This is a direct write, not a recomputation from children,
        so siblings are never consulted or changed.
        """
        self._dirty = value
        if propagate:
            for ancestor in self.ancestors():
                ancestor._dirty = value

    # -- equality and copying -----------------------------------------------

    def equals(self, other: object) -> bool:
        if not isinstance(other, LogicConcept):
            return False
        if self.kind != other.kind or self.text() != other.text():
            return False
        if self._attributes != other._attributes:
            return False
        if len(self._children) != len(other._children):
            return False
        return all(a.equals(b) for a, b in zip(self._children, other._children))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogicConcept):
            return NotImplemented
        return self.equals(other)

    # Mutable and compared structurally, so not usable as a dict key.
    __hash__ = None  # type: ignore[assignment]

    def _empty_like(self) -> Self:
        return type(self)()

    def copy(self) -> Self:
        duplicate = self._empty_like()
        duplicate._attributes = _copy.deepcopy(self._attributes)
        duplicate._dirty = self._dirty
        for child in self._children:
            duplicate.insert_child(child.copy())
        return duplicate

    def __repr__(self) -> str:
        from .render import render

        return f"{type(self).__name__}({render(self)})"

    def __str__(self) -> str:
        from .render import render

        return render(self)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class Symbol(LogicConcept):
    """A leaf holding an atomic token: identifier, operator, numeral, etc.

    Example: Symbol("x"), Symbol("+"), Symbol("∀")
    """

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = str(text)

    @property
    def kind(self) -> ConceptKind:
        return ConceptKind.SYMBOL

    def text(self) -> str:
        return self._text

    def insert_child(self, child: LogicConcept, index: int | None = None) -> None:
        raise TypeError("A Symbol cannot have children")

    def _empty_like(self) -> Self:
        return type(self)(self._text)


class Application(LogicConcept):
    """An operator applied to operands; the first child is the operator.

    Example: (+ 1 2) is Application(Symbol("+"), Symbol("1"), Symbol("2"))
    """

    @property
    def kind(self) -> ConceptKind:
        return ConceptKind.APPLICATION

    def operator(self) -> LogicConcept | None:
        return self._children[0] if self._children else None

    def operands(self) -> tuple[LogicConcept, ...]:
        return tuple(self._children[1:])


class Binding(LogicConcept):
    """A head symbol binding one or more variables in a body.

    Children are laid out as [head, bound variable..., body], e.g.
    (∀ x y , P) is Binding(Symbol("∀"), Symbol("x"), Symbol("y"), P).

    The shape is not enforced here; a malformed binding shows up later as a
    failed match.
    """

    @property
    def kind(self) -> ConceptKind:
        return ConceptKind.BINDING

    def head(self) -> LogicConcept | None:
        return self._children[0] if self._children else None

    def bound_variables(self) -> tuple[LogicConcept, ...]:
        return tuple(self._children[1:-1])

    def body(self) -> LogicConcept | None:
        return self._children[-1] if len(self._children) > 1 else None

    def is_well_formed(self) -> bool:
        return len(self._children) >= 3 and all(
            v.kind == ConceptKind.SYMBOL for v in self.bound_variables()
        )


class Environment(LogicConcept):
    """A grouped block of sibling concepts with no operator head."""

    @property
    def kind(self) -> ConceptKind:
        return ConceptKind.ENVIRONMENT
