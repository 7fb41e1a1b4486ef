"""Immutable node types for StackTreeLib.

Nodes are intentionally kept simple - they are data containers with no
navigation logic. Reading values and children is delegated to a
TreeAdapter, so the traversal engine also works with node types that are
not defined here.

Equality, hashing and repr walk the structure with an explicit stack, so
they stay usable on degenerate trees far deeper than the interpreter's
recursion limit.
"""

from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

V = TypeVar("V")


class _FrozenSlots:
    """Mixin that rejects attribute writes once __init__ has run."""

    __slots__ = ()

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")


class BinaryNode(_FrozenSlots, Generic[V]):
    """Binary tree node with a value and optional left/right children.

    Example:
        >>> tree = BinaryNode(4, BinaryNode(2, BinaryNode(1), BinaryNode(3)), BinaryNode(5))
        >>> tree.left.value
        2
    """

    __slots__ = ("value", "left", "right")

    def __init__(self,
                 value: V,
                 left: Optional["BinaryNode[V]"] = None,
                 right: Optional["BinaryNode[V]"] = None):
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def children(self) -> Tuple["BinaryNode[V]", ...]:
        """Present children, left before right."""
        return tuple(c for c in (self.left, self.right) if c is not None)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryNode):
            return NotImplemented
        pending: List[Tuple[Optional[BinaryNode], Optional[BinaryNode]]] = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if a is None or b is None:
                return False
            if a.value != b.value:
                return False
            pending.append((a.right, b.right))
            pending.append((a.left, b.left))
        return True

    def __hash__(self) -> int:
        return hash(tuple(_shape_tokens(self)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({_notation(self)!r})"


class NaryNode(_FrozenSlots, Generic[V]):
    """Tree node with a value and an ordered tuple of children."""

    __slots__ = ("value", "children")

    def __init__(self, value: V, children: Tuple["NaryNode[V]", ...] = ()):
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "children", tuple(children))

    def is_leaf(self) -> bool:
        return not self.children

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NaryNode):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if a.value != b.value or len(a.children) != len(b.children):
                return False
            pending.extend(zip(a.children, b.children))
        return True

    def __hash__(self) -> int:
        return hash(tuple(_shape_tokens(self)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({_notation(self)!r})"


# Marks the end of a node's children while flattening
_CLOSE = object()


def _shape_tokens(root) -> Iterator[Any]:
    """Yield a flat token stream that identifies the tree's shape and values.

    Two trees of the same node type produce equal streams exactly when they
    are structurally equal.
    """
    stack: List[Any] = [root]
    while stack:
        item = stack.pop()
        if item is _CLOSE:
            yield _CLOSE_TOKEN
            continue
        if item is None:
            yield _ABSENT_TOKEN
            continue
        yield item.value
        yield _OPEN_TOKEN
        stack.append(_CLOSE)
        if isinstance(item, BinaryNode):
            stack.append(item.right)
            stack.append(item.left)
        else:
            stack.extend(reversed(item.children))


# Structure boundary tokens in the flattened stream
_OPEN_TOKEN = ("(",)
_CLOSE_TOKEN = (")",)
_ABSENT_TOKEN = ("-",)


def _notation(node) -> str:
    from ..builders import format_tree
    return format_tree(node)
