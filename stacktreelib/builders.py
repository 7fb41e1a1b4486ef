"""Tree construction helpers for StackTreeLib.

Builders for test trees and a small notation, ``value(left,right)``:

    4(2(1,3),5)     balanced tree, in-order 1..5
    7()  or  7      single node
    3(,5)           right child only
    3(1)  or 3(1,)  left child only
    1(2,3(4),5)     N-ary node (with ``nary=True``)

Every builder, the parser and the formatter use explicit stacks, so they
handle trees of any depth.
"""

import re
from typing import Any, Iterable, List, Optional, Sequence

from .core.adapter import AttributeAdapter, ChildrenAdapter, TreeAdapter
from .core.node import BinaryNode, NaryNode
from .errors import TreeSyntaxError

_INT_RE = re.compile(r"^[+-]?\d+$")
_DELIMITERS = "(),"


def _convert(atom: str) -> Any:
    """Integers become int, everything else stays a string."""
    if _INT_RE.match(atom):
        return int(atom)
    return atom


class _OpenNode:
    """A node whose ``(`` has been read but not its ``)``."""

    __slots__ = ("value", "slots", "pending")

    def __init__(self, value: Any):
        self.value = value
        self.slots: List[Any] = []
        self.pending: Any = None


def parse_tree(text: str, nary: bool = False) -> Optional[Any]:
    """Parse tree notation into BinaryNode (or NaryNode) objects.

    Args:
        text: Tree notation; blank text is the empty tree
        nary: Build NaryNode trees and allow any number of children

    Returns:
        Root node, or None for blank input

    Raises:
        TreeSyntaxError: If the notation is malformed

    Example:
        >>> parse_tree("4(2(1,3),5)").left.right.value
        3
    """
    length = len(text)
    pos = _skip_ws(text, 0)
    if pos == length:
        return None

    stack: List[_OpenNode] = []
    result: Any = None
    want_node = True

    while True:
        pos = _skip_ws(text, pos)
        if want_node:
            if stack and pos < length and text[pos] in ",)":
                # Empty slot
                want_node = False
                continue
            start = pos
            while pos < length and text[pos] not in _DELIMITERS:
                pos += 1
            atom = text[start:pos].strip()
            if not atom:
                raise TreeSyntaxError("Expected a value", text, start)
            value = _convert(atom)
            pos = _skip_ws(text, pos)
            if pos < length and text[pos] == "(":
                stack.append(_OpenNode(value))
                pos += 1
                continue
            node = NaryNode(value) if nary else BinaryNode(value)
        else:
            if not stack:
                if pos != length:
                    raise TreeSyntaxError("Unexpected trailing text", text, pos)
                return result
            if pos == length:
                raise TreeSyntaxError("Unclosed '('", text, pos)
            char = text[pos]
            pos += 1
            frame = stack[-1]
            if char == ",":
                frame.slots.append(frame.pending)
                frame.pending = None
                want_node = True
                continue
            if char != ")":
                raise TreeSyntaxError(f"Unexpected {char!r}", text, pos - 1)
            frame.slots.append(frame.pending)
            stack.pop()
            node = _close(frame, nary, text, pos - 1)

        if stack:
            stack[-1].pending = node
        else:
            result = node
        want_node = False


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _close(frame: _OpenNode, nary: bool, text: str, offset: int) -> Any:
    slots = frame.slots
    if nary:
        if len(slots) == 1 and slots[0] is None:
            return NaryNode(frame.value)
        if any(slot is None for slot in slots):
            raise TreeSyntaxError("Empty child slot in N-ary node", text, offset)
        return NaryNode(frame.value, tuple(slots))
    if len(slots) > 2:
        raise TreeSyntaxError(f"Binary node has {len(slots)} children", text, offset)
    left = slots[0]
    right = slots[1] if len(slots) == 2 else None
    return BinaryNode(frame.value, left, right)


class _Token:
    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text


_OPEN = _Token("(")
_CLOSE = _Token(")")
_COMMA = _Token(",")


def format_tree(root: Any, adapter: Optional[TreeAdapter] = None) -> str:
    """Render a tree in ``value(left,right)`` notation.

    Binary leaves render as the bare value, and a binary node with any
    child renders both slots (``3(,5)``). N-ary nodes list their children.

    Args:
        root: Root node or None (renders as "")
        adapter: How to read the nodes (defaults from the root's type)
    """
    if root is None:
        return ""
    if adapter is None:
        adapter = ChildrenAdapter() if isinstance(root, NaryNode) else AttributeAdapter()
    binary = adapter.supports_binary()

    parts: List[str] = []
    stack: List[Any] = [root]
    while stack:
        item = stack.pop()
        if isinstance(item, _Token):
            parts.append(item.text)
            continue
        if item is None:
            continue
        parts.append(str(adapter.get_value(item)))
        if binary:
            left, right = adapter.get_left(item), adapter.get_right(item)
            if left is None and right is None:
                continue
            stack.extend((_CLOSE, right, _COMMA, left, _OPEN))
        else:
            children = [c for c in adapter.get_children(item) if c is not None]
            if not children:
                continue
            stack.append(_CLOSE)
            for index, child in enumerate(reversed(children)):
                if index:
                    stack.append(_COMMA)
                stack.append(child)
            stack.append(_OPEN)
    return "".join(parts)


def left_chain(n: int) -> Optional[BinaryNode]:
    """Left-skewed chain of ``n`` nodes; in-order yields 0..n-1.

    The root holds n-1 and the deepest node holds 0. Height equals n.
    """
    node: Optional[BinaryNode] = None
    for value in range(n):
        node = BinaryNode(value, left=node)
    return node


def right_chain(n: int) -> Optional[BinaryNode]:
    """Right-skewed chain of ``n`` nodes; in-order yields 0..n-1."""
    node: Optional[BinaryNode] = None
    for value in reversed(range(n)):
        node = BinaryNode(value, right=node)
    return node


def balanced(values: Iterable[Any]) -> Optional[BinaryNode]:
    """Height-balanced tree whose in-order sequence is ``values``."""
    items: Sequence[Any] = list(values)
    if not items:
        return None
    built: List[Optional[BinaryNode]] = []
    stack = [(0, len(items), False)]
    while stack:
        lo, hi, ready = stack.pop()
        if lo >= hi:
            built.append(None)
            continue
        mid = (lo + hi) // 2
        if not ready:
            stack.append((lo, hi, True))
            stack.append((mid + 1, hi, False))
            stack.append((lo, mid, False))
        else:
            right = built.pop()
            left = built.pop()
            built.append(BinaryNode(items[mid], left, right))
    return built[0]


def from_nested(nested: Any) -> Optional[BinaryNode]:
    """Build a BinaryNode tree from nested tuples.

    Each node is ``(value, left, right)``, ``(value, left)`` or
    ``(value,)``; a bare non-tuple item is a leaf value and None is an
    absent child.

    Example:
        >>> from_nested((4, (2, 1, 3), 5)) == parse_tree("4(2(1,3),5)")
        True
    """
    built: List[Optional[BinaryNode]] = []
    stack = [(nested, False)]
    while stack:
        item, ready = stack.pop()
        if item is None:
            built.append(None)
        elif not isinstance(item, tuple):
            built.append(BinaryNode(item))
        elif not ready:
            if not 1 <= len(item) <= 3:
                raise ValueError(f"Expected (value, left, right), got {len(item)} items")
            left = item[1] if len(item) > 1 else None
            right = item[2] if len(item) > 2 else None
            stack.append((item, True))
            stack.append((right, False))
            stack.append((left, False))
        else:
            right_node = built.pop()
            left_node = built.pop()
            built.append(BinaryNode(item[0], left_node, right_node))
    return built[0]


def nary_from_nested(nested: Any) -> Optional[NaryNode]:
    """Build a NaryNode tree from nested tuples ``(value, child, child, ...)``.

    A bare non-tuple item is a leaf value.
    """
    if nested is None:
        return None
    built: List[NaryNode] = []
    stack = [(nested, False)]
    while stack:
        item, ready = stack.pop()
        if not isinstance(item, tuple):
            built.append(NaryNode(item))
        elif not ready:
            if not item:
                raise ValueError("Empty tuple has no value")
            stack.append((item, True))
            for child in reversed(item[1:]):
                stack.append((child, False))
        else:
            count = len(item) - 1
            children = tuple(built[len(built) - count:]) if count else ()
            del built[len(built) - count:]
            built.append(NaryNode(item[0], children))
    return built[0]
