"""Test fixtures for StackTreeLib consumers.

These helpers make traversal behavior observable in a test suite without
reaching into interpreter internals.
"""

import random
from typing import Any, Iterator, List, Optional

from ..core.adapter import AttributeAdapter, TreeAdapter
from ..core.node import BinaryNode, NaryNode


class CountingAdapter(TreeAdapter):
    """Adapter wrapper that counts how the traversal reads the tree.

    ``value_reads`` counts get_value calls, which for the default value
    collector is one per emitted node. ``expansions`` counts child lookups
    (get_left, get_right, get_children).

    Example:
        counting = CountingAdapter()
        walk = traverse(tree, adapter=counting)
        next(walk)
        assert counting.value_reads == 1
    """

    def __init__(self, base: Optional[TreeAdapter] = None):
        """
        Args:
            base: Adapter to wrap (defaults to AttributeAdapter)
        """
        self.base = base or AttributeAdapter()
        self.value_reads = 0
        self.expansions = 0

    def reset(self) -> None:
        self.value_reads = 0
        self.expansions = 0

    def get_value(self, node: Any) -> Any:
        self.value_reads += 1
        return self.base.get_value(node)

    def get_children(self, node: Any) -> Iterator[Any]:
        self.expansions += 1
        return self.base.get_children(node)

    def get_left(self, node: Any) -> Optional[Any]:
        self.expansions += 1
        return self.base.get_left(node)

    def get_right(self, node: Any) -> Optional[Any]:
        self.expansions += 1
        return self.base.get_right(node)

    def is_leaf(self, node: Any) -> bool:
        return self.base.is_leaf(node)

    def supports_binary(self) -> bool:
        return self.base.supports_binary()

    def __repr__(self) -> str:
        return f"CountingAdapter({self.base!r}, value_reads={self.value_reads})"


def random_binary_tree(seed: int, size: int) -> Optional[BinaryNode]:
    """Random-shaped binary tree whose in-order values are 0..size-1.

    Each subtree root is drawn uniformly from its key range, so shapes
    range from balanced to heavily skewed. Deterministic for a given seed.
    """
    if size <= 0:
        return None
    rng = random.Random(seed)
    built: List[Optional[BinaryNode]] = []
    # (lo, hi, root key or None while children are pending)
    stack: List[Any] = [(0, size, None)]
    while stack:
        lo, hi, key = stack.pop()
        if lo >= hi:
            built.append(None)
            continue
        if key is None:
            key = rng.randrange(lo, hi)
            stack.append((lo, hi, key))
            stack.append((key + 1, hi, None))
            stack.append((lo, key, None))
        else:
            right = built.pop()
            left = built.pop()
            built.append(BinaryNode(key, left, right))
    return built[0]


def random_nary_tree(seed: int, size: int, max_children: int = 4) -> Optional[NaryNode]:
    """Random N-ary tree with values 0..size-1 numbered in creation order.

    Each new node picks a random earlier node with spare capacity as its
    parent, so every parent value is smaller than its children's.
    """
    if size <= 0:
        return None
    if max_children < 1:
        raise ValueError("max_children must be at least 1")
    rng = random.Random(seed)
    children_of: List[List[int]] = [[] for _ in range(size)]
    open_parents = [0]
    for index in range(1, size):
        slot = rng.randrange(len(open_parents))
        parent = open_parents[slot]
        children_of[parent].append(index)
        if len(children_of[parent]) >= max_children:
            open_parents[slot] = open_parents[-1]
            open_parents.pop()
        open_parents.append(index)

    nodes: List[Optional[NaryNode]] = [None] * size
    for index in reversed(range(size)):
        nodes[index] = NaryNode(index, tuple(nodes[c] for c in children_of[index]))
    return nodes[0]
