"""Tree traversal strategies for StackTreeLib.

Traversers pair a Schema (the order's continuation variants) with an
adapter and hand back lazy iterators over nodes. They work with any
TreeAdapter that has the capabilities the order needs.
"""

from abc import ABC
from typing import Any, Iterator, Type

from ..errors import CapabilityMismatchError
from .adapter import TreeAdapter
from .interpreter import (
    InOrderSchema,
    NaryPostOrderSchema,
    NaryPreOrderSchema,
    PostOrderSchema,
    PreOrderSchema,
    Schema,
    Trampoline,
)


class TreeTraverser(ABC):
    """Abstract base class for traversal strategies.

    Subclasses only choose the schema. Every call to ``traverse`` builds a
    fresh Trampoline, so a traverser can be reused and shared between
    independent traversals of the same tree.
    """

    schema_class: Type[Schema]

    def __init__(self, adapter: TreeAdapter, detect_cycles: bool = False):
        """Initialize traverser with an adapter.

        Args:
            adapter: TreeAdapter for reading the tree
            detect_cycles: Raise CyclicStructureError on re-entered nodes

        Raises:
            CapabilityMismatchError: If the order needs left/right slots the
                adapter does not provide
        """
        if self.schema_class.requires_binary and not adapter.supports_binary():
            raise CapabilityMismatchError(
                f"{self.__class__.__name__} needs a binary adapter, "
                f"got {adapter.__class__.__name__}"
            )
        self.adapter = adapter
        self.detect_cycles = detect_cycles

    def build(self, root: Any) -> Trampoline:
        """Create the interpreter for one traversal of ``root``."""
        return Trampoline(root, self.schema_class(self.adapter), self.detect_cycles)

    def traverse(self, root: Any) -> Iterator[Any]:
        """Traverse the tree starting from root.

        Args:
            root: Starting node, or None for an empty tree

        Yields:
            Nodes in this strategy's order
        """
        return self.build(root).run()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.adapter!r}, detect_cycles={self.detect_cycles})"


class InOrderTraverser(TreeTraverser):
    """Binary in-order: left subtree, node, right subtree.

    For a binary search tree this yields keys in sorted order.
    """
    schema_class = InOrderSchema


class PreOrderTraverser(TreeTraverser):
    """Binary pre-order: node before its subtrees. Good for copying trees."""
    schema_class = PreOrderSchema


class PostOrderTraverser(TreeTraverser):
    """Binary post-order: subtrees before node.

    Good for deletion or computing aggregates bottom-up.
    """
    schema_class = PostOrderSchema


class NaryPreOrderTraverser(TreeTraverser):
    """Pre-order over any number of children per node."""
    schema_class = NaryPreOrderSchema


class NaryPostOrderTraverser(TreeTraverser):
    """Post-order over any number of children per node."""
    schema_class = NaryPostOrderSchema


_STRATEGIES = {
    'in': InOrderTraverser,
    'inorder': InOrderTraverser,
    'in_order': InOrderTraverser,
    'pre': PreOrderTraverser,
    'preorder': PreOrderTraverser,
    'pre_order': PreOrderTraverser,
    'dfs_pre': PreOrderTraverser,
    'post': PostOrderTraverser,
    'postorder': PostOrderTraverser,
    'post_order': PostOrderTraverser,
    'dfs_post': PostOrderTraverser,
    'nary_pre': NaryPreOrderTraverser,
    'nary_pre_order': NaryPreOrderTraverser,
    'nary_post': NaryPostOrderTraverser,
    'nary_post_order': NaryPostOrderTraverser,
}


# Factory function for creating traversers by name
def create_traverser(strategy: str, adapter: TreeAdapter, detect_cycles: bool = False) -> TreeTraverser:
    """Create a traverser instance by strategy name.

    Args:
        strategy: Name of traversal strategy (in, pre, post, nary_pre, nary_post)
        adapter: TreeAdapter for the tree structure
        detect_cycles: Enable the cycle guard

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategy_lower = strategy.lower().replace('-', '_')
    if strategy_lower not in _STRATEGIES:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(_STRATEGIES.keys())}"
        )

    return _STRATEGIES[strategy_lower](adapter, detect_cycles)
