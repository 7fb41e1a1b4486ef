"""High-level API for StackTreeLib.

This module provides simple, functional interfaces for common traversal
tasks. They wrap the ExecutionPlan machinery so the common case is a
single call:

    >>> from stacktreelib import traverse, parse_tree
    >>> list(traverse(parse_tree("4(2(1,3),5)")))
    [1, 2, 3, 4, 5]
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .config import (
    EmitRequirement,
    SafetyConfig,
    TraversalConfig,
    TraversalOrder,
    TreeShape,
)
from .core.adapter import AttributeAdapter, ChildrenAdapter, TreeAdapter
from .planning import ExecutionPlan

logger = logging.getLogger(__name__)

OrderSpec = Union[TraversalOrder, str]
EmitSpec = Union[EmitRequirement, str]


class Traversal:
    """Lazy, pull-based, single-pass sequence of emitted data.

    Nothing is read from the tree until the first item is pulled. Once
    exhausted (or closed, or aborted by an error) it stays empty; start a new
    traversal to walk the tree again. ``error`` holds the exception that
    aborted it, if any. Abandoning it part-way needs no cleanup: the continuation
    stack belongs to this object alone and is dropped with it.
    """

    def __init__(self, plan: ExecutionPlan, root: Any):
        self._plan = plan
        self._trampoline = plan.start(root)
        self._results: Optional[Iterator[Tuple[Any, Any]]] = plan.drive(self._trampoline)
        self.exhausted = False
        self.error: Optional[Exception] = None

    def __iter__(self) -> "Traversal":
        return self

    def __next__(self) -> Any:
        if self._results is None:
            raise StopIteration
        try:
            _, data = next(self._results)
        except StopIteration:
            self.exhausted = True
            self._results = None
            raise
        except Exception as exc:
            # Generator is dead; later pulls yield nothing, but it did not complete
            self.error = exc
            self._results = None
            raise
        return data

    def close(self) -> None:
        """Abandon the traversal and release its continuation stack."""
        if self._results is None:
            return
        logger.debug("Traversal abandoned after %d nodes at stack depth %d",
                     self.emitted, self._trampoline.depth)
        self._results.close()
        self._results = None
        self._trampoline.state.stack.clear()

    def __enter__(self) -> "Traversal":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def emitted(self) -> int:
        """Number of nodes emitted so far."""
        return self._trampoline.emitted

    @property
    def peak_stack_depth(self) -> int:
        """Largest continuation stack length reached so far."""
        return self._trampoline.peak_depth

    @property
    def plan(self) -> ExecutionPlan:
        return self._plan

    def __repr__(self) -> str:
        if self.exhausted:
            state = "exhausted"
        elif self.error is not None:
            state = "aborted"
        else:
            state = "closed" if self._results is None else "open"
        return f"Traversal({state}, emitted={self.emitted}, peak_stack_depth={self.peak_stack_depth})"


def traverse(
    root: Any,
    order: OrderSpec = TraversalOrder.IN_ORDER,
    *,
    adapter: Optional[TreeAdapter] = None,
    shape: Optional[TreeShape] = None,
    detect_cycles: bool = False,
    max_nodes: Optional[int] = None,
    emit: EmitSpec = EmitRequirement.VALUE,
    custom_collector: Optional[Any] = None,
    on_emit: Optional[Callable[[Any, Any], None]] = None,
) -> Traversal:
    """Traverse a tree without touching the interpreter's call stack.

    This is the primary entry point. The default is binary in-order over
    objects with ``value``/``left``/``right`` attributes.

    Args:
        root: Root node, or None for an empty tree
        order: TraversalOrder or name ("in", "pre", "post", "nary_pre",
            "nary_post"); an ``nary_`` prefix implies TreeShape.NARY
        adapter: Adapter for reading nodes (default depends on shape)
        shape: Override the shape implied by ``order``
        detect_cycles: Raise CyclicStructureError if a node is re-entered
        max_nodes: Stop after this many nodes
        emit: EmitRequirement or name ("value", "node", "child_count",
            "custom"); what to produce per node (default: its value)
        custom_collector: Collector for EmitRequirement.CUSTOM
        on_emit: Called with (node, data) for every emitted node

    Returns:
        A lazy Traversal of the collected data

    Raises:
        ValueError: If ``order`` or ``emit`` is not recognized
        CapabilityMismatchError: If the adapter can't satisfy the request
    """
    parsed_order, implied_shape = _parse_order(order)
    shape = shape or implied_shape
    config = TraversalConfig(
        order=parsed_order,
        shape=shape,
        emit=_parse_emit(emit),
        custom_collector=custom_collector,
        safety=SafetyConfig(detect_cycles=detect_cycles, max_nodes=max_nodes),
        on_emit=on_emit,
    )
    return run_config(root, config, adapter)


def run_config(root: Any, config: TraversalConfig, adapter: Optional[TreeAdapter] = None) -> Traversal:
    """Traverse according to a prepared TraversalConfig."""
    if adapter is None:
        adapter = _default_adapter(config.shape)
    return Traversal(ExecutionPlan(config, adapter), root)


def traverse_nodes(root: Any, order: OrderSpec = TraversalOrder.IN_ORDER, **kwargs) -> Traversal:
    """Like traverse, but yields the nodes themselves."""
    kwargs['emit'] = EmitRequirement.NODE
    return traverse(root, order, **kwargs)


def collect(root: Any, order: OrderSpec = TraversalOrder.IN_ORDER, **kwargs) -> List[Any]:
    """Traverse and return all values as a list.

    Example:
        >>> collect(parse_tree("4(2(1,3),5)"), "post")
        [1, 3, 2, 5, 4]
    """
    return list(traverse(root, order, **kwargs))


def emit_to(root: Any,
            sink: Callable[[Any], Any],
            order: OrderSpec = TraversalOrder.IN_ORDER,
            **kwargs) -> int:
    """Send every value to ``sink`` in traversal order.

    Args:
        root: Root node or None
        sink: Called once per value, e.g. ``print`` or ``list.append``
        order: Traversal order
        **kwargs: Traversal options (see traverse)

    Returns:
        Number of values emitted
    """
    count = 0
    for value in traverse(root, order, **kwargs):
        sink(value)
        count += 1
    return count


def count_nodes(root: Any, order: OrderSpec = TraversalOrder.IN_ORDER, **kwargs) -> int:
    """Count nodes in a tree.

    Example:
        >>> count_nodes(parse_tree("4(2(1,3),5)"))
        5
    """
    kwargs['emit'] = EmitRequirement.NODE
    count = 0
    for _ in traverse(root, order, **kwargs):
        count += 1
    return count


def find_nodes(root: Any,
               predicate: Callable[[Any], bool],
               order: OrderSpec = TraversalOrder.IN_ORDER,
               **kwargs) -> Iterator[Any]:
    """Find nodes whose value matches a predicate.

    Args:
        root: Root node or None
        predicate: Called with each node's value
        order: Traversal order
        **kwargs: Traversal options (see traverse)

    Yields:
        Matching nodes, in traversal order
    """
    adapter = kwargs.get('adapter') or _default_adapter(kwargs.get('shape') or _parse_order(order)[1])
    kwargs['adapter'] = adapter
    for node in traverse_nodes(root, order, **kwargs):
        if predicate(adapter.get_value(node)):
            yield node


def get_leaf_values(root: Any, order: OrderSpec = TraversalOrder.IN_ORDER, **kwargs) -> List[Any]:
    """Values of all leaves (nodes without children), in traversal order."""
    kwargs['emit'] = EmitRequirement.CHILD_COUNT
    return [info['value'] for info in traverse(root, order, **kwargs) if info['is_leaf']]


def get_tree_stats(root: Any, order: OrderSpec = TraversalOrder.IN_ORDER, **kwargs) -> Dict[str, Any]:
    """Get statistics about a tree.

    Returns:
        Dictionary with total/leaf/internal node counts, average branching
        and the peak continuation stack depth the traversal needed
    """
    kwargs['emit'] = EmitRequirement.CHILD_COUNT
    walk = traverse(root, order, **kwargs)
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'child_links': 0,
    }
    for info in walk:
        stats['total_nodes'] += 1
        stats['child_links'] += info['child_count']
        if info['is_leaf']:
            stats['leaf_nodes'] += 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    stats['average_branching'] = (
        stats['child_links'] / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )
    stats['peak_stack_depth'] = walk.peak_stack_depth
    return stats


# Helper functions

_ORDER_MAP = {
    'in': (TraversalOrder.IN_ORDER, TreeShape.BINARY),
    'inorder': (TraversalOrder.IN_ORDER, TreeShape.BINARY),
    'in_order': (TraversalOrder.IN_ORDER, TreeShape.BINARY),
    'pre': (TraversalOrder.PRE_ORDER, TreeShape.BINARY),
    'preorder': (TraversalOrder.PRE_ORDER, TreeShape.BINARY),
    'pre_order': (TraversalOrder.PRE_ORDER, TreeShape.BINARY),
    'dfs_pre': (TraversalOrder.PRE_ORDER, TreeShape.BINARY),
    'post': (TraversalOrder.POST_ORDER, TreeShape.BINARY),
    'postorder': (TraversalOrder.POST_ORDER, TreeShape.BINARY),
    'post_order': (TraversalOrder.POST_ORDER, TreeShape.BINARY),
    'dfs_post': (TraversalOrder.POST_ORDER, TreeShape.BINARY),
    'nary_pre': (TraversalOrder.PRE_ORDER, TreeShape.NARY),
    'nary_pre_order': (TraversalOrder.PRE_ORDER, TreeShape.NARY),
    'nary_post': (TraversalOrder.POST_ORDER, TreeShape.NARY),
    'nary_post_order': (TraversalOrder.POST_ORDER, TreeShape.NARY),
}


def _parse_order(order: OrderSpec) -> Tuple[TraversalOrder, TreeShape]:
    """Parse order from string or enum.

    Returns:
        (TraversalOrder, implied TreeShape)
    """
    if isinstance(order, TraversalOrder):
        return order, TreeShape.BINARY

    order_lower = order.lower().replace('-', '_') if isinstance(order, str) else str(order)
    if order_lower in _ORDER_MAP:
        return _ORDER_MAP[order_lower]

    raise ValueError(f"Unknown traversal order: {order}")


def _parse_emit(emit: EmitSpec) -> EmitRequirement:
    """Parse emit requirement from string or enum."""
    if isinstance(emit, EmitRequirement):
        return emit

    emit_lower = emit.lower().replace('-', '_') if isinstance(emit, str) else str(emit)
    for requirement in EmitRequirement:
        if requirement.value == emit_lower:
            return requirement

    raise ValueError(f"Unknown emit requirement: {emit}")


def _default_adapter(shape: TreeShape) -> TreeAdapter:
    if shape == TreeShape.NARY:
        return ChildrenAdapter()
    return AttributeAdapter()

