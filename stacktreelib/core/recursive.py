"""Recursive reference traversals.

These are the forms the trampoline is derived from, kept as oracles for
checking it. They all recurse on the interpreter's call stack, so they
raise RecursionError on trees deeper than ``sys.getrecursionlimit()``.
Use the engine in ``interpreter`` for anything that may be deep.

Three stages of the same in-order algorithm are provided:

1. ``recursive_in_order``: direct recursion.
2. ``cps_in_order``: continuation-passing style, the rest of the work
   captured in closures.
3. ``defunctionalized_in_order``: the closures replaced by the linked
   ``Pending``/``DONE`` data chain and an ``apply`` that dispatches on it.
   The trampoline is stage 3 with the remaining recursion turned into a
   loop.
"""

from typing import Any, Callable, List, Optional, Tuple

from .adapter import TreeAdapter
from .continuation import DONE, Continuation, Pending


def recursive_in_order(root: Any, adapter: TreeAdapter) -> List[Any]:
    """Direct recursive in-order traversal returning nodes."""
    out: List[Any] = []

    def walk(node: Any) -> None:
        if node is None:
            return
        walk(adapter.get_left(node))
        out.append(node)
        walk(adapter.get_right(node))

    walk(root)
    return out


def recursive_pre_order(root: Any, adapter: TreeAdapter) -> List[Any]:
    out: List[Any] = []

    def walk(node: Any) -> None:
        if node is None:
            return
        out.append(node)
        walk(adapter.get_left(node))
        walk(adapter.get_right(node))

    walk(root)
    return out


def recursive_post_order(root: Any, adapter: TreeAdapter) -> List[Any]:
    out: List[Any] = []

    def walk(node: Any) -> None:
        if node is None:
            return
        walk(adapter.get_left(node))
        walk(adapter.get_right(node))
        out.append(node)

    walk(root)
    return out


def recursive_nary_pre_order(root: Any, adapter: TreeAdapter) -> List[Any]:
    out: List[Any] = []

    def walk(node: Any) -> None:
        out.append(node)
        for child in adapter.get_children(node):
            if child is not None:
                walk(child)

    if root is not None:
        walk(root)
    return out


def recursive_nary_post_order(root: Any, adapter: TreeAdapter) -> List[Any]:
    out: List[Any] = []

    def walk(node: Any) -> None:
        for child in adapter.get_children(node):
            if child is not None:
                walk(child)
        out.append(node)

    if root is not None:
        walk(root)
    return out


def cps_in_order(root: Any, adapter: TreeAdapter) -> List[Any]:
    """In-order traversal in continuation-passing style.

    Every call receives ``k``, the rest of the computation, as a closure.
    """
    out: List[Any] = []

    def walk(node: Any, k: Callable[[], None]) -> None:
        if node is None:
            k()
            return

        def after_left() -> None:
            out.append(node)
            walk(adapter.get_right(node), k)

        walk(adapter.get_left(node), after_left)

    walk(root, lambda: None)
    return out


CallRecorder = Callable[[Any, Continuation], None]


def defunctionalized_in_order(root: Any,
                              adapter: TreeAdapter,
                              on_call: Optional[CallRecorder] = None) -> List[Any]:
    """In-order traversal with the continuation stored as data.

    ``after_left`` from the CPS form only ever closes over ``node`` and
    ``k``, so it becomes ``Pending(node, k)``; the initial no-op
    continuation becomes ``DONE``.

    Args:
        root: Root node or None
        adapter: Binary adapter for the structure
        on_call: Called as ``on_call(node, k)`` at every entry to ``walk``,
            including entries with an absent node

    Returns:
        Nodes in in-order
    """
    out: List[Any] = []

    def walk(node: Any, k: Continuation) -> None:
        if on_call is not None:
            on_call(node, k)
        if node is None:
            apply(k)
            return
        walk(adapter.get_left(node), Pending(node, k))

    def apply(k: Continuation) -> None:
        if k is DONE:
            return
        if isinstance(k, Pending):
            out.append(k.node)
            walk(adapter.get_right(k.node), k.next)
            return
        raise TypeError(f"Not a continuation: {k!r}")

    walk(root, DONE)
    return out


def recorded_calls(root: Any, adapter: TreeAdapter) -> List[Tuple[Any, Tuple[Any, ...]]]:
    """Every ``(node, continuation nodes top to bottom)`` the defunctionalized form walks."""
    calls: List[Tuple[Any, Tuple[Any, ...]]] = []
    defunctionalized_in_order(root, adapter, lambda node, k: calls.append((node, tuple(k))))
    return calls
