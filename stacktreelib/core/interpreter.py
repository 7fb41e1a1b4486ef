"""Iterative interpreter (trampoline) for StackTreeLib.

The trampoline replaces the interpreter's call stack with an owned
ContinuationStack. Each traversal order is a Schema: the frame variants its
recursive form would suspend, plus the dispatch that resumes them. The loop
itself is order-agnostic and has two transitions:

    descend  current node present: let the schema push frames and move on
    resume   current node absent: pop the top frame and let the schema
             resume it; an empty stack means the traversal is complete

A transition may signal that a node is ready to be emitted. What emitting
means is left to the driver.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type

from ..errors import CyclicStructureError
from .adapter import TreeAdapter
from .continuation import (
    ContinuationStack,
    DescendRight,
    Emit,
    EmitThenRight,
    Frame,
    NextChild,
    NextChildThenEmit,
    RightThenEmit,
)

logger = logging.getLogger(__name__)


class _Nothing:
    """Sentinel returned by a transition that emits nothing."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False


NOTHING = _Nothing()

# Returned by next() once a child iterator is used up; None is an absent child
_EXHAUSTED = object()


class Phase(Enum):
    """What the next transition will do."""
    DESCENDING = "descending"   # current node present
    RESUMING = "resuming"       # current node absent, frames pending
    HALTED = "halted"           # nothing left to do


class TraversalState:
    """Mutable state of one traversal: (current node, continuation stack) + phase.

    Created fresh per traversal and never shared.
    """

    __slots__ = ("current", "stack", "phase")

    def __init__(self, root: Any):
        self.current = root
        self.stack = ContinuationStack()
        self.phase = Phase.HALTED
        self.settle()

    def settle(self) -> Phase:
        """Recompute the phase from current node and stack."""
        if self.current is not None:
            self.phase = Phase.DESCENDING
        elif self.stack:
            self.phase = Phase.RESUMING
        else:
            self.phase = Phase.HALTED
        return self.phase

    def __repr__(self) -> str:
        return f"TraversalState(phase={self.phase.value}, depth={len(self.stack)})"


class CycleGuard:
    """Tracks the nodes whose subtrees are still being walked.

    Every node is recorded with the stack length at the moment it was
    entered. All work inside that node's subtree happens at or above that
    length, so once a pop takes the stack below it the node is finished.
    Entering a node that is still recorded means the structure loops back
    on itself. Memory is bounded by tree height.
    """

    __slots__ = ("_path", "_active")

    def __init__(self) -> None:
        self._path: List[Tuple[Any, int]] = []
        self._active: Dict[int, Any] = {}

    def enter(self, node: Any, level: int) -> None:
        """Record ``node`` as entered at stack length ``level``.

        Raises:
            CyclicStructureError: If ``node`` is still active
        """
        if id(node) in self._active:
            logger.debug("Cycle guard tripped at stack depth %d", level)
            raise CyclicStructureError(node, level)
        self._path.append((node, level))
        self._active[id(node)] = node

    def release(self, level: int) -> None:
        """Forget every node entered above stack length ``level``."""
        path = self._path
        while path and path[-1][1] > level:
            node, _ = path.pop()
            del self._active[id(node)]

    def __len__(self) -> int:
        return len(self._path)


class Schema(ABC):
    """Variant set and dispatch for one traversal order.

    ``descend`` handles a present current node, ``resume`` handles a popped
    frame. Both mutate the state in place and return the node to emit, or
    NOTHING.
    """

    name = ""
    frame_types: Tuple[Type[Frame], ...] = ()
    requires_binary = False

    def __init__(self, adapter: TreeAdapter):
        self.adapter = adapter

    @abstractmethod
    def descend(self, node: Any, state: TraversalState) -> Any:
        pass

    @abstractmethod
    def resume(self, frame: Frame, state: TraversalState) -> Any:
        pass

    def _unknown(self, frame: Frame) -> TypeError:
        return TypeError(f"{self.__class__.__name__} cannot resume {frame.__class__.__name__}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.adapter!r})"


class InOrderSchema(Schema):
    """Left subtree, node, right subtree.

    The recursive form suspends exactly one computation per node: "emit
    this node, then walk its right subtree". Descending pushes that frame
    and moves left; resuming emits and moves right.
    """

    name = "in_order"
    frame_types = (EmitThenRight,)
    requires_binary = True

    def descend(self, node: Any, state: TraversalState) -> Any:
        state.stack.push(EmitThenRight(node))
        state.current = self.adapter.get_left(node)
        return NOTHING

    def resume(self, frame: Frame, state: TraversalState) -> Any:
        if isinstance(frame, EmitThenRight):
            state.current = self.adapter.get_right(frame.node)
            return frame.node
        raise self._unknown(frame)


class PreOrderSchema(Schema):
    """Node, left subtree, right subtree."""

    name = "pre_order"
    frame_types = (DescendRight,)
    requires_binary = True

    def descend(self, node: Any, state: TraversalState) -> Any:
        state.stack.push(DescendRight(node))
        state.current = self.adapter.get_left(node)
        return node

    def resume(self, frame: Frame, state: TraversalState) -> Any:
        if isinstance(frame, DescendRight):
            state.current = self.adapter.get_right(frame.node)
            return NOTHING
        raise self._unknown(frame)


class PostOrderSchema(Schema):
    """Left subtree, right subtree, node.

    Two suspended shapes: after the left subtree (walk right next) and
    after the right subtree (emit next).
    """

    name = "post_order"
    frame_types = (RightThenEmit, Emit)
    requires_binary = True

    def descend(self, node: Any, state: TraversalState) -> Any:
        state.stack.push(RightThenEmit(node))
        state.current = self.adapter.get_left(node)
        return NOTHING

    def resume(self, frame: Frame, state: TraversalState) -> Any:
        if isinstance(frame, RightThenEmit):
            state.stack.push(Emit(frame.node))
            state.current = self.adapter.get_right(frame.node)
            return NOTHING
        if isinstance(frame, Emit):
            return frame.node
        raise self._unknown(frame)


class NaryPreOrderSchema(Schema):
    """Node, then each child subtree in order."""

    name = "nary_pre_order"
    frame_types = (NextChild,)

    def descend(self, node: Any, state: TraversalState) -> Any:
        state.stack.push(NextChild(node, iter(self.adapter.get_children(node))))
        state.current = None
        return node

    def resume(self, frame: Frame, state: TraversalState) -> Any:
        if isinstance(frame, NextChild) and not isinstance(frame, NextChildThenEmit):
            child = next(frame.remaining, _EXHAUSTED)
            if child is not _EXHAUSTED:
                # An absent child leaves current empty, so the frame resumes again
                state.stack.push(frame)
                state.current = child
            return NOTHING
        raise self._unknown(frame)


class NaryPostOrderSchema(Schema):
    """Each child subtree in order, then the node."""

    name = "nary_post_order"
    frame_types = (NextChildThenEmit,)

    def descend(self, node: Any, state: TraversalState) -> Any:
        state.stack.push(NextChildThenEmit(node, iter(self.adapter.get_children(node))))
        state.current = None
        return NOTHING

    def resume(self, frame: Frame, state: TraversalState) -> Any:
        if isinstance(frame, NextChildThenEmit):
            child = next(frame.remaining, _EXHAUSTED)
            if child is _EXHAUSTED:
                return frame.node
            state.stack.push(frame)
            state.current = child
            return NOTHING
        raise self._unknown(frame)


class Trampoline:
    """Single loop that consumes continuation frames.

    Uses O(1) interpreter state besides the explicit stack, whose length is
    bounded by the height of the tree. Produces nodes in exactly the order
    the recursive form of ``schema`` would.

    Example:
        >>> tramp = Trampoline(root, InOrderSchema(AttributeAdapter()))
        >>> [node.value for node in tramp.run()]
    """

    def __init__(self, root: Any, schema: Schema, detect_cycles: bool = False):
        """
        Args:
            root: Root node, or None for an empty tree
            schema: Variant set and dispatch for the traversal order
            detect_cycles: Raise CyclicStructureError when a node is re-entered
        """
        self.schema = schema
        self.state = TraversalState(root)
        self.guard: Optional[CycleGuard] = CycleGuard() if detect_cycles else None
        self.emitted = 0

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def finished(self) -> bool:
        return self.state.phase is Phase.HALTED

    @property
    def depth(self) -> int:
        """Current continuation stack length."""
        return len(self.state.stack)

    @property
    def peak_depth(self) -> int:
        """Largest continuation stack length reached so far."""
        return self.state.stack.peak

    def snapshot(self) -> Tuple[Any, Tuple[Any, ...]]:
        """Return ``(current node, stack nodes top to bottom)``."""
        return self.state.current, self.state.stack.nodes()

    def step(self) -> Any:
        """Perform one transition.

        Returns:
            The node that became ready to emit, or NOTHING
        """
        state = self.state
        if state.phase is Phase.DESCENDING:
            node = state.current
            if self.guard is not None:
                self.guard.enter(node, len(state.stack))
            result = self.schema.descend(node, state)
        elif state.phase is Phase.RESUMING:
            frame = state.stack.pop()
            if self.guard is not None:
                self.guard.release(len(state.stack))
            result = self.schema.resume(frame, state)
        else:
            return NOTHING

        state.settle()
        if result is not NOTHING:
            self.emitted += 1
        return result

    def run(self) -> Iterator[Any]:
        """Generator form: yield nodes until the traversal halts."""
        logger.debug("Trampoline start: schema=%s empty=%s",
                     self.schema.name, self.state.current is None)
        state = self.state
        step = self.step
        while state.phase is not Phase.HALTED:
            node = step()
            if node is not NOTHING:
                yield node
        logger.debug("Trampoline halted: schema=%s emitted=%d peak_depth=%d",
                     self.schema.name, self.emitted, self.peak_depth)

    def __repr__(self) -> str:
        return (f"Trampoline(schema={self.schema.name}, phase={self.phase.value}, "
                f"depth={self.depth}, emitted={self.emitted})")
