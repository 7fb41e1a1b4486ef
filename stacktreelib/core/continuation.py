"""Continuations as data for StackTreeLib.

A recursive traversal suspends work every time it recurses: "after the left
subtree, emit this node and walk its right subtree". Instead of capturing
that work in a closure, each suspended computation is stored as a frame
holding only the data needed to rebuild the call. There is one frame type
per distinct shape of suspended computation, derived from the call sites of
the recursive algorithm:

    in-order          EmitThenRight(node)
    pre-order         DescendRight(node)
    post-order        RightThenEmit(node), Emit(node)
    N-ary pre-order   NextChild(node, remaining)
    N-ary post-order  NextChildThenEmit(node, remaining)

Two encodings of the in-order continuation live here. The linked form
(``Pending(node, next)`` ending in ``DONE``) mirrors the nested closures
one-for-one. Because a chain is only ever consumed top-first and tails are
never shared, the interpreter stores it flat in a ContinuationStack, where
``next`` is simply the frame below.
"""

from typing import Any, Iterator, List, Optional, Tuple


class Frame:
    """One unit of suspended work in the continuation stack."""

    __slots__ = ("node",)

    def __init__(self, node: Any):
        self.node = node

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(<{type(self.node).__name__} at 0x{id(self.node):x}>)"


class EmitThenRight(Frame):
    """In-order: emit ``node``, then traverse ``node``'s right subtree."""
    __slots__ = ()


class DescendRight(Frame):
    """Pre-order: ``node`` is already emitted; traverse its right subtree."""
    __slots__ = ()


class RightThenEmit(Frame):
    """Post-order: left subtree done; traverse the right one, then emit."""
    __slots__ = ()


class Emit(Frame):
    """Post-order: both subtrees done; emit ``node``."""
    __slots__ = ()


class NextChild(Frame):
    """N-ary pre-order: traverse the next of ``node``'s remaining children.

    ``remaining`` is the adapter's child iterator, advanced one child per
    resume. The frame is pushed back while children may remain.
    """

    __slots__ = ("remaining",)

    def __init__(self, node: Any, remaining: Iterator[Any]):
        super().__init__(node)
        self.remaining = remaining


class NextChildThenEmit(NextChild):
    """N-ary post-order: traverse the next child, or emit ``node`` when none remain."""
    __slots__ = ()


class Done:
    """The empty continuation: nothing left to do."""

    __slots__ = ()
    _instance: Optional["Done"] = None

    def __new__(cls) -> "Done":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "DONE"


DONE = Done()


class Pending:
    """Linked in-order continuation: emit ``node``, walk its right subtree, then ``next``.

    Data stand-in for the closure ``lambda: (emit(node.value), walk(node.right, next))``.
    Iterating a chain yields its nodes from the top (next to resume) down.
    Equality is by node identity along the whole chain.
    """

    __slots__ = ("node", "next")

    def __init__(self, node: Any, next: "Continuation"):
        object.__setattr__(self, "node", node)
        object.__setattr__(self, "next", next)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Pending is immutable")

    def __iter__(self) -> Iterator[Any]:
        link: Continuation = self
        while isinstance(link, Pending):
            yield link.node
            link = link.next

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Pending, Done)):
            return NotImplemented
        mine, theirs = list(self), list(other)
        return len(mine) == len(theirs) and all(a is b for a, b in zip(mine, theirs))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Pending(<{len(self)} frames>)"


# A continuation is either the empty one or a pending frame.
Continuation = Any


class ContinuationStack:
    """Flat LIFO store of frames, owned by exactly one traversal.

    Push and pop happen at the top only. ``peak`` records the high-water
    mark, which is the auxiliary memory the traversal needed.
    """

    __slots__ = ("_frames", "peak")

    def __init__(self) -> None:
        self._frames: List[Frame] = []
        self.peak = 0

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)
        if len(self._frames) > self.peak:
            self.peak = len(self._frames)

    def pop(self) -> Frame:
        """Remove and return the top frame.

        Raises:
            IndexError: If the stack is empty
        """
        if not self._frames:
            raise IndexError("pop from empty continuation stack")
        return self._frames.pop()

    def top(self) -> Optional[Frame]:
        return self._frames[-1] if self._frames else None

    def clear(self) -> None:
        self._frames.clear()

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        """Iterate frames from the top (next to resume) to the bottom."""
        return reversed(self._frames)

    def nodes(self) -> Tuple[Any, ...]:
        """Nodes held by the frames, top to bottom."""
        return tuple(frame.node for frame in reversed(self._frames))

    def to_chain(self) -> Continuation:
        """Rebuild the linked in-order continuation this stack encodes.

        Raises:
            TypeError: If the stack holds frames other than EmitThenRight
        """
        chain: Continuation = DONE
        for frame in self._frames:
            if not isinstance(frame, EmitThenRight):
                raise TypeError(
                    f"Only in-order stacks have a linked form, found {frame.__class__.__name__}"
                )
            chain = Pending(frame.node, chain)
        return chain

    @classmethod
    def from_chain(cls, chain: Continuation) -> "ContinuationStack":
        """Flatten a linked in-order continuation into a stack."""
        stack = cls()
        for node in reversed(list(chain)):
            stack.push(EmitThenRight(node))
        return stack

    def __repr__(self) -> str:
        return f"ContinuationStack(depth={len(self._frames)}, peak={self.peak})"
