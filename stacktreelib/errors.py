"""Exception hierarchy for StackTreeLib.

Empty, skewed and duplicate-valued trees are valid input, not errors.
Exceptions raised by adapters are never wrapped; they propagate unchanged.
"""

from typing import Any, Optional


class StackTreeError(Exception):
    """Base class for all StackTreeLib errors."""
    pass


class CyclicStructureError(StackTreeError):
    """Raised when cycle checking is enabled and a node is re-entered.

    The node graph must be a tree. With ``detect_cycles=True`` the
    interpreter aborts the first time it is about to descend into a node
    that is still active: held by a live frame, or an ancestor whose
    subtree is still being walked. Values already emitted are not rolled
    back.
    """

    def __init__(self, node: Any, depth: int):
        """
        Args:
            node: The node that was entered a second time
            depth: Continuation stack length at the moment of re-entry
        """
        self.node = node
        self.depth = depth
        # Rendering a cyclic node would never terminate, so name it by identity
        super().__init__(
            f"Cycle detected: {type(node).__name__} at 0x{id(node):x} "
            f"re-entered at stack depth {depth}"
        )


class CapabilityMismatchError(StackTreeError):
    """Raised when configuration requirements can't be met by the adapter."""
    pass


class TreeSyntaxError(StackTreeError, ValueError):
    """Raised for malformed ``value(left,right)`` tree notation."""

    def __init__(self, message: str, text: str, offset: Optional[int] = None):
        self.text = text
        self.offset = offset
        if offset is not None:
            message = f"{message} at offset {offset} in {text!r}"
        super().__init__(message)
