"""Configuration system for StackTreeLib.

This module defines how users specify their traversal requirements: the
order, the tree shape, what to produce per node, and safety limits.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional


class TraversalOrder(Enum):
    """Where a node is emitted relative to its subtrees."""
    IN_ORDER = "in"       # Left, node, right (binary only)
    PRE_ORDER = "pre"     # Node before children
    POST_ORDER = "post"   # Children before node


class TreeShape(Enum):
    """How children are read from nodes."""
    BINARY = "binary"     # Distinct left/right slots
    NARY = "nary"         # Ordered sequence of children


class EmitRequirement(Enum):
    """Specifies what is produced for each emitted node."""
    VALUE = "value"               # The node's value
    NODE = "node"                 # The node object
    CHILD_COUNT = "child_count"   # Value plus number of children
    CUSTOM = "custom"             # User-defined collector


@dataclass
class SafetyConfig:
    """Guards for untrusted or unusually large structures."""

    detect_cycles: bool = False         # Raise CyclicStructureError on re-entry
    max_nodes: Optional[int] = None     # Stop after emitting this many nodes

    def check_node_limit(self, node_count: int) -> bool:
        """Check if another node may be emitted.

        Args:
            node_count: Number of nodes emitted so far

        Returns:
            True if within limits or no limit set
        """
        if self.max_nodes is None:
            return True
        return node_count < self.max_nodes


@dataclass
class TraversalConfig:
    """Complete configuration for a traversal.

    The ExecutionPlan validates this against the adapter's capabilities.
    """

    # Traversal algorithm
    order: TraversalOrder = TraversalOrder.IN_ORDER
    shape: TreeShape = TreeShape.BINARY

    # Data collection
    emit: EmitRequirement = EmitRequirement.VALUE
    custom_collector: Optional[Any] = None  # Custom collector instance

    # Safety
    safety: SafetyConfig = field(default_factory=SafetyConfig)

    # Called with (node, data) for every emitted node
    on_emit: Optional[Callable[[Any, Any], None]] = None

    @property
    def strategy_name(self) -> str:
        """Name understood by create_traverser."""
        if self.shape == TreeShape.NARY:
            return f"nary_{self.order.value}"
        return self.order.value

    # Convenience constructors for common configurations

    @classmethod
    def in_order(cls, emit: EmitRequirement = EmitRequirement.VALUE) -> 'TraversalConfig':
        """Binary in-order, the canonical traversal."""
        return cls(order=TraversalOrder.IN_ORDER, shape=TreeShape.BINARY, emit=emit)

    @classmethod
    def guarded(cls,
                order: TraversalOrder = TraversalOrder.IN_ORDER,
                max_nodes: Optional[int] = None) -> 'TraversalConfig':
        """Binary traversal with cycle detection and an optional node limit.

        Args:
            order: Traversal order
            max_nodes: Stop after this many nodes (None = unlimited)
        """
        return cls(
            order=order,
            safety=SafetyConfig(detect_cycles=True, max_nodes=max_nodes),
        )

    @classmethod
    def nary(cls, order: TraversalOrder = TraversalOrder.PRE_ORDER) -> 'TraversalConfig':
        """Traversal over nodes with any number of children."""
        return cls(order=order, shape=TreeShape.NARY)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.shape == TreeShape.NARY and self.order == TraversalOrder.IN_ORDER:
            errors.append("in-order is only defined for binary trees")

        if self.safety.max_nodes is not None and self.safety.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if not isinstance(self.emit, EmitRequirement):
            errors.append(f"emit must be an EmitRequirement, got {self.emit!r}")

        if self.emit == EmitRequirement.CUSTOM and self.custom_collector is None:
            errors.append("custom_collector required when emit is CUSTOM")

        return errors
