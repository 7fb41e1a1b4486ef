"""Core abstractions for StackTreeLib.

Nodes and adapters describe the input, continuation frames describe the
suspended work, the trampoline consumes them, and traversers/collectors
wrap the trampoline for callers.
"""

from .node import BinaryNode, NaryNode
from .adapter import (
    TreeAdapter,
    BinaryTreeAdapter,
    AttributeAdapter,
    ChildrenAdapter,
    MappingAdapter,
)
from .continuation import (
    Frame,
    EmitThenRight,
    DescendRight,
    RightThenEmit,
    Emit,
    NextChild,
    NextChildThenEmit,
    Done,
    DONE,
    Pending,
    ContinuationStack,
)
from .interpreter import (
    NOTHING,
    Phase,
    TraversalState,
    CycleGuard,
    Schema,
    InOrderSchema,
    PreOrderSchema,
    PostOrderSchema,
    NaryPreOrderSchema,
    NaryPostOrderSchema,
    Trampoline,
)
from .traverser import (
    TreeTraverser,
    InOrderTraverser,
    PreOrderTraverser,
    PostOrderTraverser,
    NaryPreOrderTraverser,
    NaryPostOrderTraverser,
    create_traverser,
)
from .collector import (
    DataCollector,
    ValueCollector,
    NodeCollector,
    ChildCountCollector,
    CustomCollector,
)

__all__ = [
    "BinaryNode",
    "NaryNode",
    "TreeAdapter",
    "BinaryTreeAdapter",
    "AttributeAdapter",
    "ChildrenAdapter",
    "MappingAdapter",
    "Frame",
    "EmitThenRight",
    "DescendRight",
    "RightThenEmit",
    "Emit",
    "NextChild",
    "NextChildThenEmit",
    "Done",
    "DONE",
    "Pending",
    "ContinuationStack",
    "NOTHING",
    "Phase",
    "TraversalState",
    "CycleGuard",
    "Schema",
    "InOrderSchema",
    "PreOrderSchema",
    "PostOrderSchema",
    "NaryPreOrderSchema",
    "NaryPostOrderSchema",
    "Trampoline",
    "TreeTraverser",
    "InOrderTraverser",
    "PreOrderTraverser",
    "PostOrderTraverser",
    "NaryPreOrderTraverser",
    "NaryPostOrderTraverser",
    "create_traverser",
    "DataCollector",
    "ValueCollector",
    "NodeCollector",
    "ChildCountCollector",
    "CustomCollector",
]
