"""StackTreeLib - Stack-Safe Tree Traversal Library.

StackTreeLib walks recursive tree structures without recursion. The work a
recursive traversal would leave on the call stack is stored as data frames
in an explicit continuation stack and consumed by a single loop, so trees
of any depth can be traversed in exactly the order the recursive algorithm
would produce.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from stacktreelib import traverse, parse_tree

    tree = parse_tree("4(2(1,3),5)")
    list(traverse(tree))            # [1, 2, 3, 4, 5]
    list(traverse(tree, "post"))    # [1, 3, 2, 5, 4]
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

# Core components
from .core.node import BinaryNode, NaryNode
from .core.adapter import (
    TreeAdapter,
    BinaryTreeAdapter,
    AttributeAdapter,
    ChildrenAdapter,
    MappingAdapter,
)
from .core.continuation import ContinuationStack, Done, DONE, Pending
from .core.interpreter import Phase, Trampoline
from .core.traverser import (
    TreeTraverser,
    InOrderTraverser,
    PreOrderTraverser,
    PostOrderTraverser,
    NaryPreOrderTraverser,
    NaryPostOrderTraverser,
    create_traverser,
)
from .core.collector import (
    DataCollector,
    ValueCollector,
    NodeCollector,
    ChildCountCollector,
    CustomCollector,
)

# Configuration and planning
from .config import (
    TraversalConfig,
    TraversalOrder,
    TreeShape,
    EmitRequirement,
    SafetyConfig,
)
from .planning import ExecutionPlan
from .errors import (
    StackTreeError,
    CyclicStructureError,
    CapabilityMismatchError,
    TreeSyntaxError,
)

# Builders
from .builders import (
    parse_tree,
    format_tree,
    left_chain,
    right_chain,
    balanced,
    from_nested,
    nary_from_nested,
)

# High-level API
from .api import (
    Traversal,
    traverse,
    traverse_nodes,
    run_config,
    collect,
    emit_to,
    count_nodes,
    find_nodes,
    get_leaf_values,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Core
    'BinaryNode',
    'NaryNode',
    'TreeAdapter',
    'BinaryTreeAdapter',
    'AttributeAdapter',
    'ChildrenAdapter',
    'MappingAdapter',
    'ContinuationStack',
    'Done',
    'DONE',
    'Pending',
    'Phase',
    'Trampoline',
    'TreeTraverser',
    'InOrderTraverser',
    'PreOrderTraverser',
    'PostOrderTraverser',
    'NaryPreOrderTraverser',
    'NaryPostOrderTraverser',
    'create_traverser',
    'DataCollector',
    'ValueCollector',
    'NodeCollector',
    'ChildCountCollector',
    'CustomCollector',
    # Config
    'TraversalConfig',
    'TraversalOrder',
    'TreeShape',
    'EmitRequirement',
    'SafetyConfig',
    'ExecutionPlan',
    # Errors
    'StackTreeError',
    'CyclicStructureError',
    'CapabilityMismatchError',
    'TreeSyntaxError',
    # Builders
    'parse_tree',
    'format_tree',
    'left_chain',
    'right_chain',
    'balanced',
    'from_nested',
    'nary_from_nested',
    # API
    'Traversal',
    'traverse',
    'traverse_nodes',
    'run_config',
    'collect',
    'emit_to',
    'count_nodes',
    'find_nodes',
    'get_leaf_values',
    'get_tree_stats',
]
