"""Data collection strategies for StackTreeLib.

The interpreter only signals that a node is ready. DataCollectors decide
what is produced for it, so the same traversal can hand out values, nodes,
or anything a caller computes from the node.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

from .adapter import TreeAdapter


class DataCollector(ABC):
    """Abstract base class for data collection strategies."""

    def __init__(self, adapter: TreeAdapter):
        """Initialize collector with an adapter.

        Args:
            adapter: TreeAdapter for reading node data
        """
        self.adapter = adapter

    @abstractmethod
    def collect(self, node: Any) -> Any:
        """Collect data from an emitted node.

        Args:
            node: The node the traversal just emitted

        Returns:
            Collected data (type depends on collector)
        """
        pass


class ValueCollector(DataCollector):
    """Collects the node's value. The default for ``traverse``."""

    def collect(self, node: Any) -> Any:
        return self.adapter.get_value(node)


class NodeCollector(DataCollector):
    """Collects the node itself."""

    def collect(self, node: Any) -> Any:
        return node


class ChildCountCollector(DataCollector):
    """Collects the value together with the number of present children.

    Useful for structure analysis such as counting leaves.
    """

    def collect(self, node: Any) -> Dict[str, Any]:
        child_count = sum(1 for child in self.adapter.get_children(node) if child is not None)
        return {
            'value': self.adapter.get_value(node),
            'child_count': child_count,
            'is_leaf': child_count == 0,
        }


class CustomCollector(DataCollector):
    """Collector using a user-defined function.

    Example:
        collector = CustomCollector(adapter, lambda node: node.value * 2)
    """

    def __init__(self, adapter: TreeAdapter, collect_func: Callable[[Any], Any]):
        """
        Args:
            adapter: TreeAdapter for the tree structure
            collect_func: Function taking an emitted node
        """
        super().__init__(adapter)
        self.collect_func = collect_func

    def collect(self, node: Any) -> Any:
        return self.collect_func(node)
