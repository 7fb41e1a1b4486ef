"""Execution planning for StackTreeLib.

The ExecutionPlan validates that a TraversalConfig can be satisfied by a
TreeAdapter and assembles the traverser and collector that carry it out.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config import EmitRequirement, TraversalConfig, TreeShape
from .core.adapter import TreeAdapter
from .core.collector import (
    ChildCountCollector,
    DataCollector,
    NodeCollector,
    ValueCollector,
)
from .core.interpreter import NOTHING, Phase, Trampoline
from .core.traverser import TreeTraverser, create_traverser
from .errors import CapabilityMismatchError

logger = logging.getLogger(__name__)


class ExecutionPlan:
    """Validated execution plan for a traversal.

    Bridges user intent (TraversalConfig) and execution. Compatibility is
    checked up front, before any node is read.
    """

    def __init__(self, config: TraversalConfig, adapter: TreeAdapter):
        """Create and validate an execution plan.

        Args:
            config: User's traversal configuration
            adapter: Tree adapter for the specific tree type

        Raises:
            CapabilityMismatchError: If adapter can't satisfy config
        """
        self.config = config
        self.adapter = adapter

        config_errors = config.validate()
        if config_errors:
            raise CapabilityMismatchError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        capability_issues = self._validate_capabilities()
        if capability_issues:
            raise CapabilityMismatchError(
                f"Adapter limitations: {'; '.join(capability_issues)}"
            )

        self.traverser = self._select_traverser()
        self.collector = self._select_collector()
        self.trampoline: Optional[Trampoline] = None

    def _validate_capabilities(self) -> List[str]:
        """Validate adapter can satisfy configuration requirements.

        Returns:
            List of capability issues (empty if all satisfied)
        """
        issues = []
        if self.config.shape == TreeShape.BINARY and not self.adapter.supports_binary():
            issues.append(
                f"{self.adapter.__class__.__name__} has no left/right slots; "
                f"use TreeShape.NARY or a binary adapter"
            )
        return issues

    def _select_traverser(self) -> TreeTraverser:
        return create_traverser(
            self.config.strategy_name,
            self.adapter,
            detect_cycles=self.config.safety.detect_cycles,
        )

    def _select_collector(self) -> DataCollector:
        if self.config.emit == EmitRequirement.CUSTOM:
            return self.config.custom_collector

        collector_map = {
            EmitRequirement.VALUE: ValueCollector,
            EmitRequirement.NODE: NodeCollector,
            EmitRequirement.CHILD_COUNT: ChildCountCollector,
        }
        return collector_map[self.config.emit](self.adapter)

    def start(self, root: Any) -> Trampoline:
        """Create a fresh interpreter for one traversal of ``root``.

        The most recent one is kept on ``self.trampoline`` for inspection.
        """
        self.trampoline = self.traverser.build(root)
        return self.trampoline

    def execute(self, root: Any) -> Iterator[Tuple[Any, Any]]:
        """Execute the traversal plan.

        Args:
            root: Root node, or None for an empty tree

        Yields:
            Tuples of (node, collected_data)
        """
        return self.drive(self.start(root))

    def drive(self, trampoline: Trampoline) -> Iterator[Tuple[Any, Any]]:
        """Pull nodes out of ``trampoline``, applying limits and collection.

        Yields:
            Tuples of (node, collected_data)
        """
        safety = self.config.safety
        on_emit = self.config.on_emit
        collect = self.collector.collect

        logger.debug("Executing plan: %s", self.get_summary())
        while trampoline.phase is not Phase.HALTED:
            if not safety.check_node_limit(trampoline.emitted):
                logger.debug("Node limit %d reached, stopping", safety.max_nodes)
                return
            node = trampoline.step()
            if node is NOTHING:
                continue
            data = collect(node)
            if on_emit is not None:
                on_emit(node, data)
            yield (node, data)
        logger.debug("Plan finished: emitted=%d peak_depth=%d",
                     trampoline.emitted, trampoline.peak_depth)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan.

        Useful for debugging and logging.

        Returns:
            Dictionary with plan details
        """
        return {
            'order': self.config.order.value,
            'shape': self.config.shape.value,
            'emit': self.config.emit.value,
            'detect_cycles': self.config.safety.detect_cycles,
            'max_nodes': self.config.safety.max_nodes,
            'adapter': self.adapter.__class__.__name__,
            'traverser': self.traverser.__class__.__name__,
            'collector': self.collector.__class__.__name__,
        }
