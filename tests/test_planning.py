"""Unit tests for configuration and execution planning."""

import logging
import unittest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from stacktreelib import (
    AttributeAdapter,
    CapabilityMismatchError,
    ChildCountCollector,
    ChildrenAdapter,
    CustomCollector,
    EmitRequirement,
    ExecutionPlan,
    InOrderTraverser,
    NaryPostOrderTraverser,
    NodeCollector,
    SafetyConfig,
    TraversalConfig,
    TraversalOrder,
    TreeShape,
    ValueCollector,
    parse_tree,
)


class TestTraversalConfig(unittest.TestCase):
    """Test configuration defaults, constructors and validation."""

    def test_defaults(self):
        config = TraversalConfig()

        self.assertEqual(config.order, TraversalOrder.IN_ORDER)
        self.assertEqual(config.shape, TreeShape.BINARY)
        self.assertEqual(config.emit, EmitRequirement.VALUE)
        self.assertFalse(config.safety.detect_cycles)
        self.assertIsNone(config.safety.max_nodes)
        self.assertEqual(config.validate(), [])

    def test_strategy_name(self):
        self.assertEqual(TraversalConfig().strategy_name, "in")
        self.assertEqual(TraversalConfig(order=TraversalOrder.POST_ORDER).strategy_name, "post")
        self.assertEqual(TraversalConfig.nary().strategy_name, "nary_pre")

    def test_guarded(self):
        config = TraversalConfig.guarded(TraversalOrder.PRE_ORDER, max_nodes=10)

        self.assertEqual(config.order, TraversalOrder.PRE_ORDER)
        self.assertTrue(config.safety.detect_cycles)
        self.assertEqual(config.safety.max_nodes, 10)

    def test_validation_collects_every_problem(self):
        config = TraversalConfig(
            shape=TreeShape.NARY,
            emit=EmitRequirement.CUSTOM,
            safety=SafetyConfig(max_nodes=-1),
        )

        self.assertEqual(config.validate(), [
            "in-order is only defined for binary trees",
            "max_nodes must be positive",
            "custom_collector required when emit is CUSTOM",
        ])

    def test_emit_must_be_enum(self):
        config = TraversalConfig(emit="value")

        self.assertEqual(config.validate(), ["emit must be an EmitRequirement, got 'value'"])
        with self.assertRaises(CapabilityMismatchError):
            ExecutionPlan(config, AttributeAdapter())

    def test_node_limit(self):
        self.assertTrue(SafetyConfig().check_node_limit(10 ** 9))
        limited = SafetyConfig(max_nodes=2)
        self.assertTrue(limited.check_node_limit(1))
        self.assertFalse(limited.check_node_limit(2))


class TestExecutionPlan(unittest.TestCase):
    """Test plan validation and assembly."""

    def setUp(self):
        self.tree = parse_tree("4(2(1,3),5)")

    def test_assembles_traverser_and_collector(self):
        plan = ExecutionPlan(TraversalConfig(), AttributeAdapter())

        self.assertIsInstance(plan.traverser, InOrderTraverser)
        self.assertIsInstance(plan.collector, ValueCollector)
        self.assertIsNone(plan.trampoline)

    def test_collector_per_requirement(self):
        adapter = AttributeAdapter()
        cases = [
            (EmitRequirement.NODE, NodeCollector),
            (EmitRequirement.CHILD_COUNT, ChildCountCollector),
        ]
        for emit, collector_class in cases:
            plan = ExecutionPlan(TraversalConfig(emit=emit), adapter)
            self.assertIsInstance(plan.collector, collector_class)

        custom = CustomCollector(adapter, lambda node: node)
        plan = ExecutionPlan(TraversalConfig(emit=EmitRequirement.CUSTOM, custom_collector=custom), adapter)
        self.assertIs(plan.collector, custom)

    def test_nary_plan(self):
        plan = ExecutionPlan(TraversalConfig.nary(TraversalOrder.POST_ORDER), ChildrenAdapter())
        self.assertIsInstance(plan.traverser, NaryPostOrderTraverser)

    def test_binary_shape_needs_binary_adapter(self):
        with self.assertRaises(CapabilityMismatchError) as ctx:
            ExecutionPlan(TraversalConfig(), ChildrenAdapter())
        self.assertIn("Adapter limitations", str(ctx.exception))
        self.assertIn("ChildrenAdapter has no left/right slots", str(ctx.exception))

    def test_invalid_config(self):
        with self.assertRaises(CapabilityMismatchError) as ctx:
            ExecutionPlan(TraversalConfig(shape=TreeShape.NARY), ChildrenAdapter())
        self.assertIn("Invalid configuration", str(ctx.exception))

    def test_execute_yields_node_and_data(self):
        plan = ExecutionPlan(TraversalConfig(order=TraversalOrder.PRE_ORDER), AttributeAdapter())

        results = list(plan.execute(self.tree))
        self.assertEqual([data for _, data in results], [4, 2, 1, 3, 5])
        self.assertIs(results[0][0], self.tree)
        self.assertEqual(plan.trampoline.emitted, 5)
        self.assertTrue(plan.trampoline.finished)

    def test_each_execute_starts_fresh(self):
        plan = ExecutionPlan(TraversalConfig(), AttributeAdapter())

        first = plan.execute(self.tree)
        first_trampoline = plan.trampoline
        second = plan.execute(self.tree)

        self.assertIsNot(plan.trampoline, first_trampoline)
        self.assertEqual([d for _, d in second], [1, 2, 3, 4, 5])
        self.assertEqual([d for _, d in first], [1, 2, 3, 4, 5])

    def test_summary(self):
        config = TraversalConfig.guarded(max_nodes=3)
        plan = ExecutionPlan(config, AttributeAdapter())

        self.assertEqual(plan.get_summary(), {
            'order': 'in',
            'shape': 'binary',
            'emit': 'value',
            'detect_cycles': True,
            'max_nodes': 3,
            'adapter': 'AttributeAdapter',
            'traverser': 'InOrderTraverser',
            'collector': 'ValueCollector',
        })

    def test_logs_plan_and_limit(self):
        plan = ExecutionPlan(TraversalConfig(safety=SafetyConfig(max_nodes=2)), AttributeAdapter())

        with self.assertLogs("stacktreelib.planning", level=logging.DEBUG) as logs:
            list(plan.execute(self.tree))

        output = "\n".join(logs.output)
        self.assertIn("Executing plan", output)
        self.assertIn("Node limit 2 reached", output)


if __name__ == '__main__':
    unittest.main()
