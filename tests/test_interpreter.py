"""Tests for the trampoline interpreter.

The central property: at every call site of the recursive algorithm, the
trampoline's (current node, continuation stack) pair is exactly the
(node, continuation) pair the recursive defunctionalized form is called
with.
"""

import logging

import pytest

from stacktreelib import AttributeAdapter, ChildrenAdapter, Phase, Trampoline, parse_tree
from stacktreelib.core.continuation import Emit, EmitThenRight
from stacktreelib.core.interpreter import (
    NOTHING,
    CycleGuard,
    InOrderSchema,
    NaryPostOrderSchema,
    NaryPreOrderSchema,
    PostOrderSchema,
    PreOrderSchema,
    TraversalState,
)
from stacktreelib.core.recursive import (
    cps_in_order,
    defunctionalized_in_order,
    recorded_calls,
    recursive_in_order,
    recursive_nary_post_order,
    recursive_nary_pre_order,
    recursive_post_order,
    recursive_pre_order,
)
from stacktreelib.testing import random_binary_tree, random_nary_tree

ADAPTER = AttributeAdapter()


def in_order(root):
    return Trampoline(root, InOrderSchema(ADAPTER))


def values(nodes):
    return [node.value for node in nodes]


def test_step_by_step_in_order(sample_tree):
    tramp = in_order(sample_tree)
    results = []
    while not tramp.finished:
        node = tramp.step()
        results.append(None if node is NOTHING else node.value)

    # descend 4, 2, 1; emit 1, 2; descend 3; emit 3, 4; descend 5; emit 5
    assert results == [None, None, None, 1, 2, None, 3, 4, None, 5]
    assert tramp.emitted == 5
    assert tramp.peak_depth == 3


def test_phase_discriminator(sample_tree):
    tramp = in_order(sample_tree)
    assert tramp.phase is Phase.DESCENDING

    for _ in range(3):
        tramp.step()
    # Left spine exhausted: 1, 2, 4 pending
    assert tramp.phase is Phase.RESUMING
    assert values(tramp.snapshot()[1]) == [1, 2, 4]

    list(tramp.run())
    assert tramp.phase is Phase.HALTED
    assert tramp.step() is NOTHING
    assert tramp.finished


def test_empty_root_halts_immediately():
    tramp = in_order(None)

    assert tramp.finished
    assert tramp.snapshot() == (None, ())
    assert list(tramp.run()) == []
    assert tramp.peak_depth == 0


def test_nothing_sentinel_is_falsy():
    assert not NOTHING
    assert repr(NOTHING) == "NOTHING"


def test_state_settles_phase():
    state = TraversalState(None)
    assert state.phase is Phase.HALTED

    state.stack.push(EmitThenRight(parse_tree("1")))
    assert state.settle() is Phase.RESUMING


def trampoline_call_sites(root):
    """(current, stack nodes) before every step, plus the halted state."""
    tramp = in_order(root)
    sites = []
    while True:
        sites.append(tramp.snapshot())
        if tramp.finished:
            return sites
        tramp.step()


def as_ids(sites):
    return [
        (id(node) if node is not None else None, tuple(id(n) for n in stack))
        for node, stack in sites
    ]


@pytest.mark.parametrize("text", ["4(2(1,3),5)", "7()", "3(,5)", "3(2(1,),)", "1(,2(,3))"])
def test_states_match_recursive_call_sites(text):
    root = parse_tree(text)

    assert as_ids(trampoline_call_sites(root)) == as_ids(recorded_calls(root, ADAPTER))


@pytest.mark.parametrize("seed", range(10))
def test_states_match_recursive_call_sites_random(seed):
    root = random_binary_tree(seed, 60)

    assert as_ids(trampoline_call_sites(root)) == as_ids(recorded_calls(root, ADAPTER))


def test_empty_tree_call_sites():
    assert trampoline_call_sites(None) == [(None, ())]
    assert recorded_calls(None, ADAPTER) == [(None, ())]


def test_stack_encodes_linked_continuation(sample_tree):
    """While resuming, the flat stack is the linked chain the recursion holds."""
    tramp = in_order(sample_tree)
    chains = []
    defunctionalized_in_order(sample_tree, ADAPTER, lambda node, k: chains.append(k))

    index = 0
    while True:
        assert tramp.state.stack.to_chain() == chains[index]
        if tramp.finished:
            break
        tramp.step()
        index += 1
    assert index == len(chains) - 1


@pytest.mark.parametrize("seed", range(8))
def test_all_in_order_forms_agree(seed):
    root = random_binary_tree(seed, 120)
    expected = list(range(120))

    assert values(recursive_in_order(root, ADAPTER)) == expected
    assert values(cps_in_order(root, ADAPTER)) == expected
    assert values(defunctionalized_in_order(root, ADAPTER)) == expected
    assert values(in_order(root).run()) == expected


@pytest.mark.parametrize("seed", range(8))
def test_binary_schemas_match_recursion(seed):
    root = random_binary_tree(seed, 80)

    pre = Trampoline(root, PreOrderSchema(ADAPTER)).run()
    post = Trampoline(root, PostOrderSchema(ADAPTER)).run()

    assert list(pre) == recursive_pre_order(root, ADAPTER)
    assert list(post) == recursive_post_order(root, ADAPTER)


@pytest.mark.parametrize("seed", range(8))
def test_nary_schemas_match_recursion(seed):
    root = random_nary_tree(seed, 80, max_children=5)
    adapter = ChildrenAdapter()

    pre = Trampoline(root, NaryPreOrderSchema(adapter)).run()
    post = Trampoline(root, NaryPostOrderSchema(adapter)).run()

    assert list(pre) == recursive_nary_pre_order(root, adapter)
    assert list(post) == recursive_nary_post_order(root, adapter)


def test_stack_never_exceeds_height():
    # Height 4 along the left, 3 along the right
    root = parse_tree("8(4(2(1,3),6),10(,12))")
    for schema in (InOrderSchema, PreOrderSchema):
        tramp = Trampoline(root, schema(ADAPTER))
        list(tramp.run())
        assert tramp.peak_depth <= 4
    post = Trampoline(root, PostOrderSchema(ADAPTER))
    list(post.run())
    # Post-order keeps one frame per ancestor plus the pending emit
    assert post.peak_depth <= 5


def test_unknown_frame_is_rejected(sample_tree):
    state = TraversalState(None)

    with pytest.raises(TypeError, match="InOrderSchema cannot resume Emit"):
        InOrderSchema(ADAPTER).resume(Emit(sample_tree), state)


def test_frame_types_declared():
    assert InOrderSchema.frame_types == (EmitThenRight,)
    assert InOrderSchema.requires_binary
    assert not NaryPreOrderSchema.requires_binary


def test_logs_start_and_halt(sample_tree, caplog):
    caplog.set_level(logging.DEBUG, logger="stacktreelib.core.interpreter")

    list(in_order(sample_tree).run())

    messages = [record.getMessage() for record in caplog.records]
    assert any("Trampoline start: schema=in_order" in m for m in messages)
    assert any("emitted=5 peak_depth=3" in m for m in messages)


class TestCycleGuard:
    """Bookkeeping of the active path."""

    def test_reentry_raises(self):
        from stacktreelib import CyclicStructureError

        guard = CycleGuard()
        node = object()
        guard.enter(node, 0)
        with pytest.raises(CyclicStructureError) as exc_info:
            guard.enter(node, 3)
        assert exc_info.value.node is node
        assert exc_info.value.depth == 3

    def test_release_forgets_finished_nodes(self):
        guard = CycleGuard()
        parent, child = object(), object()
        guard.enter(parent, 0)
        guard.enter(child, 1)
        assert len(guard) == 2

        guard.release(0)
        assert len(guard) == 1
        # The finished child may appear again elsewhere in a shared structure
        guard.enter(child, 0)
        assert len(guard) == 2
