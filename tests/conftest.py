"""Shared fixtures for the StackTreeLib test suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from stacktreelib import parse_tree
from stacktreelib.testing import CountingAdapter


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: deep-structure checks that take several seconds"
    )


class MutableNode:
    """Plain mutable binary node, the only way to build a cycle in tests."""

    def __init__(self, value, left=None, right=None):
        self.value = value
        self.left = left
        self.right = right

    def __repr__(self):
        return f"MutableNode({self.value!r})"


@pytest.fixture
def sample_tree():
    """The tree 4(2(1,3),5); in-order 1..5."""
    return parse_tree("4(2(1,3),5)")


@pytest.fixture
def counting_adapter():
    return CountingAdapter()
