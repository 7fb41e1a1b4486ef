"""Testing utilities for StackTreeLib consumers."""

from .fixtures import CountingAdapter, random_binary_tree, random_nary_tree

__all__ = ['CountingAdapter', 'random_binary_tree', 'random_nary_tree']
