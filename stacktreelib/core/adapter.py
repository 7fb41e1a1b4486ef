"""TreeAdapter abstraction for StackTreeLib.

The TreeAdapter decouples the node representation from the traversal
engine. The trampoline never touches node attributes directly; it asks the
adapter for a node's value and children. This lets the same engine walk
BinaryNode trees, user-defined objects, or dict-shaped trees decoded from
JSON.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, Mapping, Optional


class TreeAdapter(ABC):
    """Abstract adapter for reading a specific kind of tree structure.

    Subclasses declare what they support through capability flags. Binary
    traversal orders need an adapter whose ``supports_binary()`` is True;
    N-ary orders only need ``get_children``.
    """

    @abstractmethod
    def get_value(self, node: Any) -> Any:
        """Return the value stored in ``node``.

        Args:
            node: A node of the adapted structure (never None)

        Returns:
            The node's payload
        """
        pass

    @abstractmethod
    def get_children(self, node: Any) -> Iterator[Any]:
        """Get an iterator over the present children of ``node``.

        Should be lazy where possible; N-ary traversal keeps the returned
        iterator in its continuation frame and pulls one child at a time.

        Args:
            node: The parent node

        Returns:
            Iterator yielding child nodes in order. A None item is an
            absent slot: it is skipped and later siblings are still walked.
        """
        pass

    def is_leaf(self, node: Any) -> bool:
        """Check if ``node`` has no children.

        Default implementation peeks at get_children. Adapters can override
        for cheaper checks.
        """
        for child in self.get_children(node):
            if child is not None:
                return False
        return True

    def supports_binary(self) -> bool:
        """Check if adapter exposes distinct left/right slots.

        Returns:
            True if get_left/get_right are implemented
        """
        return False

    def get_left(self, node: Any) -> Optional[Any]:
        """Left child of ``node`` or None.

        Raises:
            NotImplementedError: If the adapter is not binary
        """
        raise NotImplementedError(f"{self.__class__.__name__} has no left/right slots")

    def get_right(self, node: Any) -> Optional[Any]:
        """Right child of ``node`` or None.

        Raises:
            NotImplementedError: If the adapter is not binary
        """
        raise NotImplementedError(f"{self.__class__.__name__} has no left/right slots")


class BinaryTreeAdapter(TreeAdapter):
    """Adapter base for structures with left/right child slots.

    Subclasses implement get_left and get_right; children are derived from
    them, left before right, skipping absent slots.
    """

    @abstractmethod
    def get_left(self, node: Any) -> Optional[Any]:
        pass

    @abstractmethod
    def get_right(self, node: Any) -> Optional[Any]:
        pass

    def get_children(self, node: Any) -> Iterator[Any]:
        left = self.get_left(node)
        if left is not None:
            yield left
        right = self.get_right(node)
        if right is not None:
            yield right

    def is_leaf(self, node: Any) -> bool:
        return self.get_left(node) is None and self.get_right(node) is None

    def supports_binary(self) -> bool:
        return True


class AttributeAdapter(BinaryTreeAdapter):
    """Reads value/left/right from object attributes.

    This is the default adapter for binary orders and works with
    BinaryNode as well as any duck-typed object.

    Example:
        >>> adapter = AttributeAdapter(left="lo", right="hi", value="key")
    """

    def __init__(self, value: str = "value", left: str = "left", right: str = "right"):
        """Initialize with attribute names.

        Args:
            value: Name of the payload attribute
            left: Name of the left-child attribute
            right: Name of the right-child attribute
        """
        self.value_attr = value
        self.left_attr = left
        self.right_attr = right

    def get_value(self, node: Any) -> Any:
        return getattr(node, self.value_attr)

    def get_left(self, node: Any) -> Optional[Any]:
        return getattr(node, self.left_attr, None)

    def get_right(self, node: Any) -> Optional[Any]:
        return getattr(node, self.right_attr, None)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(value={self.value_attr!r}, "
                f"left={self.left_attr!r}, right={self.right_attr!r})")


class ChildrenAdapter(TreeAdapter):
    """Reads value and an ordered children sequence from object attributes.

    Default adapter for N-ary orders. BinaryNode also works here because
    its ``children`` is a method returning the present children.
    """

    def __init__(self, value: str = "value", children: str = "children"):
        self.value_attr = value
        self.children_attr = children

    def get_value(self, node: Any) -> Any:
        return getattr(node, self.value_attr)

    def get_children(self, node: Any) -> Iterator[Any]:
        children = getattr(node, self.children_attr, None)
        if children is None:
            return iter(())
        if callable(children):
            children = children()
        return iter(children)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value_attr!r}, children={self.children_attr!r})"


class MappingAdapter(BinaryTreeAdapter):
    """Reads dict-shaped binary trees such as decoded JSON.

    Missing keys are absent children:
        {"value": 4, "left": {"value": 2}, "right": {"value": 5}}
    """

    def __init__(self, value: str = "value", left: str = "left", right: str = "right"):
        self.value_key = value
        self.left_key = left
        self.right_key = right

    def get_value(self, node: Mapping[str, Any]) -> Any:
        return node[self.value_key]

    def get_left(self, node: Mapping[str, Any]) -> Optional[Any]:
        return node.get(self.left_key)

    def get_right(self, node: Mapping[str, Any]) -> Optional[Any]:
        return node.get(self.right_key)
