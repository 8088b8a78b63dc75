"""Red-black tree of caller-owned items ordered by a key and a comparison."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from .core import (
    Color,
    DuplicateKeyError,
    EmptyTreeError,
    KeyMismatchError,
    Node,
    NodeInUseError,
    NodeNotInTreeError,
    NotFoundError,
    RBTreeError,
    TreeCore,
)

__all__ = ["NodeInfo", "RBTree"]


def _natural_compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


@dataclass(frozen=True)
class NodeInfo:
    """A snapshot of one node: its item, colour and depth below the root."""

    item: Any
    color: Color
    depth: int


class RBTree:
    """A red-black tree that links items in place without copying them.

    ``key`` extracts the sort key from an item (the item itself by default)
    and ``compare`` returns a negative number, zero or a positive number as
    its first key sorts before, equal to or after its second (natural
    ordering by default). Items are tracked by identity, so one item may
    live in several trees at once, each ordering it by its own key.
    """

    def __init__(
        self,
        key: Optional[Callable[[Any], Any]] = None,
        compare: Optional[Callable[[Any, Any], int]] = None,
    ) -> None:
        self._key = key
        self._compare = compare if compare is not None else _natural_compare
        self._core = TreeCore()
        self._nodes: dict[int, Node] = {}

    def _key_of(self, item: Any) -> Any:
        return item if self._key is None else self._key(item)

    def add(self, item: Any) -> None:
        """Insert ``item``.

        Raises NodeInUseError if the item is already in this tree, and
        DuplicateKeyError, carrying the resident item, if an item with an
        equal key is.
        """
        if id(item) in self._nodes:
            raise NodeInUseError("item is already linked into the tree")
        core = self._core
        nil = core.nil
        node = Node(item)
        node.left = node.right = nil
        node.parent = nil

        current = core.root
        if current is not nil:
            item_key = self._key_of(item)
            while True:
                result = self._compare(item_key, self._key_of(current.item))
                if result < 0:
                    if current.left is nil:
                        current.left = node
                        break
                    current = current.left
                elif result > 0:
                    if current.right is nil:
                        current.right = node
                        break
                    current = current.right
                else:
                    raise DuplicateKeyError(current.item)
            node.parent = current

        self._nodes[id(item)] = node
        core.fix_after_insert(node)

    def remove(self, item: Any) -> None:
        """Unlink ``item``; raises NodeNotInTreeError if it is not in the tree."""
        node = self._nodes.get(id(item))
        if node is None or node.item is not item:
            raise NodeNotInTreeError("item is not linked into the tree")
        self._core.unlink(node)
        del self._nodes[id(item)]

    def find(self, key: Any) -> Any:
        """Return the item whose key equals ``key``.

        Raises EmptyTreeError on an empty tree and NotFoundError when no
        item matches.
        """
        core = self._core
        current = core.root
        if current is core.nil:
            raise EmptyTreeError(key)
        while current is not core.nil:
            result = self._compare(key, self._key_of(current.item))
            if result < 0:
                current = current.left
            elif result > 0:
                current = current.right
            else:
                return current.item
        raise NotFoundError(key)

    def replace(self, old: Any, new: Any) -> None:
        """Put ``new`` in the place of ``old``, which must have an equal key.

        Raises NodeNotInTreeError if ``old`` is not in the tree,
        NodeInUseError if ``new`` already is, and KeyMismatchError if the
        keys differ.
        """
        old_node = self._nodes.get(id(old))
        if old_node is None or old_node.item is not old:
            raise NodeNotInTreeError("item to replace is not linked into the tree")
        if id(new) in self._nodes:
            raise NodeInUseError("replacement item is already linked into the tree")
        if self._compare(self._key_of(old), self._key_of(new)) != 0:
            raise KeyMismatchError("replacement item has a different key")

        core = self._core
        nil = core.nil
        new_node = Node(new, old_node.color)
        parent = old_node.parent
        new_node.parent = parent
        new_node.left = old_node.left
        new_node.right = old_node.right

        if parent is nil:
            core.root = new_node
        elif parent.left is old_node:
            parent.left = new_node
        else:
            parent.right = new_node
        if old_node.left is not nil:
            old_node.left.parent = new_node
        if old_node.right is not nil:
            old_node.right.parent = new_node

        old_node.item = None
        old_node.color = Color.RED
        old_node.parent = old_node.left = old_node.right = nil
        del self._nodes[id(old)]
        self._nodes[id(new)] = new_node

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Any]:
        for info in self.nodes():
            yield info.item

    def __contains__(self, item: Any) -> bool:
        node = self._nodes.get(id(item))
        return node is not None and node.item is item

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def root(self) -> Any:
        """Return the item at the root, or None when the tree is empty."""
        root = self._core.root
        return None if root is self._core.nil else root.item

    def nodes(self) -> Iterator[NodeInfo]:
        """Yield a NodeInfo for every node in key order."""
        nil = self._core.nil
        stack: list[tuple[Node, int]] = []
        current, depth = self._core.root, 0
        while stack or current is not nil:
            while current is not nil:
                stack.append((current, depth))
                current, depth = current.left, depth + 1
            node, node_depth = stack.pop()
            yield NodeInfo(node.item, node.color, node_depth)
            current, depth = node.right, node_depth + 1

    def validate(self) -> int:
        """Check every tree invariant and return the black height.

        Raises RBTreeError describing the first violation found.
        """
        core = self._core
        nil = core.nil
        if nil.color is not Color.BLACK:
            raise RBTreeError("sentinel is not black")
        root = core.root
        if root is nil:
            if self._nodes:
                raise RBTreeError("tree is empty but items are tracked")
            return 0
        if root.color is not Color.BLACK:
            raise RBTreeError("root is not black")
        if root.parent is not nil:
            raise RBTreeError("root has a parent")

        count = 0
        previous_key: Any = None
        has_previous = False

        def walk(node: Node) -> int:
            nonlocal count, previous_key, has_previous
            if node is nil:
                return 0
            if node.item is None:
                raise RBTreeError("linked node carries no item")
            if self._nodes.get(id(node.item)) is not node:
                raise RBTreeError("linked node is not tracked")
            for child in (node.left, node.right):
                if child is not nil:
                    if child.parent is not node:
                        raise RBTreeError("child does not point back to its parent")
                    if node.color is Color.RED and child.color is Color.RED:
                        raise RBTreeError("red node has a red child")
            left_height = walk(node.left)
            key = self._key_of(node.item)
            if has_previous and self._compare(previous_key, key) >= 0:
                raise RBTreeError("keys are out of order")
            previous_key, has_previous = key, True
            count += 1
            right_height = walk(node.right)
            if left_height != right_height:
                raise RBTreeError("black heights differ")
            return left_height + (1 if node.color is Color.BLACK else 0)

        height = walk(root)
        if count != len(self._nodes):
            raise RBTreeError("tracked items do not match linked nodes")
        return height