"""Structural core of the red-black tree: nodes, the sentinel and rebalancing."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

__all__ = [
    "Color",
    "RBTreeError",
    "DuplicateKeyError",
    "NodeInUseError",
    "NodeNotInTreeError",
    "NotFoundError",
    "EmptyTreeError",
    "KeyMismatchError",
    "Node",
    "TreeCore",
]


class Color(Enum):
    """Colour of a tree node."""

    RED = 0
    BLACK = 1


class RBTreeError(Exception):
    """Base class of every error raised by the tree."""


class DuplicateKeyError(RBTreeError):
    """An item with an equal key is already in the tree."""

    def __init__(self, existing: Any) -> None:
        super().__init__("an item with an equal key is already in the tree")
        self.existing = existing


class NodeInUseError(RBTreeError):
    """The item is already linked into a tree."""


class NodeNotInTreeError(RBTreeError):
    """The item is not linked into the tree."""


class NotFoundError(RBTreeError, KeyError):
    """No item with the requested key exists."""


class EmptyTreeError(NotFoundError):
    """The lookup was made on an empty tree."""


class KeyMismatchError(RBTreeError):
    """Two items that must share a key do not."""


class Node:
    """A tree node carrying one item; ``item`` is None while the node is free."""

    __slots__ = ("item", "color", "parent", "left", "right")

    def __init__(self, item: Any = None, color: Color = Color.RED) -> None:
        self.item = item
        self.color = color
        self.parent: Optional[Node] = None
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None

    def __repr__(self) -> str:
        return f"Node({self.item!r}, {self.color.name})"


class TreeCore:
    """Red-black tree topology around a black sentinel node.

    Key ordering is the caller's business: nodes are linked in by the caller
    and then passed to :meth:`fix_after_insert`, and removed with
    :meth:`unlink`.
    """

    def __init__(self) -> None:
        nil = Node(color=Color.BLACK)
        nil.parent = nil.left = nil.right = nil
        self.nil = nil
        self.root: Node = nil

    def is_nil(self, node: Node) -> bool:
        """Return True if ``node`` is the sentinel."""
        return node is self.nil

    def _replace_child(self, parent: Node, old: Node, new: Node) -> None:
        if parent is self.nil:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def rotate_left(self, node: Node) -> None:
        """Rotate ``node`` down to the left around its right child."""
        center = node.right
        self._replace_child(node.parent, node, center)
        center.parent = node.parent
        node.parent = center
        node.right = center.left
        center.left = node
        node.right.parent = node

    def rotate_right(self, node: Node) -> None:
        """Rotate ``node`` down to the right around its left child."""
        center = node.left
        self._replace_child(node.parent, node, center)
        center.parent = node.parent
        node.parent = center
        node.left = center.right
        center.right = node
        node.left.parent = node

    def fix_after_insert(self, node: Node) -> None:
        """Restore the colour rules after ``node`` was linked in as a leaf.

        A node whose parent is the sentinel becomes the new root.
        """
        nil = self.nil
        if node.parent is nil:
            self.root = node
            node.color = Color.BLACK
            return

        node.color = Color.RED
        parent = node.parent
        if parent.color is not Color.RED:
            return
        grandpa = parent.parent

        while True:
            parent_on_left = parent is grandpa.left
            uncle = grandpa.right if parent_on_left else grandpa.left

            if uncle.color is Color.RED:
                parent.color = Color.BLACK
                uncle.color = Color.BLACK
                node = grandpa
                if node is self.root:
                    return
                node.color = Color.RED
                parent = node.parent
                if parent.color is not Color.RED:
                    return
                grandpa = parent.parent
                continue

            node_on_left = node is parent.left
            if parent_on_left and node_on_left:
                parent.color = Color.BLACK
                self.rotate_right(grandpa)
            elif not parent_on_left and node_on_left:
                node.color = Color.BLACK
                self.rotate_right(parent)
                self.rotate_left(grandpa)
            elif parent_on_left:
                node.color = Color.BLACK
                self.rotate_left(parent)
                self.rotate_right(grandpa)
            else:
                parent.color = Color.BLACK
                self.rotate_left(grandpa)
            grandpa.color = Color.RED
            return

    def swap_with_successor(self, node: Node) -> Optional[Node]:
        """Exchange ``node`` with its in-order successor.

        The colours stay with the positions, so the tree stays balanced,
        and ``node`` is left without a left child. Returns the successor,
        or None when ``node`` has no right subtree and nothing moves.
        """
        nil = self.nil
        if node.right is nil:
            return None

        succ = node.right
        while succ.left is not nil:
            succ = succ.left

        node.color, succ.color = succ.color, node.color

        succ.left = node.left
        node.left.parent = succ
        node.left = nil

        parent = node.parent
        self._replace_child(parent, node, succ)

        succ_right = succ.right
        if succ is not node.right:
            succ_parent = succ.parent
            node.right.parent = succ
            succ_parent.left = node
            succ_right.parent = node
            succ.parent = parent
            succ.right = node.right
            node.parent = succ_parent
            node.right = succ_right
        else:
            succ.parent = parent
            succ.right = node
            node.parent = succ
            node.right = succ_right
            succ_right.parent = node
        return succ

    def unlink(self, node: Node) -> None:
        """Remove ``node`` from the tree and rebalance; the node is freed."""
        if node is self.nil or node.item is None:
            raise NodeNotInTreeError("node is not linked into the tree")
        self.swap_with_successor(node)
        self._detach(node)
        nil = self.nil
        node.item = None
        node.color = Color.RED
        node.parent = node.left = node.right = nil

    def _detach(self, node: Node) -> None:
        nil = self.nil
        if node.right is not nil or node.left is not nil:
            child = node.right if node.right is not nil else node.left
            self._replace_child(node.parent, node, child)
            child.parent = node.parent
            child.color = Color.BLACK
            return

        if node.color is Color.RED:
            self._replace_child(node.parent, node, nil)
            return

        if node is self.root:
            self.root = nil
            return

        parent = node.parent
        self._replace_child(parent, node, nil)
        self._fix_double_black(nil, parent)

    def _fix_double_black(self, current: Node, parent: Node) -> None:
        while True:
            sibling_on_right = current is parent.left
            sibling = parent.right if sibling_on_right else parent.left

            if sibling.color is Color.RED:
                sibling.color = Color.BLACK
                parent.color = Color.RED
                if sibling_on_right:
                    self.rotate_left(parent)
                else:
                    self.rotate_right(parent)
                continue

            left_red = sibling.left.color is Color.RED
            right_red = sibling.right.color is Color.RED

            if not left_red and not right_red:
                sibling.color = Color.RED
                if parent is not self.root and parent.color is not Color.RED:
                    current = parent
                    parent = current.parent
                    continue
                parent.color = Color.BLACK
                return

            if not sibling_on_right:
                if left_red:
                    sibling.left.color = Color.BLACK
                    sibling.color = parent.color
                    parent.color = Color.BLACK
                    self.rotate_right(parent)
                else:
                    sibling.right.color = parent.color
                    parent.color = Color.BLACK
                    self.rotate_left(sibling)
                    self.rotate_right(parent)
            else:
                if right_red:
                    sibling.right.color = Color.BLACK
                    sibling.color = parent.color
                    parent.color = Color.BLACK
                    self.rotate_left(parent)
                else:
                    sibling.left.color = parent.color
                    parent.color = Color.BLACK
                    self.rotate_right(sibling)
                    self.rotate_left(parent)
            return