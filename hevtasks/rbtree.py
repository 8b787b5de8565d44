"""Intrusive red-black tree.

Callers find the insertion point themselves, attach a node with
:meth:`RBTree.link` and then rebalance with :meth:`RBTree.insert_color`.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

__all__ = ["RBTreeNode", "RBTree"]


class RBTreeNode:
    """A tree node carrying an arbitrary ``value`` payload."""

    __slots__ = ("value", "parent", "left", "right", "black", "_linked")

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.parent: Optional[RBTreeNode] = None
        self.left: Optional[RBTreeNode] = None
        self.right: Optional[RBTreeNode] = None
        self.black = False
        self._linked = False

    def __repr__(self) -> str:
        colour = "black" if self.black else "red"
        return f"RBTreeNode({self.value!r}, {colour})"

    def is_empty(self) -> bool:
        """Return True if the node is not linked into any tree."""
        return not self._linked

    def next(self) -> Optional[RBTreeNode]:
        """Return the in-order successor, or None."""
        if self.is_empty():
            return None
        node = self
        if node.right is not None:
            node = node.right
            while node.left is not None:
                node = node.left
            return node
        parent = node.parent
        while parent is not None and node is parent.right:
            node = parent
            parent = node.parent
        return parent

    def prev(self) -> Optional[RBTreeNode]:
        """Return the in-order predecessor, or None."""
        if self.is_empty():
            return None
        node = self
        if node.left is not None:
            node = node.left
            while node.right is not None:
                node = node.right
            return node
        parent = node.parent
        while parent is not None and node is parent.left:
            node = parent
            parent = node.parent
        return parent


def _set_parent_color(
    node: RBTreeNode, parent: Optional[RBTreeNode], black: bool
) -> None:
    node.parent = parent
    node.black = black


class RBTree:
    """Red-black tree whose ordering is decided by the caller."""

    def __init__(self) -> None:
        self.root: Optional[RBTreeNode] = None

    def __iter__(self) -> Iterator[RBTreeNode]:
        node = self.first()
        while node is not None:
            following = node.next()
            yield node
            node = following

    def link(
        self, node: RBTreeNode, parent: Optional[RBTreeNode], left: bool
    ) -> None:
        """Attach ``node`` as a red leaf under ``parent`` (or as root)."""
        if parent is None:
            if self.root is not None:
                raise ValueError("tree already has a root")
            self.root = node
        elif left:
            if parent.left is not None:
                raise ValueError("left child slot is occupied")
            parent.left = node
        else:
            if parent.right is not None:
                raise ValueError("right child slot is occupied")
            parent.right = node
        node.parent = parent
        node.black = False
        node.left = node.right = None
        node._linked = True

    def first(self) -> Optional[RBTreeNode]:
        node = self.root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node

    def last(self) -> Optional[RBTreeNode]:
        node = self.root
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node

    def _change_child(
        self,
        old: RBTreeNode,
        new: Optional[RBTreeNode],
        parent: Optional[RBTreeNode],
    ) -> None:
        if parent is not None:
            if parent.left is old:
                parent.left = new
            else:
                parent.right = new
        else:
            self.root = new

    def _rotate_set_parents(
        self, old: RBTreeNode, new: RBTreeNode, black: bool
    ) -> None:
        parent = old.parent
        new.parent = old.parent
        new.black = old.black
        _set_parent_color(old, new, black)
        self._change_child(old, new, parent)

    def insert_color(self, node: RBTreeNode) -> None:
        """Rebalance after ``node`` has been linked."""
        parent = node.parent
        while True:
            if parent is None:
                _set_parent_color(node, None, True)
                break
            if parent.black:
                break
            gparent = parent.parent
            tmp = gparent.right
            if parent is not tmp:
                if tmp is not None and not tmp.black:
                    _set_parent_color(tmp, gparent, True)
                    _set_parent_color(parent, gparent, True)
                    node = gparent
                    parent = node.parent
                    _set_parent_color(node, parent, False)
                    continue
                tmp = parent.right
                if node is tmp:
                    tmp = node.left
                    parent.right = tmp
                    node.left = parent
                    if tmp is not None:
                        _set_parent_color(tmp, parent, True)
                    _set_parent_color(parent, node, False)
                    parent = node
                    tmp = node.right
                gparent.left = tmp
                parent.right = gparent
                if tmp is not None:
                    _set_parent_color(tmp, gparent, True)
                self._rotate_set_parents(gparent, parent, False)
                break
            else:
                tmp = gparent.left
                if tmp is not None and not tmp.black:
                    _set_parent_color(tmp, gparent, True)
                    _set_parent_color(parent, gparent, True)
                    node = gparent
                    parent = node.parent
                    _set_parent_color(node, parent, False)
                    continue
                tmp = parent.left
                if node is tmp:
                    tmp = node.right
                    parent.left = tmp
                    node.right = parent
                    if tmp is not None:
                        _set_parent_color(tmp, parent, True)
                    _set_parent_color(parent, node, False)
                    parent = node
                    tmp = node.left
                gparent.right = tmp
                parent.left = gparent
                if tmp is not None:
                    _set_parent_color(tmp, gparent, True)
                self._rotate_set_parents(gparent, parent, False)
                break

    def replace(self, victim: RBTreeNode, new: RBTreeNode) -> None:
        """Put ``new`` in the exact position of ``victim``."""
        parent = victim.parent
        new.parent = victim.parent
        new.left = victim.left
        new.right = victim.right
        new.black = victim.black
        new._linked = victim._linked
        if victim.left is not None:
            victim.left.parent = new
        if victim.right is not None:
            victim.right.parent = new
        self._change_child(victim, new, parent)
        victim._linked = False

    def _erase(self, node: RBTreeNode) -> Optional[RBTreeNode]:
        child = node.right
        tmp = node.left
        rebalance: Optional[RBTreeNode]

        if tmp is None:
            parent = node.parent
            black = node.black
            self._change_child(node, child, parent)
            if child is not None:
                _set_parent_color(child, parent, black)
                rebalance = None
            else:
                rebalance = parent if black else None
        elif child is None:
            parent = node.parent
            _set_parent_color(tmp, parent, node.black)
            self._change_child(node, tmp, parent)
            rebalance = None
        else:
            successor = child
            tmp = child.left
            if tmp is None:
                parent = successor
                child2 = successor.right
            else:
                while tmp is not None:
                    parent = successor
                    successor = tmp
                    tmp = tmp.left
                child2 = successor.right
                parent.left = child2
                successor.right = child
                child.parent = successor

            successor.left = node.left
            node.left.parent = successor

            self._change_child(node, successor, node.parent)

            if child2 is not None:
                _set_parent_color(child2, parent, True)
                rebalance = None
            else:
                rebalance = parent if successor.black else None
            successor.parent = node.parent
            successor.black = node.black

        return rebalance

    def _erase_color(self, parent: RBTreeNode) -> None:
        node: Optional[RBTreeNode] = None
        while True:
            sibling = parent.right
            if node is not sibling:
                if not sibling.black:
                    tmp1 = sibling.left
                    parent.right = tmp1
                    sibling.left = parent
                    _set_parent_color(tmp1, parent, True)
                    self._rotate_set_parents(parent, sibling, False)
                    sibling = tmp1
                tmp1 = sibling.right
                if tmp1 is None or tmp1.black:
                    tmp2 = sibling.left
                    if tmp2 is None or tmp2.black:
                        _set_parent_color(sibling, parent, False)
                        if not parent.black:
                            parent.black = True
                        else:
                            node = parent
                            parent = node.parent
                            if parent is not None:
                                continue
                        break
                    tmp1 = tmp2.right
                    sibling.left = tmp1
                    tmp2.right = sibling
                    parent.right = tmp2
                    if tmp1 is not None:
                        _set_parent_color(tmp1, sibling, True)
                    tmp1 = sibling
                    sibling = tmp2
                tmp2 = sibling.left
                parent.right = tmp2
                sibling.left = parent
                _set_parent_color(tmp1, sibling, True)
                if tmp2 is not None:
                    tmp2.parent = parent
                self._rotate_set_parents(parent, sibling, True)
                break
            else:
                sibling = parent.left
                if not sibling.black:
                    tmp1 = sibling.right
                    parent.left = tmp1
                    sibling.right = parent
                    _set_parent_color(tmp1, parent, True)
                    self._rotate_set_parents(parent, sibling, False)
                    sibling = tmp1
                tmp1 = sibling.left
                if tmp1 is None or tmp1.black:
                    tmp2 = sibling.right
                    if tmp2 is None or tmp2.black:
                        _set_parent_color(sibling, parent, False)
                        if not parent.black:
                            parent.black = True
                        else:
                            node = parent
                            parent = node.parent
                            if parent is not None:
                                continue
                        break
                    tmp1 = tmp2.left
                    sibling.right = tmp1
                    tmp2.left = sibling
                    parent.left = tmp2
                    if tmp1 is not None:
                        _set_parent_color(tmp1, sibling, True)
                    tmp1 = sibling
                    sibling = tmp2
                tmp2 = sibling.right
                parent.left = tmp2
                sibling.right = parent
                _set_parent_color(tmp1, sibling, True)
                if tmp2 is not None:
                    tmp2.parent = parent
                self._rotate_set_parents(parent, sibling, True)
                break

    def erase(self, node: RBTreeNode) -> None:
        """Remove ``node`` from the tree and rebalance."""
        rebalance = self._erase(node)
        if rebalance is not None:
            self._erase_color(rebalance)
        node._linked = False