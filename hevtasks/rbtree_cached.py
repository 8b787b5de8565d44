"""Red-black tree that keeps its leftmost node cached for O(1) access."""

from __future__ import annotations

from typing import Optional

from hevtasks.rbtree import RBTree, RBTreeNode

__all__ = ["CachedRBTree"]


class CachedRBTree(RBTree):
    """An :class:`RBTree` that remembers its smallest node.

    The caller tells :meth:`insert_color` whether the new node became the
    leftmost one, which it learns for free while walking down to the
    insertion point.
    """

    def __init__(self) -> None:
        super().__init__()
        self.leftmost: Optional[RBTreeNode] = None

    def first(self) -> Optional[RBTreeNode]:
        """Return the cached leftmost node, or None for an empty tree."""
        return self.leftmost

    def insert_color(self, node: RBTreeNode, leftmost: bool) -> None:
        """Rebalance after linking ``node``; update the cache if it is leftmost."""
        if leftmost:
            self.leftmost = node
        super().insert_color(node)

    def replace(self, victim: RBTreeNode, new: RBTreeNode) -> None:
        """Put ``new`` where ``victim`` was, keeping the cache accurate."""
        super().replace(victim, new)
        if self.leftmost is victim:
            self.leftmost = new

    def erase(self, node: RBTreeNode) -> None:
        """Remove ``node``; if it was leftmost, its successor takes over."""
        if node is self.leftmost:
            self.leftmost = node.next()
        super().erase(node)