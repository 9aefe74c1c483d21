# dominant_colors/tree.py
from __future__ import annotations

"""
Binary tree of colour classes.

Each node is one class of pixels. Leaves are the current classes; internal
nodes are classes that have already been split and are frozen. A node has
either no children or exactly two.

Exports:
  ColorClassNode : one class (id, mean, covariance, pixel count, children)
  ClassTree      : owns the root and provides the traversal-based searches
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from .constants import ROOT_CLASS_ID
from .core_types import Mat3, Vec3
from .stats import top_eigenvalue


@dataclass(eq=False)
class ColorClassNode:
    """One colour class. `mean`/`covariance` are None until estimated."""

    class_id: int
    mean: Optional[Vec3] = None
    covariance: Optional[Mat3] = None
    pixel_count: int = 0
    left: Optional["ColorClassNode"] = field(default=None, repr=False)
    right: Optional["ColorClassNode"] = field(default=None, repr=False)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def attach_children(self, left_id: int, right_id: int) -> None:
        """Turn this leaf into an internal node with two fresh children."""
        if not self.is_leaf:
            raise ValueError(f"class {self.class_id} has already been split")
        self.left = ColorClassNode(left_id)
        self.right = ColorClassNode(right_id)

    def require_stats(self) -> None:
        if self.mean is None or self.covariance is None:
            raise ValueError(f"class {self.class_id} has no statistics yet")


NodePredicate = Callable[[ColorClassNode], bool]


class ClassTree:
    """Tree of colour classes rooted at a node with id ROOT_CLASS_ID."""

    def __init__(self, root: Optional[ColorClassNode] = None) -> None:
        self.root = root if root is not None else ColorClassNode(ROOT_CLASS_ID)

    def visit(self, predicate: Optional[NodePredicate] = None) -> Iterator[ColorClassNode]:
        """Breadth-first walk (left before right), yielding nodes that match."""
        queue = deque([self.root])
        while queue:
            node = queue.popleft()
            if node.left is not None and node.right is not None:
                queue.append(node.left)
                queue.append(node.right)
            if predicate is None or predicate(node):
                yield node

    def __iter__(self) -> Iterator[ColorClassNode]:
        return self.visit()

    def __len__(self) -> int:
        return sum(1 for _ in self.visit())

    def next_free_class_id(self) -> int:
        """One past the largest id anywhere in the tree."""
        return max(node.class_id for node in self.visit()) + 1

    def leaves(self) -> List[ColorClassNode]:
        """Leaf classes in breadth-first order."""
        return list(self.visit(lambda node: node.is_leaf))

    def leaf_by_id(self) -> Dict[int, ColorClassNode]:
        return {node.class_id: node for node in self.leaves()}

    def most_spread_leaf(self) -> ColorClassNode:
        """
        Leaf whose covariance has the largest top eigenvalue.

        A single-node tree returns the root without any eigen work. Ties keep
        the first leaf in breadth-first order.
        """
        if self.root.is_leaf:
            return self.root

        leaves = self.leaves()
        best = leaves[0]
        best_value = float("-inf")
        for leaf in leaves:
            leaf.require_stats()
            value = top_eigenvalue(leaf.covariance)
            if value > best_value:
                best_value = value
                best = leaf
        return best


__all__ = ["ColorClassNode", "ClassTree", "NodePredicate"]
