"""Quadtree nodes and recursive construction from a pixel grid.

A node is either a :class:`Leaf` carrying one pixel or an :class:`Internal`
node with exactly four children ordered top-left, top-right, bottom-left,
bottom-right. The tree never stores its own width and height; every
traversal carries the extent down with it.
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, Optional
import logging
import weakref
import torch

from quadpress.core.errors import DimensionError, TreeInvariantError
from quadpress.core.grid import split4, validate_grid
from quadpress.core.metrics import Pixel

logger = logging.getLogger(__name__)

NUM_CHILDREN = 4


class QuadNode:
    """Base class for tree nodes.

    The parent link is a weak reference: it is only there for traversal
    and never keeps a node alive.
    """

    def __init__(self, parent: Optional[QuadNode] = None):
        self._parent = None
        self.parent = parent

    @property
    def parent(self) -> Optional[QuadNode]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional[QuadNode]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def is_leaf(self) -> bool:
        return False

    def release(self) -> None:
        self._parent = None


class Leaf(QuadNode):
    def __init__(self, value: Pixel, parent: Optional[QuadNode] = None):
        super().__init__(parent)
        self.value = Pixel(*value)

    @property
    def is_leaf(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Leaf({tuple(self.value)})"


class Internal(QuadNode):
    def __init__(self, children: list[QuadNode], parent: Optional[QuadNode] = None):
        super().__init__(parent)
        children = list(children)
        if len(children) != NUM_CHILDREN:
            raise TreeInvariantError(
                f"internal node needs {NUM_CHILDREN} children, got {len(children)}"
            )
        for child in children:
            child.parent = self
        self.children = children

    def replace_child(self, index: int, node: QuadNode) -> None:
        node.parent = self
        self.children[index] = node

    def release(self) -> None:
        # Children first, then our own links.
        for child in self.children:
            child.release()
        self.children.clear()
        super().release()

    def __repr__(self) -> str:
        return f"Internal({len(self.children)} children)"


def check_internal(node: QuadNode) -> Internal:
    """Return ``node`` if it is a well-formed internal node, else raise."""
    if not isinstance(node, Internal):
        raise TreeInvariantError(f"unexpected node type {type(node).__name__}")
    if len(node.children) != NUM_CHILDREN:
        raise TreeInvariantError(
            f"internal node has {len(node.children)} children; was it released?"
        )
    return node


def _check_extent(width: int, height: int) -> None:
    if width == 0 or height == 0:
        raise DimensionError(
            "width or height reached zero before 1x1; dimensions are not powers of two"
        )
    if width % 2 or height % 2:
        raise DimensionError(
            f"cannot halve a {width}x{height} region; dimensions are not powers of two"
        )


def build(grid: torch.Tensor, width: int, height: int) -> QuadNode:
    """Recursively build a full quadtree over ``grid``."""
    if width == 1 and height == 1:
        return Leaf(Pixel.from_tensor(grid[0, 0]))

    _check_extent(width, height)
    quadrants = split4(grid, width, height)
    return Internal([build(q, width // 2, height // 2) for q in quadrants])


def build_parallel(
    grid: torch.Tensor,
    width: int,
    height: int,
    max_workers: int = 4,
) -> QuadNode:
    """Like :func:`build`, with the four root quadrants built on a thread pool."""
    if max_workers <= 1 or (width == 1 and height == 1):
        return build(grid, width, height)

    _check_extent(width, height)
    quadrants = split4(grid, width, height)
    with ThreadPoolExecutor(max_workers=min(max_workers, NUM_CHILDREN)) as pool:
        children = list(pool.map(lambda q: build(q, width // 2, height // 2), quadrants))
    return Internal(children)


def iter_nodes(node: QuadNode) -> Iterator[QuadNode]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Internal):
            stack.extend(reversed(current.children))


def iter_leaves(node: QuadNode) -> Iterator[Leaf]:
    return (n for n in iter_nodes(node) if isinstance(n, Leaf))


def tree_depth(node: QuadNode) -> int:
    if isinstance(node, Internal) and node.children:
        return 1 + max(tree_depth(c) for c in node.children)
    return 0


class QuadTree:
    """Owner of a root node."""

    def __init__(self, root: QuadNode):
        self.root = root

    @classmethod
    def from_grid(cls, grid: torch.Tensor, max_workers: int = 1) -> QuadTree:
        width, height = validate_grid(grid)
        logger.debug("Building quadtree over %dx%d grid", width, height)
        if max_workers > 1:
            root = build_parallel(grid, width, height, max_workers=max_workers)
        else:
            root = build(grid, width, height)
        tree = cls(root)
        logger.debug("Built quadtree with %d nodes", tree.num_nodes)
        return tree

    @property
    def num_nodes(self) -> int:
        return sum(1 for _ in iter_nodes(self.root))

    @property
    def num_leaves(self) -> int:
        return sum(1 for _ in iter_leaves(self.root))

    @property
    def num_internal(self) -> int:
        return self.num_nodes - self.num_leaves

    @property
    def depth(self) -> int:
        return tree_depth(self.root)

    def release(self) -> None:
        self.root.release()
