from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional
import logging
import torch

from quadpress.core.config import QuadpressConfig
from quadpress.core.grid import validate_grid
from quadpress.core.metrics import average, grid_distance, variance
from quadpress.core.rendering import render_tree
from quadpress.core.tree import Internal, Leaf, QuadNode, QuadTree, check_internal

logger = logging.getLogger(__name__)


def _merge(node: Internal, threshold: float) -> QuadNode:
    if not all(isinstance(child, Leaf) for child in node.children):
        return node

    values = [child.value for child in node.children]
    avg = average(values)
    if variance(avg, values) < threshold:
        merged = Leaf(avg, parent=node.parent)
        node.release()
        return merged
    return node


def prune(node: QuadNode, threshold: float) -> QuadNode:
    """Collapse near-uniform subtrees bottom-up.

    Returns the node that takes ``node``'s place: ``node`` itself, or a new
    leaf holding the average color when its four leaf children are within
    ``threshold``. A node only merges when all four direct children are
    leaves after their own pruning.
    """
    if isinstance(node, Leaf):
        return node

    node = check_internal(node)
    for i, child in enumerate(node.children):
        node.replace_child(i, prune(child, threshold))
    return _merge(node, threshold)


def prune_parallel(node: QuadNode, threshold: float, max_workers: int = 4) -> QuadNode:
    """Like :func:`prune`, with the four root subtrees pruned on a thread pool."""
    if max_workers <= 1 or isinstance(node, Leaf):
        return prune(node, threshold)

    node = check_internal(node)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(node.children))) as pool:
        pruned = list(pool.map(lambda c: prune(c, threshold), node.children))
    for i, child in enumerate(pruned):
        node.replace_child(i, child)
    return _merge(node, threshold)


def compress(tree: QuadTree, threshold: float, max_workers: int = 1) -> QuadTree:
    """Prune ``tree`` in place and return it."""
    if max_workers > 1:
        tree.root = prune_parallel(tree.root, threshold, max_workers=max_workers)
    else:
        tree.root = prune(tree.root, threshold)
    return tree


@dataclass
class CompressionResult:
    grid: torch.Tensor
    tree: QuadTree
    width: int
    height: int
    num_pixels: int
    num_leaves: int
    num_merges: int
    reconstruction_error: float
    compression_ratio: float

    def summary(self) -> str:
        return (
            f"Compression: {self.compression_ratio:.2f}x | "
            f"Error: {self.reconstruction_error:.6f} | "
            f"Leaves: {self.num_leaves}/{self.num_pixels}"
        )


class QuadTreeCompressor:
    def __init__(self, config: Optional[QuadpressConfig] = None):
        self.config = config or QuadpressConfig()
        self.device = self.config.resolved_device

    @property
    def threshold(self) -> float:
        return self.config.compression.threshold

    def compress_tree(self, grid: torch.Tensor) -> QuadTree:
        validate_grid(grid)
        tree = QuadTree.from_grid(grid.to(self.device), max_workers=self.config.max_workers)
        return compress(tree, self.threshold, max_workers=self.config.max_workers)

    def compress(self, grid: torch.Tensor) -> CompressionResult:
        width, height = validate_grid(grid)
        grid = grid.to(self.device)

        tree = QuadTree.from_grid(grid, max_workers=self.config.max_workers)
        internal_before = tree.num_internal
        compress(tree, self.threshold, max_workers=self.config.max_workers)
        num_merges = internal_before - tree.num_internal

        output = render_tree(tree, width, height, device=self.device)
        num_leaves = tree.num_leaves
        result = CompressionResult(
            grid=output,
            tree=tree,
            width=width,
            height=height,
            num_pixels=width * height,
            num_leaves=num_leaves,
            num_merges=num_merges,
            reconstruction_error=grid_distance(grid, output),
            compression_ratio=(width * height) / max(num_leaves, 1),
        )
        logger.info("Compressed %dx%d grid: %s", width, height, result.summary())
        return result

    def decompress(self, tree: QuadTree, width: int, height: int) -> torch.Tensor:
        return render_tree(tree, width, height, device=self.device)

    def stats(self) -> dict:
        return {
            "threshold": self.threshold,
            "device": str(self.device),
            "config": self.config.to_dict(),
        }
