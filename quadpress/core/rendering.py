"""Reconstruct a pixel grid from a (possibly pruned) quadtree."""
from __future__ import annotations
import logging
import torch

from quadpress.core.errors import TreeInvariantError
from quadpress.core.grid import allocate, validate_dimensions
from quadpress.core.tree import Leaf, QuadNode, QuadTree, check_internal

logger = logging.getLogger(__name__)


def render(node: QuadNode, x: int, y: int, width: int, height: int, out: torch.Tensor) -> None:
    """Write the region covered by ``node`` into ``out`` at origin ``(x, y)``."""
    if isinstance(node, Leaf):
        # A leaf above pixel level is a merged block: fill its whole extent.
        out[y:y + height, x:x + width] = node.value.to_tensor(device=out.device)
        return

    if width == 1 and height == 1:
        raise TreeInvariantError(f"expected a leaf at pixel ({x}, {y}), found {node!r}")

    children = check_internal(node).children
    half_w, half_h = width // 2, height // 2
    render(children[0], x, y, half_w, half_h, out)
    render(children[1], x + half_w, y, half_w, half_h, out)
    render(children[2], x, y + half_h, half_w, half_h, out)
    render(children[3], x + half_w, y + half_h, half_w, half_h, out)


def render_tree(tree: QuadTree, width: int, height: int, device: torch.device = None) -> torch.Tensor:
    validate_dimensions(width, height)
    out = allocate(width, height, device=device)
    render(tree.root, 0, 0, width, height, out)
    logger.debug("Rendered %dx%d grid from %d leaves", width, height, tree.num_leaves)
    return out
