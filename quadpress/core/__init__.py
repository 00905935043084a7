"""Core modules for quadtree compression."""

from quadpress.core.config import QuadpressConfig, CompressionConfig
from quadpress.core.errors import (
    QuadpressError,
    DimensionError,
    TreeInvariantError,
    GridAllocationError,
)
from quadpress.core.metrics import Pixel, average, distance, variance
from quadpress.core.grid import allocate, split4, validate_dimensions
from quadpress.core.tree import QuadTree, QuadNode, Leaf, Internal, build
from quadpress.core.compression import QuadTreeCompressor, CompressionResult, prune, compress
from quadpress.core.rendering import render, render_tree

__all__ = [
    "QuadpressConfig",
    "CompressionConfig",
    "QuadpressError",
    "DimensionError",
    "TreeInvariantError",
    "GridAllocationError",
    "Pixel",
    "average",
    "distance",
    "variance",
    "allocate",
    "split4",
    "validate_dimensions",
    "QuadTree",
    "QuadNode",
    "Leaf",
    "Internal",
    "build",
    "QuadTreeCompressor",
    "CompressionResult",
    "prune",
    "compress",
    "render",
    "render_tree",
]
