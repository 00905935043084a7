"""quadpress: lossy image compression by quadtree color merging."""

from quadpress.core.config import QuadpressConfig, CompressionConfig
from quadpress.core.errors import QuadpressError, DimensionError, TreeInvariantError
from quadpress.core.metrics import Pixel
from quadpress.core.tree import QuadTree, Leaf, Internal
from quadpress.core.compression import QuadTreeCompressor, CompressionResult

__version__ = "0.1.0"
__all__ = [
    "QuadpressConfig",
    "CompressionConfig",
    "QuadpressError",
    "DimensionError",
    "TreeInvariantError",
    "Pixel",
    "QuadTree",
    "Leaf",
    "Internal",
    "QuadTreeCompressor",
    "CompressionResult",
]
