"""Exceptions raised by the quadtree compression pipeline."""


class QuadpressError(Exception):
    pass


class DimensionError(QuadpressError, ValueError):
    """Grid dimensions or layout the quadtree cannot represent."""


class TreeInvariantError(QuadpressError, RuntimeError):
    """A node was found in a state that build and prune never produce."""


class GridAllocationError(QuadpressError, MemoryError):
    pass
