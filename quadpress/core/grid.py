"""Pixel grid allocation and quadrant splitting.

A grid is a ``torch.uint8`` tensor of shape ``(height, width, 4)`` holding
RGBA pixels, indexed ``grid[y, x]``.
"""
from __future__ import annotations
import torch

from quadpress.core.errors import DimensionError, GridAllocationError
from quadpress.utils.memory import estimate_grid_bytes, format_bytes

CHANNELS = 4


def allocate(width: int, height: int, device: torch.device = None) -> torch.Tensor:
    if width < 0 or height < 0:
        raise DimensionError(f"cannot allocate a {width}x{height} grid")
    try:
        return torch.zeros((height, width, CHANNELS), dtype=torch.uint8, device=device)
    except (RuntimeError, MemoryError) as e:
        size = format_bytes(estimate_grid_bytes(width, height, CHANNELS))
        raise GridAllocationError(
            f"failed to allocate {width}x{height} grid ({size})"
        ) from e


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def validate_dimensions(width: int, height: int) -> None:
    if not is_power_of_two(width) or not is_power_of_two(height):
        raise DimensionError(
            f"grid dimensions must be powers of two, got {width}x{height}"
        )
    # Both sides are halved together, so they must reach 1 at the same depth.
    if width != height:
        raise DimensionError(
            f"only square grids are supported, got {width}x{height}"
        )


def validate_grid(grid: torch.Tensor) -> tuple[int, int]:
    """Check that ``grid`` is a compressible RGBA grid and return ``(width, height)``."""
    if not isinstance(grid, torch.Tensor):
        raise DimensionError(f"expected a torch.Tensor grid, got {type(grid).__name__}")
    if grid.dim() != 3 or grid.shape[2] != CHANNELS:
        raise DimensionError(
            f"grid must have shape (height, width, {CHANNELS}), got {tuple(grid.shape)}"
        )
    if grid.dtype != torch.uint8:
        raise DimensionError(f"grid must be uint8, got {grid.dtype}")

    height, width = grid.shape[0], grid.shape[1]
    validate_dimensions(width, height)
    return width, height


def split4(
    grid: torch.Tensor,
    width: int,
    height: int,
) -> tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]:
    """Copy the four quadrants of ``grid`` into newly allocated grids.

    Order is top-left, top-right, bottom-left, bottom-right.
    """
    half_w, half_h = width // 2, height // 2
    quadrants = []
    for y0, x0 in ((0, 0), (0, half_w), (half_h, 0), (half_h, half_w)):
        sub = allocate(half_w, half_h, device=grid.device)
        sub.copy_(grid[y0:y0 + half_h, x0:x0 + half_w])
        quadrants.append(sub)
    return tuple(quadrants)
