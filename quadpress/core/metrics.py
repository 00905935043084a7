"""Color averaging and normalized color distance."""
from __future__ import annotations
from typing import NamedTuple, Sequence
import torch

# (2 * 256)^2 * 4; looser than the true maximum of 255^2 * 4.
DISTANCE_NORMALIZER = (2 * 256) ** 2 * 4


class Pixel(NamedTuple):
    red: int
    green: int
    blue: int
    alpha: int

    @classmethod
    def from_tensor(cls, value: torch.Tensor) -> Pixel:
        return cls(*(int(c) for c in value.tolist()))

    def to_tensor(self, device: torch.device = None) -> torch.Tensor:
        return torch.tensor(tuple(self), dtype=torch.uint8, device=device)


def average(pixels: Sequence[Pixel]) -> Pixel:
    """Per-channel mean, truncated toward zero."""
    count = len(pixels)
    if count < 1:
        raise ValueError("cannot average an empty pixel sequence")
    return Pixel(*(sum(channel) // count for channel in zip(*pixels)))


def distance(a: Pixel, b: Pixel) -> float:
    raw = sum((ca - cb) ** 2 for ca, cb in zip(a, b))
    return raw / DISTANCE_NORMALIZER


def variance(avg: Pixel, pixels: Sequence[Pixel]) -> float:
    """Mean normalized distance of ``pixels`` from ``avg``."""
    count = len(pixels)
    if count < 1:
        raise ValueError("cannot compute variance of an empty pixel sequence")
    return sum(distance(avg, p) for p in pixels) / count


def grid_distance(original: torch.Tensor, reconstructed: torch.Tensor) -> float:
    """Mean of ``distance`` over every pixel pair of two equally shaped grids."""
    if original.shape != reconstructed.shape:
        raise ValueError(
            f"grid shapes differ: {tuple(original.shape)} vs {tuple(reconstructed.shape)}"
        )
    if original.numel() == 0:
        return 0.0
    diff = original.to(torch.int64) - reconstructed.to(torch.int64)
    per_pixel = (diff ** 2).sum(dim=-1).to(torch.float64) / DISTANCE_NORMALIZER
    return per_pixel.mean().item()
