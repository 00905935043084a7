"""Utility functions for quadpress."""

from quadpress.utils.io import load_image, save_image, save_config, load_config
from quadpress.utils.memory import estimate_grid_bytes, format_bytes

__all__ = [
    "load_image",
    "save_image",
    "save_config",
    "load_config",
    "estimate_grid_bytes",
    "format_bytes",
]
