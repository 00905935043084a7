from __future__ import annotations


def estimate_grid_bytes(width: int, height: int, channels: int = 4) -> int:
    """Size of a uint8 grid with ``channels`` bytes per pixel."""
    return width * height * channels


def format_bytes(num_bytes: int) -> str:
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(num_bytes) < 1024.0:
            return f"{num_bytes:.2f}{unit}"
        num_bytes /= 1024.0
    return f"{num_bytes:.2f}PB"
