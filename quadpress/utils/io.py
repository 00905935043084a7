from __future__ import annotations
from pathlib import Path
import json
import logging
import numpy as np
import torch
from PIL import Image

logger = logging.getLogger(__name__)


def load_image(path: str | Path) -> torch.Tensor:
    """Decode an image file into an RGBA ``(height, width, 4)`` uint8 grid."""
    path = Path(path)
    with Image.open(path) as img:
        logger.debug("Reading %s (%dx%d, mode %s)", path, img.width, img.height, img.mode)
        rgba = img.convert("RGBA")
        array = np.array(rgba, dtype=np.uint8)
    return torch.from_numpy(array)


def save_image(grid: torch.Tensor, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    array = grid.detach().cpu().to(torch.uint8).numpy()
    Image.fromarray(array).save(path)
    logger.debug("Wrote %s", path)


def save_config(path: str | Path, config_dict: dict) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(config_dict, f, indent=2)


def load_config(path: str | Path) -> dict:
    with open(path, "r") as f:
        return json.load(f)
