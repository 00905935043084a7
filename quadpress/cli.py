"""Command-line entry point: compress an image file through a quadtree."""
from __future__ import annotations
from typing import Optional, Sequence
import argparse
import logging

from quadpress.core.compression import QuadTreeCompressor
from quadpress.core.config import DEFAULT_THRESHOLD, QuadpressConfig
from quadpress.core.errors import QuadpressError
from quadpress.logging_config import configure_logging
from quadpress.utils.io import load_config, load_image, save_image
from quadpress.utils.memory import estimate_grid_bytes, format_bytes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quadpress",
        description="Lossy image compression by merging similar quadtree regions",
        epilog=(
            "Every pixel becomes its own tree node before pruning, so run time grows "
            "with the pixel count: a 256x256 image takes a few seconds."
        ),
    )
    parser.add_argument("input", help="Image to compress (power-of-two square)")
    parser.add_argument("-o", "--output", default="output.png",
                        help="Where to write the reconstructed image")
    parser.add_argument("-t", "--threshold", type=float, default=None,
                        help=f"Merge threshold on a 0-1 scale (default {DEFAULT_THRESHOLD})")
    parser.add_argument("--workers", type=int, default=None,
                        help="Threads for the four root quadrants")
    parser.add_argument("--config", default=None, help="JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show debug output")
    return parser


def _resolve_config(args: argparse.Namespace) -> QuadpressConfig:
    data = load_config(args.config) if args.config else {}
    if not isinstance(data, dict):
        raise ValueError(f"config file must hold a JSON object, got {type(data).__name__}")
    if args.threshold is not None:
        compression = data.setdefault("compression", {})
        if not isinstance(compression, dict):
            raise ValueError("config 'compression' section must be a JSON object")
        compression["threshold"] = args.threshold
    if args.workers is not None:
        data["max_workers"] = args.workers
    return QuadpressConfig.from_dict(data)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(console_level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = _resolve_config(args)
        grid = load_image(args.input)
        height, width = grid.shape[0], grid.shape[1]
        logger.info(
            "Loaded %s: %dx%d (%s)",
            args.input, width, height, format_bytes(estimate_grid_bytes(width, height)),
        )

        result = QuadTreeCompressor(config).compress(grid)
        save_image(result.grid, args.output)
    except (QuadpressError, ValueError, OSError) as e:
        logger.error("Compression failed: %s", e)
        return 1

    logger.info("Wrote %s | %s", args.output, result.summary())
    return 0
