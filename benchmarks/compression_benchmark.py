"""Timing and compression benchmark for quadpress.

The tree is built with one Python node per pixel, so compress time scales
with width * height; expect several seconds at 256x256.
"""
import time
import torch

from quadpress import QuadpressConfig, QuadTreeCompressor
from quadpress.utils.memory import estimate_grid_bytes, format_bytes


def blocky_image(size: int, block: int) -> torch.Tensor:
    cells = size // block
    colors = torch.randint(0, 256, (cells, cells, 4), dtype=torch.uint8)
    return colors.repeat_interleave(block, dim=0).repeat_interleave(block, dim=1)


def run_compression_benchmark():
    print("quadpress Compression Benchmark")
    print("=" * 60)

    sizes = [32, 64, 128, 256]
    results = []

    for size in sizes:
        print(f"\nTesting {size}x{size} images...")
        image = blocky_image(size, block=max(1, size // 8))

        for workers in (1, 4):
            compressor = QuadTreeCompressor(QuadpressConfig(max_workers=workers))

            start = time.perf_counter()
            result = compressor.compress(image)
            compress_time = time.perf_counter() - start

            start = time.perf_counter()
            _ = compressor.decompress(result.tree, size, size)
            decompress_time = time.perf_counter() - start

            results.append({
                "size": f"{size}x{size}",
                "workers": workers,
                "bytes": estimate_grid_bytes(size, size),
                "ratio": result.compression_ratio,
                "error": result.reconstruction_error,
                "compress_ms": compress_time * 1000,
                "decompress_ms": decompress_time * 1000,
            })

    print("\n" + "=" * 60)
    print(f"{'Size':<10} {'Workers':>7} {'Input':>10} {'Ratio':>8} {'Error':>10} {'Comp ms':>9} {'Render ms':>10}")
    print("-" * 60)
    for r in results:
        print(
            f"{r['size']:<10} {r['workers']:>7} {format_bytes(r['bytes']):>10} "
            f"{r['ratio']:>7.2f}x {r['error']:>10.6f} {r['compress_ms']:>9.2f} {r['decompress_ms']:>10.2f}"
        )


if __name__ == "__main__":
    run_compression_benchmark()
