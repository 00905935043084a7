"""Basic usage example for quadtree compression."""
import torch
from quadpress import QuadpressConfig, QuadTreeCompressor


def make_test_image(size: int) -> torch.Tensor:
    grid = torch.zeros((size, size, 4), dtype=torch.uint8)
    grid[..., 3] = 255
    grid[: size // 2, :, 2] = 200
    grid[size // 2 :, : size // 2, 0] = 180
    grid[size // 2 :, size // 2 :] = torch.randint(0, 256, (size // 2, size // 2, 4), dtype=torch.uint8)
    return grid


def main():
    print("quadpress Basic Usage Example")
    print("=" * 50)

    image = make_test_image(64)
    print(f"Input image: {image.shape[1]}x{image.shape[0]} pixels")

    for name, config in [
        ("lossless", QuadpressConfig.lossless()),
        ("balanced", QuadpressConfig.balanced()),
        ("aggressive", QuadpressConfig.aggressive()),
    ]:
        compressor = QuadTreeCompressor(config)
        result = compressor.compress(image)

        print(f"\n{name} (threshold={config.compression.threshold}):")
        print(f"  - Compression ratio: {result.compression_ratio:.2f}x")
        print(f"  - Leaves: {result.num_leaves} of {result.num_pixels} pixels")
        print(f"  - Merges: {result.num_merges}")
        print(f"  - Tree depth: {result.tree.depth}")
        print(f"  - Reconstruction error: {result.reconstruction_error:.6f}")

    print("\n" + "=" * 50)
    print("Tree round trip:")

    compressor = QuadTreeCompressor()
    tree = compressor.compress_tree(image)
    recovered = compressor.decompress(tree, 64, 64)
    changed = (recovered != image).any(dim=-1).sum().item()
    print(f"  - Nodes after pruning: {tree.num_nodes}")
    print(f"  - Pixels changed: {changed}")


if __name__ == "__main__":
    main()
