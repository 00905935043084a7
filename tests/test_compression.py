"""Unit tests for quadtree pruning and the compression pipeline."""
import pytest
import torch

from quadpress.core.config import CompressionConfig, QuadpressConfig
from quadpress.core.compression import (
    CompressionResult,
    QuadTreeCompressor,
    compress,
    prune,
    prune_parallel,
)
from quadpress.core.errors import DimensionError, TreeInvariantError
from quadpress.core.metrics import Pixel
from quadpress.core.tree import Internal, Leaf, QuadTree, iter_leaves

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def uniform_grid(size, pixel):
    return torch.tensor(pixel, dtype=torch.uint8).expand(size, size, 4).clone()


def checkerboard(size):
    grid = uniform_grid(size, BLACK)
    for y in range(size):
        for x in range(size):
            if (x + y) % 2:
                grid[y, x] = torch.tensor(WHITE, dtype=torch.uint8)
    return grid


def structure(node):
    if isinstance(node, Leaf):
        return tuple(node.value)
    return [structure(child) for child in node.children]


class TestPrune:
    def test_leaf_is_unchanged(self):
        leaf = Leaf(Pixel(1, 2, 3, 4))
        assert prune(leaf, 0.5) is leaf

    def test_uniform_grid_collapses_to_root_leaf(self):
        tree = QuadTree.from_grid(uniform_grid(8, (10, 20, 30, 255)))
        compress(tree, 0.0005)
        assert isinstance(tree.root, Leaf)
        assert tree.root.value == Pixel(10, 20, 30, 255)
        assert tree.num_nodes == 1

    def test_near_uniform_merges_to_average(self):
        grid = uniform_grid(2, (10, 20, 30, 255))
        grid[0, 1] = torch.tensor((11, 20, 30, 255), dtype=torch.uint8)
        grid[1, 0] = torch.tensor((10, 21, 30, 255), dtype=torch.uint8)
        tree = compress(QuadTree.from_grid(grid), 0.0005)
        assert isinstance(tree.root, Leaf)
        assert tree.root.value == Pixel(10, 20, 30, 255)

    def test_contrast_prevents_merge(self):
        tree = QuadTree.from_grid(checkerboard(8))
        nodes_before = tree.num_nodes
        compress(tree, 0.0005)
        assert tree.num_nodes == nodes_before
        assert tree.num_leaves == 64

    def test_mixed_children_block_merge(self):
        grid = uniform_grid(4, (50, 50, 50, 255))
        grid[:2, :2] = checkerboard(2)
        tree = compress(QuadTree.from_grid(grid), 0.0005)

        root = tree.root
        assert isinstance(root, Internal)
        assert isinstance(root.children[0], Internal)
        assert all(isinstance(c, Leaf) for c in root.children[1:])
        assert all(c.value == Pixel(50, 50, 50, 255) for c in root.children[1:])

    def test_threshold_is_strict(self):
        tree = compress(QuadTree.from_grid(uniform_grid(4, BLACK)), 0.0)
        assert tree.num_leaves == 16

    def test_merged_leaf_parent(self):
        grid = uniform_grid(4, (50, 50, 50, 255))
        grid[:2, :2] = checkerboard(2)
        tree = compress(QuadTree.from_grid(grid), 0.0005)
        for child in tree.root.children:
            assert child.parent is tree.root

    def test_idempotent(self):
        grid = checkerboard(8)
        grid[4:, 4:] = uniform_grid(4, (90, 10, 10, 255))
        grid[:4, 4:] = uniform_grid(4, (90, 10, 12, 255))
        tree = compress(QuadTree.from_grid(grid), 0.0005)
        first = structure(tree.root)
        compress(tree, 0.0005)
        assert structure(tree.root) == first

    def test_discarded_children_are_released(self):
        tree = QuadTree.from_grid(uniform_grid(2, BLACK))
        old_root = tree.root
        children = list(old_root.children)
        compress(tree, 0.0005)
        assert tree.root is not old_root
        assert old_root.children == []
        assert all(c.parent is None for c in children)

    def test_released_node_raises(self):
        node = Internal([Leaf(Pixel(0, 0, 0, 0)) for _ in range(4)])
        node.release()
        with pytest.raises(TreeInvariantError):
            prune(node, 0.0005)

    def test_parallel_matches_sequential(self):
        grid = checkerboard(16)
        grid[8:, :8] = uniform_grid(8, (200, 100, 0, 255))
        sequential = prune(QuadTree.from_grid(grid).root, 0.0005)
        parallel = prune_parallel(QuadTree.from_grid(grid).root, 0.0005, max_workers=4)
        assert structure(parallel) == structure(sequential)


class TestQuadTreeCompressor:
    def setup_method(self):
        self.compressor = QuadTreeCompressor(QuadpressConfig())

    def test_end_to_end_uniform(self):
        grid = uniform_grid(4, (10, 20, 30, 255))
        result = self.compressor.compress(grid)

        assert isinstance(result, CompressionResult)
        assert isinstance(result.tree.root, Leaf)
        assert result.tree.root.value == Pixel(10, 20, 30, 255)
        assert result.grid.shape == (4, 4, 4)
        assert torch.equal(result.grid, grid)
        assert result.num_leaves == 1
        assert result.num_merges == 5
        assert result.compression_ratio == 16.0
        assert result.reconstruction_error == 0.0

    def test_lossless_when_nothing_merges(self):
        grid = checkerboard(8)
        result = self.compressor.compress(grid)
        assert result.num_merges == 0
        assert torch.equal(result.grid, grid)

    def test_lossy_merge_reports_error(self):
        grid = uniform_grid(2, (10, 20, 30, 255))
        grid[0, 1] = torch.tensor((13, 20, 30, 255), dtype=torch.uint8)
        result = self.compressor.compress(grid)
        assert result.num_leaves == 1
        assert result.reconstruction_error > 0.0
        assert (result.grid == torch.tensor((10, 20, 30, 255), dtype=torch.uint8)).all()

    def test_rejects_non_power_of_two(self):
        with pytest.raises(DimensionError):
            self.compressor.compress(torch.zeros((6, 6, 4), dtype=torch.uint8))

    def test_rejects_rectangular(self):
        with pytest.raises(DimensionError):
            self.compressor.compress(torch.zeros((4, 8, 4), dtype=torch.uint8))

    def test_parallel_workers_same_output(self):
        grid = checkerboard(16)
        grid[:8, :8] = uniform_grid(8, (5, 5, 5, 255))
        parallel = QuadTreeCompressor(QuadpressConfig(max_workers=4)).compress(grid)
        sequential = self.compressor.compress(grid)
        assert torch.equal(parallel.grid, sequential.grid)
        assert parallel.num_leaves == sequential.num_leaves

    def test_compress_tree_then_decompress(self):
        grid = uniform_grid(8, WHITE)
        tree = self.compressor.compress_tree(grid)
        assert tree.num_leaves == 1
        out = self.compressor.decompress(tree, 8, 8)
        assert torch.equal(out, grid)

    def test_lossless_preset(self):
        compressor = QuadTreeCompressor(QuadpressConfig.lossless())
        result = compressor.compress(uniform_grid(4, BLACK))
        assert result.num_merges == 0
        assert result.num_leaves == 16

    def test_stats(self):
        stats = self.compressor.stats()
        assert stats["threshold"] == 0.0005
        assert stats["device"] == "cpu"


class TestCompressionResult:
    def test_summary_format(self):
        result = CompressionResult(
            grid=torch.zeros((2, 2, 4), dtype=torch.uint8),
            tree=QuadTree(Leaf(Pixel(0, 0, 0, 0))),
            width=2,
            height=2,
            num_pixels=4,
            num_leaves=1,
            num_merges=1,
            reconstruction_error=0.00125,
            compression_ratio=4.0,
        )

        summary = result.summary()
        assert "4.00x" in summary
        assert "0.001250" in summary
        assert "1/4" in summary
