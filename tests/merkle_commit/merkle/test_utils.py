"""Tests for the tree shape helpers."""

from __future__ import annotations

import math

import pytest

from merkle_commit.merkle import level_widths, tree_depth


@pytest.mark.parametrize(
    "leaf_count, depth",
    [(1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4), (1024, 10), (1025, 11)],
)
def test_tree_depth(leaf_count: int, depth: int) -> None:
    """The depth is ceil(log2(n))."""
    assert tree_depth(leaf_count) == depth


def test_tree_depth_matches_ceil_log2() -> None:
    """`tree_depth` agrees with the floating point formula for small sizes."""
    for n in range(2, 300):
        assert tree_depth(n) == math.ceil(math.log2(n))


@pytest.mark.parametrize(
    "leaf_count, widths",
    [(1, [1]), (2, [2, 1]), (3, [3, 2, 1]), (5, [5, 3, 2, 1]), (8, [8, 4, 2, 1])],
)
def test_level_widths(leaf_count: int, widths: list[int]) -> None:
    """Every level holds ceil(previous / 2) nodes."""
    assert level_widths(leaf_count) == widths


@pytest.mark.parametrize("fn", [tree_depth, level_widths])
@pytest.mark.parametrize("leaf_count", [0, -1])
def test_rejects_empty_trees(fn, leaf_count: int) -> None:
    """A tree needs at least one leaf."""
    with pytest.raises(ValueError, match="at least one leaf"):
        fn(leaf_count)
