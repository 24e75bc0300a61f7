"""Shared fixtures for the merkle_commit tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from merkle_commit import MerkleTree
from tests.merkle_commit.helpers import make_blocks


@pytest.fixture
def abcd_blocks() -> list[bytes]:
    """The four single-letter blocks a, b, c, d."""
    return [b"a", b"b", b"c", b"d"]


@pytest.fixture
def abcd_tree(abcd_blocks: list[bytes]) -> MerkleTree:
    """Tree over a, b, c, d."""
    return MerkleTree.build(abcd_blocks)


@pytest.fixture
def tree_factory() -> Callable[[int], MerkleTree]:
    """Factory building a tree over `make_blocks(n)`."""

    def _factory(n: int) -> MerkleTree:
        return MerkleTree.build(make_blocks(n))

    return _factory
