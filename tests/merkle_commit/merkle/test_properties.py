"""Property-based tests for build, prove and verify."""

from __future__ import annotations

from hypothesis import assume, given
from hypothesis import strategies as st

from merkle_commit.merkle import AuthPathEntry, MerkleTree, prove, tree_depth, verify
from tests.merkle_commit.helpers import ref_root

blocks_strategy = st.lists(st.binary(max_size=24), min_size=1, max_size=40)


@st.composite
def tree_and_index(draw: st.DrawFn) -> tuple[list[bytes], int]:
    """Draw a block list together with a valid leaf index."""
    blocks = draw(blocks_strategy)
    index = draw(st.integers(min_value=0, max_value=len(blocks) - 1))
    return blocks, index


@given(blocks_strategy)
def test_root_matches_reference(blocks: list[bytes]) -> None:
    """Roots agree with the reference construction for arbitrary inputs."""
    assert MerkleTree.build(blocks).root() == ref_root(blocks)


@given(tree_and_index())
def test_honest_proofs_verify(case: tuple[list[bytes], int]) -> None:
    """Every honest proof verifies, with every optional check enabled."""
    blocks, index = case
    tree = MerkleTree.build(blocks)
    proof = prove(tree, index)

    assert len(proof.path) == tree_depth(len(blocks))
    assert verify(blocks[index], index, proof.path, tree.root(), leaf_count=len(blocks))


@given(tree_and_index(), st.binary(max_size=24))
def test_other_blocks_fail(case: tuple[list[bytes], int], other: bytes) -> None:
    """A different block never verifies at the proven position."""
    blocks, index = case
    assume(other != blocks[index])
    tree = MerkleTree.build(blocks)
    path = prove(tree, index).path
    assert not verify(other, index, path, tree.root())


@given(tree_and_index(), st.data())
def test_corrupted_siblings_fail(case: tuple[list[bytes], int], data: st.DataObject) -> None:
    """Flipping any bit of any sibling makes verification fail."""
    blocks, index = case
    assume(len(blocks) > 1)
    tree = MerkleTree.build(blocks)
    path = list(prove(tree, index).path)

    level = data.draw(st.integers(min_value=0, max_value=len(path) - 1))
    bit = data.draw(st.integers(min_value=0, max_value=255))
    sibling = bytearray(path[level].sibling)
    sibling[bit // 8] ^= 1 << (bit % 8)
    path[level] = AuthPathEntry(sibling=bytes(sibling), orientation=path[level].orientation)

    assert not verify(blocks[index], index, path, tree.root())


@given(blocks_strategy, st.integers(min_value=2, max_value=6))
def test_parallel_build_is_identical(blocks: list[bytes], workers: int) -> None:
    """The worker count never changes the tree."""
    sequential = MerkleTree.build(blocks, workers=1)
    parallel = MerkleTree.build(blocks, workers=workers, parallel_threshold=2)
    assert parallel == sequential
