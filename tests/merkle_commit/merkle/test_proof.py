"""Tests for authentication path generation."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from merkle_commit import IndexOutOfRangeError, MerkleError
from merkle_commit.merkle import MerkleTree, Orientation, Proof, hash_leaf, prove, tree_depth
from tests.merkle_commit.helpers import ref_leaf, ref_node


class TestProve:
    """Tests for `prove`."""

    def test_four_block_example(self, abcd_tree: MerkleTree) -> None:
        """The proof for c is (H(d), RIGHT) then (H(H(a), H(b)), LEFT)."""
        proof = prove(abcd_tree, 2)

        assert proof.index == 2
        assert proof.leaf == ref_leaf(b"c")
        assert [(e.sibling, e.orientation) for e in proof.path] == [
            (ref_leaf(b"d"), Orientation.RIGHT),
            (ref_node(ref_leaf(b"a"), ref_leaf(b"b")), Orientation.LEFT),
        ]

    def test_single_leaf_has_empty_path(self) -> None:
        """The only leaf of a one-block tree is the root itself."""
        tree = MerkleTree.build([b"solo"])
        proof = prove(tree, 0)
        assert proof.path == ()
        assert proof.leaf == tree.root()

    def test_unpaired_leaf_uses_itself_as_sibling(self) -> None:
        """The last leaf of an odd level is paired with its own digest."""
        tree = MerkleTree.build([b"a", b"b", b"c"])
        proof = prove(tree, 2)
        assert proof.path[0].sibling == hash_leaf(b"c")
        assert proof.path[0].orientation == Orientation.RIGHT

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 7, 8, 9, 16, 31])
    def test_path_length_is_depth(self, tree_factory: Callable[[int], MerkleTree], n: int) -> None:
        """Every path has ceil(log2(n)) entries, for every leaf."""
        tree = tree_factory(n)
        for index in range(n):
            assert len(prove(tree, index).path) == tree_depth(n)

    @pytest.mark.parametrize("index", [0, 1, 5, 6, 10])
    def test_orientations_encode_index_bits(
        self, tree_factory: Callable[[int], MerkleTree], index: int
    ) -> None:
        """Orientation k is LEFT exactly when bit k of the index is set."""
        proof = prove(tree_factory(11), index)
        bits = [
            Orientation.LEFT if (index >> k) & 1 else Orientation.RIGHT
            for k in range(len(proof.path))
        ]
        assert [entry.orientation for entry in proof.path] == bits

    @pytest.mark.parametrize("index", [-1, 4, 5, 1000])
    def test_out_of_range(self, abcd_tree: MerkleTree, index: int) -> None:
        """Indices outside `[0, leaf_count)` are rejected."""
        with pytest.raises(IndexOutOfRangeError, match=f"Leaf index {index} out of range"):
            prove(abcd_tree, index)

    def test_out_of_range_is_index_error(self, abcd_tree: MerkleTree) -> None:
        """The error fits both the library hierarchy and IndexError."""
        with pytest.raises(IndexError):
            prove(abcd_tree, 4)
        with pytest.raises(MerkleError):
            prove(abcd_tree, 4)

    def test_rejects_non_integer_index(self, abcd_tree: MerkleTree) -> None:
        """Floats are not positions."""
        with pytest.raises(TypeError):
            prove(abcd_tree, 1.0)  # type: ignore[arg-type]

    def test_method_delegates(self, abcd_tree: MerkleTree) -> None:
        """`MerkleTree.proof` is `prove` on that tree."""
        assert abcd_tree.proof(1) == prove(abcd_tree, 1)

    def test_proof_is_self_contained(self, abcd_tree: MerkleTree) -> None:
        """A proof is a plain value, independent of the tree object."""
        proof = prove(abcd_tree, 3)
        assert isinstance(proof, Proof)
        assert Proof.from_dict(proof.to_dict()) == proof
