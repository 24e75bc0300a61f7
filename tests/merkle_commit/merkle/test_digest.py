"""Tests for domain-separated leaf and node hashing."""

from __future__ import annotations

from hashlib import sha256

import pytest

from merkle_commit.merkle import DIGEST_LENGTH, hash_leaf, hash_node
from merkle_commit.types import Digest
from tests.merkle_commit.helpers import ref_leaf, ref_node


class TestHashLeaf:
    """Tests for `hash_leaf`."""

    @pytest.mark.parametrize("block", [b"", b"a", b"\x00" * 64, bytes(range(256))])
    def test_matches_tagged_sha256(self, block: bytes) -> None:
        """The leaf digest is SHA-256 over 0x00 followed by the block."""
        assert hash_leaf(block) == ref_leaf(block)

    def test_returns_digest(self) -> None:
        """The result is a 32-byte `Digest`."""
        digest = hash_leaf(b"a")
        assert isinstance(digest, Digest)
        assert len(digest) == DIGEST_LENGTH

    def test_differs_from_untagged_sha256(self) -> None:
        """The leaf tag changes the digest."""
        assert hash_leaf(b"a") != sha256(b"a").digest()

    def test_accepts_bytearray_and_memoryview(self) -> None:
        """Any bytes-like block is hashed by content."""
        expected = hash_leaf(b"abc")
        assert hash_leaf(bytearray(b"abc")) == expected
        assert hash_leaf(memoryview(b"abc")) == expected

    @pytest.mark.parametrize("block", ["abc", 7, None, [1, 2]])
    def test_rejects_non_bytes(self, block: object) -> None:
        """Text and other objects are not blocks."""
        with pytest.raises(TypeError, match="bytes-like"):
            hash_leaf(block)  # type: ignore[arg-type]


class TestHashNode:
    """Tests for `hash_node`."""

    def test_matches_tagged_sha256(self) -> None:
        """The node digest is SHA-256 over 0x01, left and right."""
        left, right = hash_leaf(b"a"), hash_leaf(b"b")
        assert hash_node(left, right) == ref_node(left, right)

    def test_order_matters(self) -> None:
        """Swapping the children changes the parent."""
        left, right = hash_leaf(b"a"), hash_leaf(b"b")
        assert hash_node(left, right) != hash_node(right, left)

    def test_leaf_and_node_domains_are_disjoint(self) -> None:
        """A 64-byte block that looks like two children does not hash like a node."""
        left, right = hash_leaf(b"a"), hash_leaf(b"b")
        assert hash_leaf(left + right) != hash_node(left, right)

    @pytest.mark.parametrize(
        "left, right",
        [
            (b"\x00" * 31, b"\x00" * 32),
            (b"\x00" * 32, b"\x00" * 33),
            (b"", b""),
        ],
    )
    def test_rejects_wrong_lengths(self, left: bytes, right: bytes) -> None:
        """Children must be exactly one digest long."""
        with pytest.raises(ValueError, match="32 bytes"):
            hash_node(left, right)
