"""
Domain-separated SHA-256 hashing for leaves and internal nodes.

Leaves and internal nodes are hashed under different one-byte tags:

- `leaf = SHA-256(0x00 || block)`
- `node = SHA-256(0x01 || left || right)`

Without the tags, the concatenation of two child digests is itself a valid
64-byte block, so an attacker could present an internal node as if it were a
leaf and shorten the authentication path accordingly. The tags make the two
input spaces disjoint.
"""

from __future__ import annotations

import hashlib

from merkle_commit.types import Digest

from .constants import DIGEST_LENGTH, LEAF_DOMAIN_TAG, NODE_DOMAIN_TAG


def hash_leaf(block: bytes) -> Digest:
    """
    Compute the leaf digest of a single data block.

    Args:
        block: The raw block bytes. Any length, including empty.

    Returns:
        `SHA-256(0x00 || block)`.

    Raises:
        TypeError: If `block` is not a bytes-like object.
    """
    if not isinstance(block, (bytes, bytearray, memoryview)):
        raise TypeError(f"Block must be bytes-like, got {type(block).__name__}")
    hasher = hashlib.sha256(LEAF_DOMAIN_TAG)
    hasher.update(block)
    return Digest(hasher.digest())


def hash_node(left: bytes, right: bytes) -> Digest:
    """
    Compute the digest of an internal node from its two children.

    The order of the operands is significant: `hash_node(a, b)` and
    `hash_node(b, a)` differ, which is how a node's position is bound into
    its parent.

    Args:
        left: Digest of the left child.
        right: Digest of the right child.

    Returns:
        `SHA-256(0x01 || left || right)`.

    Raises:
        ValueError: If either child is not exactly `DIGEST_LENGTH` bytes.
    """
    if len(left) != DIGEST_LENGTH or len(right) != DIGEST_LENGTH:
        raise ValueError(
            f"Child digests must be {DIGEST_LENGTH} bytes, got {len(left)} and {len(right)}"
        )
    hasher = hashlib.sha256(NODE_DOMAIN_TAG)
    hasher.update(left)
    hasher.update(right)
    return Digest(hasher.digest())
