"""Constants that define the Merkle tree construction."""

from typing import Final

DIGEST_LENGTH: Final = 32
"""Size in bytes of every digest (SHA-256 output)."""

LEAF_DOMAIN_TAG: Final = b"\x00"
"""Prefix hashed in front of a block to produce a leaf digest."""

NODE_DOMAIN_TAG: Final = b"\x01"
"""Prefix hashed in front of `left || right` to produce an internal-node digest."""

MAX_TREE_DEPTH: Final = 64
"""
Longest authentication path a verifier will walk.

A depth of 64 already covers 2^64 leaves. Anything longer cannot come from a
real tree and is rejected without hashing.
"""
