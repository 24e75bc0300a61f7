"""Merkle commitments over ordered data blocks, with single-leaf inclusion proofs."""

from .merkle import (
    AuthPathEntry,
    MerkleTree,
    Orientation,
    Proof,
    build,
    hash_leaf,
    hash_node,
    prove,
    verify,
    verify_proof,
)
from .types import (
    Digest,
    EmptyInputError,
    IndexOutOfRangeError,
    MalformedTreeError,
    MerkleError,
)

__all__ = [
    "AuthPathEntry",
    "Digest",
    "MerkleTree",
    "Orientation",
    "Proof",
    "build",
    "hash_leaf",
    "hash_node",
    "prove",
    "verify",
    "verify_proof",
    "MerkleError",
    "EmptyInputError",
    "IndexOutOfRangeError",
    "MalformedTreeError",
]
