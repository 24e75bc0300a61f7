"""
Merkle tree construction, inclusion proofs and verification.

Rules that define the tree:

1. Leaf hashing: `SHA-256(0x00 || block)`.
2. Node hashing: `SHA-256(0x01 || left || right)`.
3. Odd levels: the unpaired last node is hashed with itself.
4. Leaf order is the input order; it is never sorted.
5. A tree needs at least one block; a single block's leaf digest is the root.
"""

from .constants import DIGEST_LENGTH, LEAF_DOMAIN_TAG, MAX_TREE_DEPTH, NODE_DOMAIN_TAG
from .containers import AuthPathEntry, Orientation, Proof
from .digest import hash_leaf, hash_node
from .proof import prove
from .render import render_tree, short_digest
from .tree import Level, MerkleTree, build
from .utils import level_widths, tree_depth
from .verify import verify, verify_proof

__all__ = [
    # Constants
    "DIGEST_LENGTH",
    "LEAF_DOMAIN_TAG",
    "NODE_DOMAIN_TAG",
    "MAX_TREE_DEPTH",
    # Types
    "AuthPathEntry",
    "Level",
    "MerkleTree",
    "Orientation",
    "Proof",
    # Operations
    "hash_leaf",
    "hash_node",
    "build",
    "prove",
    "verify",
    "verify_proof",
    # Helpers
    "level_widths",
    "tree_depth",
    "render_tree",
    "short_digest",
]
