"""
Reference helpers for the merkle_commit tests.

Digests here are recomputed straight from `hashlib`, so tests compare the
library against the hashing rules rather than against itself.
"""

from __future__ import annotations

from hashlib import sha256


def ref_leaf(block: bytes) -> bytes:
    """SHA-256 over the 0x00 leaf tag and the block."""
    return sha256(b"\x00" + block).digest()


def ref_node(left: bytes, right: bytes) -> bytes:
    """SHA-256 over the 0x01 node tag and both children."""
    return sha256(b"\x01" + left + right).digest()


def ref_root(blocks: list[bytes]) -> bytes:
    """Root of `blocks`, duplicating the last node of every odd level."""
    level = [ref_leaf(b) for b in blocks]
    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])
        level = [ref_node(level[i], level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


def make_blocks(n: int) -> list[bytes]:
    """`n` distinct blocks: b"block-0", b"block-1", ..."""
    return [f"block-{i}".encode() for i in range(n)]


__all__ = ["make_blocks", "ref_leaf", "ref_node", "ref_root"]
