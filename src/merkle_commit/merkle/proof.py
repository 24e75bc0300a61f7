"""Authentication path extraction for single-leaf inclusion proofs."""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING

from merkle_commit import metrics
from merkle_commit.types import IndexOutOfRangeError

from .containers import AuthPathEntry, Orientation, Proof

if TYPE_CHECKING:
    from .tree import MerkleTree


def prove(tree: MerkleTree, index: int) -> Proof:
    """
    Compute the inclusion proof for the leaf at `index`.

    ### Path Generation Algorithm

    The walk climbs from the leaf level to the level just below the root.
    At each level:

    1.  The sibling position is `position ^ 1`. If that falls past the end
        of the level, the node is the unpaired last node and was hashed with
        itself, so its own digest is recorded as the sibling.

    2.  The orientation is RIGHT when the node is a left child (even
        position) and LEFT when it is a right child (odd position).

    3.  The position moves up to the parent: `position // 2`.

    The resulting path always holds `ceil(log2(leaf_count))` entries.

    Args:
        tree: The tree to read sibling digests from.
        index: The 0-based position of the leaf.

    Returns:
        A self-contained `Proof`.

    Raises:
        IndexOutOfRangeError: If `index` is negative or `>= tree.leaf_count()`.
    """
    index = operator.index(index)
    leaf_count = tree.leaf_count()
    if index < 0 or index >= leaf_count:
        raise IndexOutOfRangeError(index, leaf_count)

    path: list[AuthPathEntry] = []
    position = index

    # The root level contributes no sibling.
    for level in tree.levels[:-1]:
        sibling_position = position ^ 1
        if sibling_position < len(level):
            sibling = level[sibling_position]
        else:
            sibling = level[position]

        orientation = Orientation.RIGHT if position % 2 == 0 else Orientation.LEFT
        path.append(AuthPathEntry(sibling=sibling, orientation=orientation))
        position //= 2

    metrics.proofs_generated.inc()
    return Proof(index=index, leaf=tree.levels[0][index], path=tuple(path))
