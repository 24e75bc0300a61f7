"""
Inclusion proof verification.

Verification only needs the claimed block, the authentication path and a
trusted root. It never touches a `MerkleTree`, so a party holding nothing but
the root can check proofs received from elsewhere.

Every function here is a total predicate: malformed, truncated or hostile
input yields `False` and never an exception.
"""

from __future__ import annotations

import hmac
import logging
import operator
from collections.abc import Mapping, Sequence
from typing import Any

from merkle_commit import metrics
from merkle_commit.types import Digest

from .constants import MAX_TREE_DEPTH
from .containers import AuthPathEntry, Orientation, Proof
from .digest import hash_leaf, hash_node
from .utils import level_widths, tree_depth

logger = logging.getLogger(__name__)


def _coerce_path(path: Any) -> tuple[AuthPathEntry, ...]:
    """
    Interpret an untrusted authentication path.

    Raises:
        ValueError: If the path or one of its entries is malformed.
    """
    if isinstance(path, (str, bytes, bytearray)) or not isinstance(path, Sequence):
        raise ValueError("Authentication path must be a sequence of entries")
    if len(path) > MAX_TREE_DEPTH:
        raise ValueError(f"Authentication path longer than {MAX_TREE_DEPTH} entries")
    return tuple(AuthPathEntry.coerce(entry) for entry in path)


def _recompute(
    leaf: bytes,
    index: int | None,
    path: tuple[AuthPathEntry, ...],
    leaf_count: int | None,
) -> Digest | None:
    """
    Climb from `leaf` to a candidate root.

    Returns `None` as soon as a positional or shape check fails.
    """
    widths: list[int] | None = None

    if index is not None:
        # Each orientation encodes one bit of the index, so the index must fit in the path.
        if index < 0 or index >> len(path) != 0:
            return None

    if leaf_count is not None:
        if leaf_count < 1 or len(path) != tree_depth(leaf_count):
            return None
        if index is None:
            # The orientations spell out the position: LEFT marks a set bit.
            index = sum(1 << k for k, e in enumerate(path) if e.orientation == Orientation.LEFT)
        if index >= leaf_count:
            return None
        widths = level_widths(leaf_count)

    current = hash_leaf(leaf)
    position = index

    for level, entry in enumerate(path):
        if position is not None:
            # A left child (even position) must have its sibling on the right.
            expected = Orientation.RIGHT if position % 2 == 0 else Orientation.LEFT
            if entry.orientation != expected:
                return None

            # The unpaired last node of a level is hashed with itself.
            if widths is not None and position ^ 1 >= widths[level] and entry.sibling != current:
                return None

            position //= 2

        if entry.orientation == Orientation.LEFT:
            current = hash_node(entry.sibling, current)
        else:
            current = hash_node(current, entry.sibling)

    return current


def verify(
    leaf: bytes,
    index: int | None,
    path: Sequence[Any],
    expected_root: bytes,
    *,
    leaf_count: int | None = None,
) -> bool:
    """
    Check that `leaf` is included under `expected_root`.

    ### Verification Algorithm

    1.  **Leaf**: `current = hash_leaf(leaf)`.

    2.  **Climb**: For each path entry in order, a LEFT sibling gives
        `hash_node(sibling, current)` and a RIGHT sibling gives
        `hash_node(current, sibling)`.

    3.  **Compare**: The proof holds iff the final digest equals `expected_root`.

    The orientations alone are enough to rebuild the root. When `index` is
    given, each orientation must also agree with the matching bit of `index`,
    which binds the proof to one position. When `leaf_count` is given, the
    path length must equal the depth of a tree of that size, the position
    (the index, or the one the orientations spell out) must be below
    `leaf_count`, and the duplicated-node rule is enforced wherever the path
    meets an unpaired node.

    Args:
        leaf: The claimed block (not its digest).
        index: The claimed leaf position, or `None` if unknown.
        path: `AuthPathEntry` objects, mappings, or `(sibling, orientation)` pairs.
        expected_root: The trusted root digest.
        leaf_count: The size of the committed tree, if known.

    Returns:
        `True` if the path rebuilds `expected_root`, `False` otherwise.
    """
    try:
        if not isinstance(leaf, (bytes, bytearray, memoryview)):
            raise TypeError(f"Leaf must be bytes-like, got {type(leaf).__name__}")
        root = Digest(expected_root)
        entries = _coerce_path(path)
        position = None if index is None else operator.index(index)
        count = None if leaf_count is None else operator.index(leaf_count)
        candidate = _recompute(leaf, position, entries, count)
    except (ValueError, TypeError) as exc:
        logger.debug("Rejected malformed inclusion proof: %s", exc)
        metrics.record_verification(False)
        return False

    valid = candidate is not None and hmac.compare_digest(candidate, root)
    metrics.record_verification(valid)
    return valid


def verify_proof(
    proof: Proof | Mapping[str, Any] | str | bytes,
    leaf: bytes,
    expected_root: bytes,
    *,
    leaf_count: int | None = None,
) -> bool:
    """
    Check a serialized or structured proof for `leaf` against `expected_root`.

    Besides the path itself, the proof's recorded leaf digest must match the
    digest of `leaf`.

    Args:
        proof: A `Proof`, its dict form, or its JSON form.
        leaf: The claimed block.
        expected_root: The trusted root digest.
        leaf_count: The size of the committed tree, if known.

    Returns:
        `True` if the proof is well-formed and valid, `False` otherwise.
    """
    try:
        if isinstance(proof, Proof):
            parsed = proof
        elif isinstance(proof, Mapping):
            parsed = Proof.from_dict(proof)
        elif isinstance(proof, (str, bytes)):
            parsed = Proof.from_json(proof)
        else:
            raise TypeError(f"Unsupported proof type {type(proof).__name__}")
        leaf_matches = hmac.compare_digest(hash_leaf(leaf), parsed.leaf)
    except (ValueError, TypeError) as exc:
        logger.debug("Rejected malformed inclusion proof: %s", exc)
        metrics.record_verification(False)
        return False

    if not leaf_matches:
        metrics.record_verification(False)
        return False

    return verify(leaf, parsed.index, parsed.path, expected_root, leaf_count=leaf_count)
