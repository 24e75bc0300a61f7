"""
Merkle tree construction over an ordered sequence of data blocks.

### Representation

The tree is stored as an array of levels rather than as linked nodes:

- `levels[0]` holds one leaf digest per input block, in input order.
- `levels[i + 1]` holds `ceil(len(levels[i]) / 2)` parent digests.
- `levels[-1]` holds exactly one digest: the root.

Building is a bottom-up loop over levels, so large inputs never recurse, and
every level is a contiguous tuple that can be hashed in parallel batches.

### Odd Levels

When a level has an odd number of nodes, the final unpaired node is hashed
with itself: `parent = hash_node(x, x)`. Proof generation and verification
apply the same rule, so build and verify always agree on the tree shape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from pydantic import model_validator

from merkle_commit import config, metrics
from merkle_commit.types import (
    Digest,
    EmptyInputError,
    IndexOutOfRangeError,
    MalformedTreeError,
    StrictBaseModel,
)

from .containers import Proof
from .digest import hash_leaf, hash_node

logger = logging.getLogger(__name__)

T = TypeVar("T")

Level = tuple[Digest, ...]
"""One row of the tree, ordered left to right."""


def pair_up(level: Sequence[Digest]) -> list[tuple[Digest, Digest]]:
    """Group a level into `(left, right)` pairs, duplicating an unpaired last node."""
    return [
        (level[i], level[i + 1] if i + 1 < len(level) else level[i])
        for i in range(0, len(level), 2)
    ]


def _hash_blocks(blocks: Sequence[bytes]) -> list[Digest]:
    return [hash_leaf(block) for block in blocks]


def _hash_pairs(pairs: Sequence[tuple[Digest, Digest]]) -> list[Digest]:
    return [hash_node(left, right) for left, right in pairs]


def _map_in_order(
    fn: Callable[[Sequence[T]], list[Digest]],
    items: Sequence[T],
    executor: ThreadPoolExecutor | None,
    workers: int,
) -> Level:
    """
    Apply `fn` to `items` and return the digests in input order.

    With an executor, the items are split into one contiguous batch per worker.
    `Executor.map` yields results in submission order, so concatenating the
    batches restores the original ordering exactly.
    """
    if executor is None:
        return tuple(fn(items))

    size = -(-len(items) // workers)
    batches = [items[i : i + size] for i in range(0, len(items), size)]
    return tuple(digest for batch in executor.map(fn, batches) for digest in batch)


def _build_levels(
    blocks: Sequence[bytes],
    executor: ThreadPoolExecutor | None,
    workers: int,
    threshold: int,
) -> tuple[Level, ...]:
    """Hash the blocks into leaves, then reduce level by level up to the root."""

    def run(fn: Callable[[Sequence[T]], list[Digest]], items: Sequence[T]) -> Level:
        # Narrow levels are cheaper to hash inline than to dispatch.
        pool = executor if len(items) >= threshold else None
        return _map_in_order(fn, items, pool, workers)

    current = run(_hash_blocks, blocks)
    levels = [current]

    while len(current) > 1:
        current = run(_hash_pairs, pair_up(current))
        levels.append(current)

    return tuple(levels)


def _check_shape(levels: Sequence[Sequence[Digest]]) -> None:
    """
    Enforce the structural invariants of a level array.

    Raises:
        MalformedTreeError: If a level is missing or has the wrong width.
    """
    if len(levels) == 0 or len(levels[0]) == 0:
        raise MalformedTreeError("a tree needs at least one leaf")

    for i in range(1, len(levels)):
        expected = (len(levels[i - 1]) + 1) // 2
        if len(levels[i]) != expected:
            raise MalformedTreeError(
                f"expected {expected} nodes, found {len(levels[i])}",
                level=i,
            )

    if len(levels[-1]) != 1:
        raise MalformedTreeError(
            f"top level must hold exactly one root, found {len(levels[-1])}",
            level=len(levels) - 1,
        )


class MerkleTree(StrictBaseModel):
    """
    An immutable, fully materialized Merkle tree.

    Created once per input sequence by `MerkleTree.build` and read-only
    afterwards. Any number of threads may query the same tree concurrently.
    """

    levels: tuple[Level, ...]
    """
    Digest levels from the leaves (`levels[0]`) up to the root (`levels[-1]`).

    Only digests are kept; the block contents are discarded after hashing.
    """

    @model_validator(mode="after")
    def _validate_shape(self) -> MerkleTree:
        """Reject level arrays that cannot describe a tree."""
        _check_shape(self.levels)
        return self

    @classmethod
    def build(
        cls,
        blocks: Iterable[bytes],
        *,
        workers: int | None = None,
        parallel_threshold: int | None = None,
    ) -> MerkleTree:
        """
        Build a tree from an ordered sequence of blocks.

        ### Construction Algorithm

        1.  **Leaves**: Every block is hashed with `hash_leaf`, preserving
            input order. Index 0 is the leftmost leaf.

        2.  **Parents**: Adjacent digests are paired left to right and hashed
            with `hash_node`. An unpaired final node is paired with itself.

        3.  **Termination**: The reduction repeats until one digest remains.
            That digest is the root.

        Building is a pure function of the block sequence: identical
        sequences always produce identical trees.

        Args:
            blocks: The data blocks, in order.
            workers: Threads used to hash one level. Defaults to
                `config.BUILD_WORKERS`.
            parallel_threshold: Minimum level width before hashing is spread
                over the workers. Defaults to `config.PARALLEL_THRESHOLD`.

        Returns:
            The constructed tree.

        Raises:
            EmptyInputError: If `blocks` is empty.
            TypeError: If a block is not bytes-like.
        """
        blocks = list(blocks)
        if not blocks:
            raise EmptyInputError()

        workers = config.BUILD_WORKERS if workers is None else workers
        threshold = config.PARALLEL_THRESHOLD if parallel_threshold is None else parallel_threshold
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")

        with metrics.tree_build_time.time():
            # The leaf level is the widest; if it is below the threshold, no level needs a pool.
            if workers > 1 and len(blocks) >= threshold:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    levels = _build_levels(blocks, executor, workers, threshold)
            else:
                levels = _build_levels(blocks, None, 1, threshold)

        metrics.trees_built.inc()
        metrics.leaves_hashed.inc(len(blocks))

        tree = cls(levels=levels)
        logger.debug(
            "Built Merkle tree leaves=%d depth=%d root=%s",
            tree.leaf_count(),
            tree.depth(),
            tree.root().hex(),
        )
        return tree

    @classmethod
    def from_levels(cls, levels: Iterable[Iterable[bytes]]) -> MerkleTree:
        """
        Rebuild a tree from previously stored digest levels.

        Unlike `build`, the input is not trusted: every level width and every
        parent digest is recomputed and checked against its children.

        Raises:
            MalformedTreeError: If the levels do not form a valid tree.
        """
        try:
            checked = tuple(tuple(Digest(d) for d in level) for level in levels)
        except (ValueError, TypeError) as exc:
            raise MalformedTreeError(f"invalid digest: {exc}") from exc

        _check_shape(checked)

        for i in range(1, len(checked)):
            if list(checked[i]) != _hash_pairs(pair_up(checked[i - 1])):
                raise MalformedTreeError("parent digests do not match their children", level=i)

        return cls(levels=checked)

    def root(self) -> Digest:
        """Return the root digest, which commits to the whole ordered block sequence."""
        return self.levels[-1][0]

    def leaf_count(self) -> int:
        """Return the number of blocks the tree was built from."""
        return len(self.levels[0])

    def depth(self) -> int:
        """Return the number of levels above the leaves (the authentication path length)."""
        return len(self.levels) - 1

    def leaf_digest(self, index: int) -> Digest:
        """
        Return the leaf digest at `index`.

        Raises:
            IndexOutOfRangeError: If no leaf exists at `index`.
        """
        if index < 0 or index >= self.leaf_count():
            raise IndexOutOfRangeError(index, self.leaf_count())
        return self.levels[0][index]

    def index_of(self, block: bytes) -> int | None:
        """
        Return the position of the first leaf built from `block`.

        The tree keeps no block content, so the block is hashed and matched
        against the leaf digests.

        Returns:
            The leftmost matching index, or `None` if `block` is not in the tree.

        Raises:
            TypeError: If `block` is not bytes-like.
        """
        target = hash_leaf(block)
        for index, digest in enumerate(self.levels[0]):
            if digest == target:
                return index
        return None

    def proof(self, index: int) -> Proof:
        """
        Return the inclusion proof for the leaf at `index`.

        This is a convenience method that delegates to `prove`.
        """
        from .proof import prove

        return prove(self, index)


def build(
    blocks: Iterable[bytes],
    *,
    workers: int | None = None,
    parallel_threshold: int | None = None,
) -> MerkleTree:
    """Build a `MerkleTree` from `blocks`. See `MerkleTree.build`."""
    return MerkleTree.build(blocks, workers=workers, parallel_threshold=parallel_threshold)
