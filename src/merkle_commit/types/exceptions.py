"""Exception hierarchy for Merkle tree construction and proof generation."""

from __future__ import annotations


class MerkleError(Exception):
    """
    Base exception for all Merkle-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class EmptyInputError(MerkleError, ValueError):
    """
    Raised when a tree is built from zero blocks.

    A tree without leaves has no well-defined root, so there is nothing to
    commit to and nothing to recover from.
    """

    def __init__(self, message: str = "Cannot build a Merkle tree from zero blocks") -> None:
        super().__init__(message)


class IndexOutOfRangeError(MerkleError, IndexError):
    """
    Raised when a proof is requested for a leaf that does not exist.

    Attributes:
        index: The requested leaf index.
        leaf_count: The number of leaves in the tree.
    """

    def __init__(self, index: int, leaf_count: int) -> None:
        self.index = index
        self.leaf_count = leaf_count
        super().__init__(f"Leaf index {index} out of range for a tree with {leaf_count} leaves")


class MalformedTreeError(MerkleError, ValueError):
    """
    Raised when stored digest levels do not describe a valid tree.

    Attributes:
        level: The level at which the inconsistency was found (if known).
        detail: Description of what went wrong.
    """

    def __init__(self, detail: str, *, level: int | None = None) -> None:
        self.level = level
        self.detail = detail

        msg = f"Malformed Merkle tree: {detail}"
        if level is not None:
            msg = f"{msg} (at level {level})"

        super().__init__(msg)
