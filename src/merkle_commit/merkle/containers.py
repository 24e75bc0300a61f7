"""
Data containers for Merkle inclusion proofs.

A proof is a self-contained value: once produced it no longer depends on the
tree it came from, and it can be serialized, sent elsewhere and checked by a
party that only knows the root.

Wire shape (JSON):

    {
        "index": 2,
        "leaf": "<hex leaf digest>",
        "path": [
            {"sibling": "<hex digest>", "orientation": 1},
            {"sibling": "<hex digest>", "orientation": 0}
        ]
    }

`orientation` is a single bit: 0 (LEFT) or 1 (RIGHT).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import IntEnum
from typing import Any

from pydantic import Field, field_validator

from merkle_commit.types import Digest, StrictBaseModel


class Orientation(IntEnum):
    """Which side of the running hash a sibling digest sits on."""

    LEFT = 0
    """The sibling is the left operand: `hash_node(sibling, current)`."""
    RIGHT = 1
    """The sibling is the right operand: `hash_node(current, sibling)`."""

    @classmethod
    def parse(cls, value: Any) -> Orientation:
        """
        Interpret an untrusted orientation value.

        Accepts an `Orientation`, the bits 0 and 1, or the names "left" and
        "right" in any case.

        Raises:
            ValueError: For anything else, including booleans.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError("Orientation must be 0 or 1, not a boolean")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown orientation name: {value!r}") from None
        raise ValueError(f"Invalid orientation: {value!r}")


class AuthPathEntry(StrictBaseModel):
    """One step of an authentication path."""

    sibling: Digest
    """The digest combined with the running hash at this level."""

    orientation: Orientation
    """Whether `sibling` is the left or the right operand."""

    @field_validator("orientation", mode="before")
    @classmethod
    def _parse_orientation(cls, value: Any) -> Orientation:
        return Orientation.parse(value)

    @classmethod
    def coerce(cls, value: Any) -> AuthPathEntry:
        """
        Build an entry from an entry, a mapping, or a `(sibling, orientation)` pair.

        Raises:
            ValueError: If the value cannot be interpreted as an entry.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            if len(value) != 2:
                raise ValueError(f"Path entry pairs need 2 items, got {len(value)}")
            sibling, orientation = value
            return cls.model_validate({"sibling": sibling, "orientation": orientation})
        raise ValueError(f"Invalid authentication path entry: {type(value).__name__}")


class Proof(StrictBaseModel):
    """
    An inclusion proof for a single leaf.

    The tree never keeps block content, so `leaf` holds the leaf digest
    rather than the block. A verifier always hashes the block it was handed
    and compares it against `leaf`; it never trusts `leaf` as a starting point.
    """

    index: int = Field(ge=0)
    """Position of the leaf, 0 being leftmost."""

    leaf: Digest
    """Leaf digest of the proven block."""

    path: tuple[AuthPathEntry, ...]
    """Sibling digests from the leaf level up to, but excluding, the root."""

    @field_validator("path", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> tuple[AuthPathEntry, ...]:
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
            raise ValueError("Authentication path must be a sequence of entries")
        return tuple(AuthPathEntry.coerce(entry) for entry in value)

    def to_dict(self) -> dict[str, Any]:
        """Return the flat, JSON-compatible representation."""
        return self.model_dump(mode="json")

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to a JSON string."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Proof:
        """
        Parse the flat representation produced by `to_dict`.

        Raises:
            pydantic.ValidationError: If the data is malformed.
        """
        return cls.model_validate(dict(data))

    @classmethod
    def from_json(cls, text: str | bytes) -> Proof:
        """
        Parse a JSON string produced by `to_json`.

        Raises:
            pydantic.ValidationError: If the JSON is malformed.
        """
        return cls.model_validate_json(text)

    def verify(self, leaf: bytes, root: bytes, *, leaf_count: int | None = None) -> bool:
        """
        Check that `leaf` sits at `index` under `root`.

        This is a convenience method that delegates to `verify_proof`.
        """
        from .verify import verify_proof

        return verify_proof(self, leaf, root, leaf_count=leaf_count)
