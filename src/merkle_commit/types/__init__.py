"""Reusable type definitions for Merkle commitments."""

from .base import StrictBaseModel
from .byte_arrays import BaseBytes, Digest
from .exceptions import (
    EmptyInputError,
    IndexOutOfRangeError,
    MalformedTreeError,
    MerkleError,
)

__all__ = [
    # Core types
    "BaseBytes",
    "Digest",
    "StrictBaseModel",
    # Exceptions
    "MerkleError",
    "EmptyInputError",
    "IndexOutOfRangeError",
    "MalformedTreeError",
]
