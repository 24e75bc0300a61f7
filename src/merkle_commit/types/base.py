"""Reusable, strict base models for the Merkle value types."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic base model.

    Instances never change after construction, so trees and proofs can be
    shared between threads without locking. Unknown fields are rejected.
    """

    model_config = ConfigDict(
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
