"""
Metrics module for observability.

Provides counters and histograms for tracking Merkle tree activity.
Exposes metrics in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    generate_metrics,
    leaves_hashed,
    proofs_generated,
    record_verification,
    tree_build_time,
    trees_built,
    verifications,
)

__all__ = [
    "REGISTRY",
    "generate_metrics",
    "leaves_hashed",
    "proofs_generated",
    "record_verification",
    "tree_build_time",
    "trees_built",
    "verifications",
]
