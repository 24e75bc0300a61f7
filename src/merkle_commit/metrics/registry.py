"""
Metric registry using prometheus_client.

Tracks tree construction, proof generation and proof verification.
Exposes metrics in Prometheus text format.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a dedicated registry for Merkle metrics.
#
# Using a dedicated registry avoids pollution from default Python process metrics.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Tree Construction
# -----------------------------------------------------------------------------

trees_built = Counter(
    "merkle_trees_built_total",
    "Total Merkle trees built",
    registry=REGISTRY,
)

leaves_hashed = Counter(
    "merkle_leaves_hashed_total",
    "Total blocks hashed into leaf digests",
    registry=REGISTRY,
)

tree_build_time = Histogram(
    "merkle_tree_build_seconds",
    "Merkle tree build duration",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Proofs
# -----------------------------------------------------------------------------

proofs_generated = Counter(
    "merkle_proofs_generated_total",
    "Total inclusion proofs generated",
    registry=REGISTRY,
)

verifications = Counter(
    "merkle_verifications_total",
    "Total inclusion proof verifications, by outcome",
    ["result"],
    registry=REGISTRY,
)


def record_verification(valid: bool) -> None:
    """Count one verification under its `valid` / `invalid` outcome label."""
    verifications.labels(result="valid" if valid else "invalid").inc()


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
