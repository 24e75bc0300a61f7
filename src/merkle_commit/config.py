"""
Global configuration for Merkle tree construction.

Settings are read from the environment once, at import time, and validated
immediately so a bad value fails loudly instead of silently degrading builds.
"""

import os


def _read_int(name: str, default: int, minimum: int) -> int:
    """Read an integer environment variable no smaller than `minimum`."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name} environment variable: '{raw}' is not an integer") from None
    if value < minimum:
        raise ValueError(f"Invalid {name} environment variable: {value} (must be >= {minimum})")
    return value


BUILD_WORKERS: int = _read_int("MERKLE_BUILD_WORKERS", default=1, minimum=1)
"""
Number of threads used to hash a single tree level.

Defaults to 1 (sequential). Hashing large blocks releases the GIL, so leaf
levels built from big blocks benefit the most from extra workers.
"""

PARALLEL_THRESHOLD: int = _read_int("MERKLE_PARALLEL_THRESHOLD", default=4096, minimum=2)
"""Minimum level width before hashing of that level is spread over workers."""
