"""
Block loading for the command line.

The tree itself never reads files; this module turns files (or stdin) into
the ordered list of byte blocks the builder consumes.

Three splitting modes are supported:

- whole file: each file is one block, in the order given;
- lines: every line of every file is one block, without its line terminator;
- chunks: every file is cut into fixed-size chunks, the last one possibly shorter.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

STDIN_MARKER = "-"
"""Path value that stands for standard input."""


def chunk_bytes(data: bytes, chunk_size: int) -> Iterator[bytes]:
    """
    Split `data` into consecutive chunks of `chunk_size` bytes.

    Empty input yields no chunks.

    Raises:
        ValueError: If `chunk_size` is not positive.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    for offset in range(0, len(data), chunk_size):
        yield data[offset : offset + chunk_size]


def split_lines(data: bytes) -> list[bytes]:
    """Split `data` on line boundaries, dropping the terminators."""
    return data.splitlines()


def read_source(source: str | Path) -> bytes:
    """Read all bytes from a file path, or from stdin for `-`."""
    if str(source) == STDIN_MARKER:
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def read_blocks(
    sources: Iterable[str | Path],
    *,
    chunk_size: int | None = None,
    lines: bool = False,
) -> list[bytes]:
    """
    Load the ordered block list from `sources`.

    Args:
        sources: File paths, `-` for stdin. Order is preserved.
        chunk_size: Cut every source into chunks of this many bytes.
        lines: Treat every line as a block.

    Returns:
        The blocks, in source order.

    Raises:
        ValueError: If both `chunk_size` and `lines` are requested.
        OSError: If a source cannot be read.
    """
    if chunk_size is not None and lines:
        raise ValueError("chunk_size and lines are mutually exclusive")

    blocks: list[bytes] = []
    for source in sources:
        data = read_source(source)
        if chunk_size is not None:
            blocks.extend(chunk_bytes(data, chunk_size))
        elif lines:
            blocks.extend(split_lines(data))
        else:
            blocks.append(data)
    return blocks
