"""
Text rendering of a Merkle tree.

Presentation only: nothing here is needed to build, prove or verify.

Layout for the blocks `a b c`, each node shown as `short_digest(...)`:

    └──root
        ├──node(a, b)
        │   ├──leaf(a)
        │   └──leaf(b)
        └──node(c, c)
            ├──leaf(c)
            └──leaf(c) (dup)
"""

from __future__ import annotations

from .tree import MerkleTree


def short_digest(digest: bytes, head: int = 3, tail: int = 4) -> str:
    """
    Abbreviate a digest as its first `head` and last `tail` hex characters.

    Example: `short_digest(d)` -> `"1f3...9a0c"`.
    """
    text = digest.hex()
    if len(text) <= head + tail:
        return text
    return f"{text[:head]}...{text[-tail:]}"


def render_tree(tree: MerkleTree) -> str:
    """
    Draw `tree` from the root down, one node per line.

    Left children are drawn before right children. The copy of an unpaired
    node that was hashed with itself is marked `(dup)` and not expanded.
    """
    lines: list[str] = []
    top = len(tree.levels) - 1

    # Stack entries: (level, position, prefix, is_left, duplicate).
    stack: list[tuple[int, int, str, bool, bool]] = [(top, 0, "", False, False)]

    while stack:
        level, position, prefix, is_left, duplicate = stack.pop()
        connector = "├──" if is_left else "└──"
        label = short_digest(tree.levels[level][position])
        lines.append(f"{prefix}{connector}{label}{' (dup)' if duplicate else ''}")

        # Duplicated copies are drawn as a single line.
        if level == 0 or duplicate:
            continue

        child_prefix = prefix + ("│   " if is_left else "    ")
        children = tree.levels[level - 1]
        left = 2 * position
        right = left + 1

        # Push the right child first so the left one is drawn first.
        if right < len(children):
            stack.append((level - 1, right, child_prefix, False, False))
        else:
            stack.append((level - 1, left, child_prefix, False, True))
        stack.append((level - 1, left, child_prefix, True, False))

    return "\n".join(lines)
