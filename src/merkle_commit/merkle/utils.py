"""Shape helpers for binary Merkle trees with duplicated odd nodes."""


def tree_depth(leaf_count: int) -> int:
    """
    Number of levels above the leaves, i.e. the authentication path length.

    Equals `ceil(log2(leaf_count))`. Examples: 1->0, 2->1, 3->2, 4->2, 5->3.
    """
    if leaf_count < 1:
        raise ValueError(f"A tree needs at least one leaf, got {leaf_count}")
    return (leaf_count - 1).bit_length()


def level_widths(leaf_count: int) -> list[int]:
    """
    Number of nodes stored at each level, from the leaves up to the root.

    Each level holds `ceil(previous / 2)` nodes. Example: 5 -> [5, 3, 2, 1].
    """
    if leaf_count < 1:
        raise ValueError(f"A tree needs at least one leaf, got {leaf_count}")
    widths = [leaf_count]
    while widths[-1] > 1:
        widths.append((widths[-1] + 1) // 2)
    return widths
