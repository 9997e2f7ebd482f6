"""
Nested-set indexing of the division forest.

A single depth-first pass assigns ``left`` on entry and ``right`` on exit
from one counter that keeps increasing across the whole forest, so a
node's range strictly contains every descendant's range and sibling
ranges are disjoint and ordered:

    A(1,8)        E(9,12)
      |              |
    B(2,7)        F(10,11)
      |
    C(3,6)
      |
    D(4,5)

x is a descendant of y iff ``y.left < x.left and x.right < y.right``.

The counter is threaded through the recursion by value. Any subtree can
therefore be indexed on its own given its starting offset, which
root_offsets() derives from subtree sizes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import IndexInvariantError
from .models import Area

LOG = logging.getLogger("nested_division.indexer")

# lft/rgt are stored as signed 32-bit integers.
MAX_KEY = 2**31 - 1


def index_tree(node: Area, counter: int = 0, depth: int = 1) -> int:
    """
    Index one subtree.

    Args:
        node: Subtree root.
        counter: Last value assigned before this subtree.
        depth: Depth of ``node`` (1 for provinces).

    Returns:
        Last value assigned inside this subtree (``node.right``).
    """
    counter += 1
    node.left = counter
    node.depth = depth
    for child in node.children:
        counter = index_tree(child, counter, depth + 1)
    counter += 1
    if counter > MAX_KEY:
        raise IndexInvariantError(f"Nested-set key overflow at {node.code!r}: {counter}")
    node.right = counter
    return counter


def assign_keys(forest: Sequence[Area]) -> int:
    """
    Index every tree with one counter shared across the forest.

    Returns:
        The last key assigned, equal to twice the node count.
    """
    counter = 0
    for root in forest:
        counter = index_tree(root, counter)
    if forest:
        LOG.info("Keys from %d to %d", forest[0].left, forest[-1].right)
    return counter


def subtree_size(node: Area) -> int:
    """Number of nodes in ``node``'s subtree, itself included."""
    return 1 + sum(subtree_size(child) for child in node.children)


def root_offsets(forest: Sequence[Area]) -> list[int]:
    """
    Counter value preceding each root in whole-forest order.

    ``index_tree(forest[i], root_offsets(forest)[i])`` gives the same keys
    as assign_keys(), so provinces can be indexed independently.
    """
    offsets = []
    counter = 0
    for root in forest:
        offsets.append(counter)
        counter += 2 * subtree_size(root)
    return offsets


def verify_forest(forest: Sequence[Area]) -> int:
    """
    Check nested-set invariants over an indexed forest.

    Checks that every range is well formed, children are nested inside
    their parent in order, depth grows by one per level, roots are ordered,
    and the keys used are exactly 1..2n.

    Returns:
        Number of nodes checked.

    Raises:
        IndexInvariantError: On the first violation found.
    """
    keys: list[int] = []
    previous_right = 0
    for root in forest:
        if root.left <= previous_right:
            raise IndexInvariantError(
                f"Root {root.code!r} starts at {root.left}, not after {previous_right}"
            )
        _verify_subtree(root, 1, keys)
        previous_right = root.right

    keys.sort()
    if keys != list(range(1, len(keys) + 1)):
        raise IndexInvariantError("Nested-set keys are not contiguous from 1")
    return len(keys) // 2


def _verify_subtree(node: Area, depth: int, keys: list[int]) -> None:
    if not 0 < node.left < node.right:
        raise IndexInvariantError(f"Bad range ({node.left}, {node.right}) at {node.code!r}")
    if node.depth != depth:
        raise IndexInvariantError(f"{node.code!r} has depth {node.depth}, expected {depth}")
    keys.extend((node.left, node.right))

    bound = node.left
    for child in node.children:
        if child.left <= bound:
            raise IndexInvariantError(
                f"{child.code!r} ({child.left}, {child.right}) overlaps its "
                f"predecessor inside {node.code!r}"
            )
        _verify_subtree(child, depth + 1, keys)
        bound = child.right
    if node.right <= bound:
        raise IndexInvariantError(f"{node.code!r} does not enclose its children")
