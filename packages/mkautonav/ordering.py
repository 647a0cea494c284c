"""Sibling ordering for the navigation tree.

Default rule, given sort weights resolved per item and each item's earliest
timestamp (first commit, else local creation):

1. Both items have a weight: ascending weight, then ascending time.
2. Only one has a weight: it is treated as a target slot. When the weight
   equals the other item's pre-sort index the weighted item goes first,
   otherwise the weight is compared with that index.
3. Neither has a weight: ascending time.
"""

from __future__ import annotations

from functools import cmp_to_key

from mkautonav.models import CompareFn, Item
from mkautonav.resolver import item_option


def default_compare(a: Item, b: Item, frontmatter_prefix: str = "") -> float:
    """Compare two sibling items.

    Args:
        a: First item
        b: Second item
        frontmatter_prefix: Prefix for frontmatter overrides

    Returns:
        Negative if a sorts first, positive if b sorts first, else zero
    """
    sort_a = item_option(a, "sort", frontmatter_prefix)
    sort_b = item_option(b, "sort", frontmatter_prefix)

    time_a = a.times.earliest
    time_b = b.times.earliest

    if sort_a is not None and sort_b is not None:
        return (sort_a - sort_b) or (time_a - time_b)
    if sort_a is not None:
        return -1 if sort_a == b.index else sort_a - b.index
    if sort_b is not None:
        return 1 if sort_b == a.index else a.index - sort_b
    return time_a - time_b


def sort_tree(items: list[Item], compare_fn: CompareFn | None = None, frontmatter_prefix: str = "") -> list[Item]:
    """Order every sibling group of the tree.

    Each item's ``index`` is set to its pre-sort position and its children
    are ordered before the group itself is sorted. The sort is stable.

    Args:
        items: Sibling list
        compare_fn: Replacement for the default comparison
        frontmatter_prefix: Prefix for frontmatter overrides

    Returns:
        New sorted sibling list
    """
    compare = compare_fn or default_compare
    for index, item in enumerate(items):
        item.index = index
        if item.children:
            item.children = sort_tree(item.children, compare_fn, frontmatter_prefix)

    return sorted(items, key=cmp_to_key(lambda a, b: _sign(compare(a, b, frontmatter_prefix))))


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)
