"""Order-preserving deduplication of listing items.

Listing APIs occasionally return the same article twice on one page (e.g. a
story pinned to the top and repeated further down).  :func:`deduplicate_by_id`
keeps the first occurrence of every identifier in a single O(n) pass.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


def _item_id(item: Any) -> Hashable:
    return item.id


def deduplicate_by_id(
    items: Iterable[T],
    key: Callable[[T], Hashable] = _item_id,
) -> list[T]:
    """Return *items* with only the first occurrence of each key retained.

    Relative order of the surviving items is preserved, so running the
    function twice yields the same list as running it once.

    Args:
        items: Items to deduplicate, in listing order.
        key: Function returning the identity of an item.  Defaults to the
            item's ``id`` attribute.

    Returns:
        A new list of unique items in first-seen order.
    """
    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        unique.append(item)
    return unique
