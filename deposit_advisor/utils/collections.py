"""Ordering, grouping and indexing helpers over record sequences."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from functools import cmp_to_key
from typing import TypeVar

T = TypeVar('T')
K = TypeVar('K', bound=Hashable)


def order_by(items: Iterable[T], compare: Callable[[T, T], int]) -> list[T]:
    """Return a new list sorted by a three-way comparator.

    The sort is stable, so items comparing equal keep their input order.
    """
    return sorted(items, key=cmp_to_key(compare))


def group_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    """Group items by key, keeping input order inside each group."""
    out: dict[K, list[T]] = {}
    for item in items:
        out.setdefault(key(item), []).append(item)
    return out


def index_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, T]:
    """Map each key to its item. A later item replaces an earlier one with the same key."""
    out: dict[K, T] = {}
    for item in items:
        out[key(item)] = item
    return out
