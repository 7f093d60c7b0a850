"""Diffing of cached against freshly fetched records."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ReconcileResult(Generic[T]):
    """Changes needed to bring a cached collection in line with a fetch.

    Attributes:
        added: Fetched items whose key is not cached yet.
        updated: Fetched items whose key is already cached.
        removed: Cached items whose key is missing from the fetch.
    """

    added: list[T] = field(default_factory=list)
    updated: list[T] = field(default_factory=list)
    removed: list[T] = field(default_factory=list)

    @property
    def upserts(self) -> list[T]:
        return self.added + self.updated


def reconcile(
    cached: Iterable[T],
    fetched: Iterable[T],
    key: Callable[[T], Hashable],
) -> ReconcileResult[T]:
    """Compare two keyed collections.

    Args:
        cached: Items currently held in the cache.
        fetched: Items returned by the latest remote fetch.
        key: Function returning the identity key of an item.

    Returns:
        ReconcileResult with items in their input order.
    """
    cached = list(cached)
    fetched = list(fetched)
    cached_keys = {key(item) for item in cached}
    fetched_keys = {key(item) for item in fetched}

    result: ReconcileResult[T] = ReconcileResult()
    for item in fetched:
        if key(item) in cached_keys:
            result.updated.append(item)
        else:
            result.added.append(item)
    result.removed = [item for item in cached if key(item) not in fetched_keys]
    return result
