"""Precision-aware memo tables.

All caches in the package (partition counts, Möbius sums, character values,
statistic terms, monomial products) are PrecisionCache instances. An entry
stores a value together with the precision it was computed at; a lookup asking
for more precision than is stored is a miss, and storing a deeper result
overwrites the shallower one. Exact results use ``precision=None``, which
satisfies every request.

Caches are unbounded and never evicted. They are not synchronised: share a
cache between threads only behind a lock.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

V = TypeVar("V")

_REGISTRY: "weakref.WeakSet[PrecisionCache]" = weakref.WeakSet()


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    precision: int | None = None

    def covers(self, precision: int | None) -> bool:
        if self.precision is None:
            return True
        if precision is None:
            return False
        return self.precision >= precision


class PrecisionCache(Generic[V]):
    """Dict-backed memo table keyed by input, aware of computed precision."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: dict[Hashable, CacheEntry[V]] = {}
        self.hits = 0
        self.misses = 0
        _REGISTRY.add(self)

    def lookup(self, key: Hashable, precision: int | None = None) -> V | None:
        """Cached value for key if it was computed to at least `precision`."""
        entry = self._entries.get(key)
        if entry is not None and entry.covers(precision):
            self.hits += 1
            return entry.value
        self.misses += 1
        return None

    def entry(self, key: Hashable) -> CacheEntry[V] | None:
        return self._entries.get(key)

    def store(self, key: Hashable, value: V, precision: int | None = None) -> V:
        """Record value; never replaces a deeper entry with a shallower one."""
        current = self._entries.get(key)
        if current is None or not current.covers(precision):
            self._entries[key] = CacheEntry(value, precision)
        return value

    def get_or_compute(
        self,
        key: Hashable,
        compute: Callable[[], V],
        precision: int | None = None,
    ) -> V:
        cached = self.lookup(key, precision)
        if cached is not None:
            return cached
        return self.store(key, compute(), precision)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PrecisionCache({self.name!r}, entries={len(self)})"


def clear_all_caches() -> None:
    """Empty every live PrecisionCache (used by tests and long batch runs)."""
    for cache in list(_REGISTRY):
        cache.clear()
