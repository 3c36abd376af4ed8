"""Generic LRU cache with statistics.

Used to memoize pure computations (resolved palettes, compiled styles)
keyed by a content hash of their inputs.
"""

from typing import Callable, Generic, TypeVar, Any
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class LRUCache(Generic[T]):
    """
    Bounded least-recently-used cache.

    Examples:
        >>> cache = LRUCache[str](max_size=2)
        >>> cache.set("a", "1")
        >>> cache.get("a")
        '1'
        >>> cache.stats.hit_rate
        1.0
    """

    def __init__(self, max_size: int = 128):
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self._cache: OrderedDict[str, T] = OrderedDict()
        self._stats = Stats(max_size=max_size)
        self._lock = Lock()

    def get(self, key: str) -> T | None:
        """Get cached value, or None on a miss."""
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._stats.hits += 1
                return self._cache[key]
            self._stats.misses += 1
            return None

    def set(self, key: str, value: T) -> None:
        """Cache value, evicting the least recently used entry when full."""
        with self._lock:
            if key in self._cache:
                del self._cache[key]
            self._cache[key] = value

            if len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
                self._stats.evictions += 1

            self._stats.size = len(self._cache)

    def get_or_compute(self, key: str, factory: Callable[[], T]) -> T:
        """
        Return the cached value for key, computing and storing it on a miss.

        The factory runs outside the lock; two concurrent misses may both
        compute, which is harmless for pure factories.
        """
        cached = self.get(key)
        if cached is not None:
            return cached
        value = factory()
        self.set(key, value)
        return value

    def delete(self, key: str) -> bool:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                self._stats.size = len(self._cache)
                return True
            return False

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._cache.clear()
            self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        """Check if key exists (doesn't update LRU order)."""
        return key in self._cache


__all__ = ["LRUCache", "Stats"]
