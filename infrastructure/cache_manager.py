"""
infrastructure/cache_manager.py

Bounded failure-state memo for the backtracking solvers.

Features:
- LRU eviction via cachetools.LRUCache (bounded memory on large boards)
- Stores negative results only: a key present means "this board state
  has no completion worth exploring"
- Statistics tracking (hits, misses, sets, hit rate)

Architecture:
- One FailureStateCache per solver instance, never shared
- Keys are the solvers' board encodings (bytes or int)
- No locks: a solver instance runs on a single thread, parallel solvers
  each own their memo

Usage:
    from infrastructure.cache_manager import FailureStateCache

    memo = FailureStateCache(maxsize=100_000)
    if memo.contains(key):
        dead_ends += 1
    ...
    memo.mark_failed(key)

    stats = memo.get_stats()
    print(f"Hit rate: {stats['hit_rate']:.2%}")
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Hashable

from cachetools import LRUCache

from common.constants import SOLVER_CACHE_MAXSIZE
from component_15_logging_config import get_logger

logger = get_logger(__name__)


# ============================================================================
# Data Structures
# ============================================================================


@dataclass
class CacheStatistics:
    """Statistics for a single failure memo."""

    cache_name: str
    hits: int = 0
    misses: int = 0
    sets: int = 0
    invalidations: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def total_requests(self) -> int:
        """Total lookups (hits + misses)."""
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate (0.0-1.0)."""
        if self.total_requests == 0:
            return 0.0
        return self.hits / self.total_requests


# ============================================================================
# Failure State Cache
# ============================================================================


class FailureStateCache:
    """
    Bounded set of board states known to lead to no solution.

    Only negative results are recorded, so evicting an entry never changes a
    solver's answer. It only means the sub-tree may be explored again.

    Attributes:
        name: Name used in logs and statistics
        maxsize: Maximum number of stored states
        statistics: CacheStatistics for this memo
    """

    def __init__(self, maxsize: int = SOLVER_CACHE_MAXSIZE, name: str = "failures"):
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")

        self.name = name
        self.maxsize = maxsize
        self._cache: LRUCache = LRUCache(maxsize=maxsize)
        self.statistics = CacheStatistics(cache_name=name)

    def contains(self, key: Hashable) -> bool:
        """
        Check whether a board state is a known failure.

        Counts a hit or a miss. A hit refreshes the entry's LRU position.
        """
        if self._cache.get(key) is not None:
            self.statistics.hits += 1
            return True

        self.statistics.misses += 1
        return False

    def mark_failed(self, key: Hashable) -> None:
        """Record a board state as failing."""
        self._cache[key] = True
        self.statistics.sets += 1

    def clear(self) -> None:
        """Drop all stored states."""
        size = len(self._cache)
        self._cache.clear()
        self.statistics.invalidations += 1
        logger.debug(
            "Failure memo cleared", extra={"cache_name": self.name, "entries": size}
        )

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get memo statistics.

        Returns:
            Dictionary with hits, misses, sets, hit_rate, size, maxsize
        """
        stats = self.statistics
        return {
            "cache_name": stats.cache_name,
            "hits": stats.hits,
            "misses": stats.misses,
            "sets": stats.sets,
            "invalidations": stats.invalidations,
            "total_requests": stats.total_requests,
            "hit_rate": stats.hit_rate,
            "size": len(self._cache),
            "maxsize": self.maxsize,
            "created_at": stats.created_at.isoformat(),
        }
