"""
infrastructure package

Shared infrastructure components for the Shapes engine.

Modules:
    - interfaces: Base interface for the puzzle solvers
    - cache_manager: Bounded failure-state memo for backtracking
"""

from infrastructure.interfaces import BasePuzzleSolver
from infrastructure.cache_manager import CacheStatistics, FailureStateCache

__all__ = [
    "BasePuzzleSolver",
    "CacheStatistics",
    "FailureStateCache",
]
