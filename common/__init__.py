"""
Common constants for the Schrödinger's Shapes engine.

This package provides centralized numeric parameters shared by the RNG,
the level-number encoding, the solvers and the generator.
"""

from common.constants import *

__all__ = [
    # Random Number Generator
    "LCG_MULTIPLIER",
    "LCG_INCREMENT",
    "UINT32_MASK",
    "DJB2_SEED",
    # Level Numbers
    "SEEDS_PER_DIFFICULTY",
    "MIN_DIFFICULTY",
    "MAX_DIFFICULTY",
    # Solver
    "SOLVER_CACHE_MAXSIZE",
    "UNIQUENESS_SOLUTION_LIMIT",
    # Generator
    "ANY_SHAPE_PROBABILITY",
    "MAX_GENERATION_ATTEMPTS",
]
