"""
Centralized constants for the Schrödinger's Shapes engine.

Single source of truth for the numeric parameters of the random number
generator, the level-number encoding, the solver failure memo and the
puzzle generator.

Organization:
    - Random Number Generator: LCG parameters and string seed folding
    - Level Numbers: Encoding range for shareable seeds
    - Solver: Failure memo sizing and key encoding
    - Generator: Candidate sampling defaults

Usage:
    from common.constants import SEEDS_PER_DIFFICULTY, SOLVER_CACHE_MAXSIZE

Note:
    These constants define default values. The solvers and the generator
    accept overrides via constructor parameters or the YAML configuration
    loaded by shapes_config.py.
"""

# =============================================================================
# Random Number Generator
# =============================================================================

LCG_MULTIPLIER: int = 1664525
"""
Multiplier of the 32-bit linear congruential generator (Numerical Recipes).

Used by:
    - component_2_seeded_rng.py: state = (state * a + c) mod 2^32
"""

LCG_INCREMENT: int = 1013904223
"""Increment of the 32-bit linear congruential generator."""

UINT32_MASK: int = 0xFFFFFFFF
"""
Mask for unsigned 32-bit arithmetic.

Also the divisor of SeededRNG.random(), so the generator can return exactly
1.0 once every 2^32 draws. next_int() caps its result accordingly.
"""

DJB2_SEED: int = 5381
"""
Start value of the djb2 string hash used to fold string seeds into 32 bits.

hash = hash * 33 + ord(char), wrapped to unsigned 32 bits after every step.
"""

# =============================================================================
# Level Numbers
# =============================================================================

SEEDS_PER_DIFFICULTY: int = 10000
"""
Number of seeds per difficulty in the level-number encoding.

level = difficulty * SEEDS_PER_DIFFICULTY + seed, seed in [0, 9999].
Level 3-0042 is therefore the integer 30042.
"""

MIN_DIFFICULTY: int = 1
"""Lowest difficulty level."""

MAX_DIFFICULTY: int = 5
"""Highest difficulty level. next_level_number() wraps from here to level 1."""

# =============================================================================
# Solver
# =============================================================================

SOLVER_CACHE_MAXSIZE: int = 100_000
"""
Maximum number of failing board states memoized per solver instance.

Rationale:
    Keeps memory bounded on 4x4 boards (4^16 states) while still catching
    most repeated sub-trees. The memo evicts least-recently-used entries
    once full; only negative results are stored, so eviction never changes
    the solution count, only the amount of work.

Used by:
    - component_5_reference_solver.py
    - component_6_fast_solver.py
"""

UNIQUENESS_SOLUTION_LIMIT: int = 2
"""Solution count at which uniqueness checks stop searching."""

# =============================================================================
# Generator
# =============================================================================

ANY_SHAPE_PROBABILITY: float = 0.1
"""
Probability that a generated row/column constraint counts any shape
instead of one concrete shape.
"""

MAX_GENERATION_ATTEMPTS: int = 1000
"""
Upper bound on candidate draws per generated puzzle.

The generator rejects duplicate (scope, index, shape) candidates. Once this
bound is hit it returns what it has and logs a warning.
"""
