"""
component_9_puzzle_analysis.py
==============================
Offline-Analyse generierter Puzzles.

- analyze_puzzle: Referenz-Solver auf ein Puzzle, Kennzahlen als Dataclass
- analyze_difficulty: Statistik über viele Seeds einer Stufe
  (Züge, Lösungen, Sackgassen, Anteil lösbarer Puzzles)
- check_uniqueness: Eindeutigkeitsprüfung mit dem FastSolver

Alle Läufe werden mit PerformanceLogger in den Performance-Log geschrieben.

Author: KAI Development Team
Date: 2025-12-04
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from common.constants import SOLVER_CACHE_MAXSIZE, UNIQUENESS_SOLUTION_LIMIT
from component_3_constraints import PuzzleDefinition
from component_5_reference_solver import PuzzleSolver
from component_6_fast_solver import FastSolver
from component_7_puzzle_generator import PuzzleGenerator
from component_15_logging_config import (
    PerformanceLogger,
    get_logger,
    log_component_end,
    log_component_start,
)
from shapes_config import Difficulty

logger = get_logger(__name__)


@dataclass
class PuzzleAnalysis:
    is_solvable: bool
    solution_count: int
    fewest_moves: Optional[int]
    dead_ends: int
    nodes_visited: int
    constraint_count: int
    duration_ms: float = 0.0


@dataclass
class DifficultyStats:
    """
    Statistik über mehrere Puzzles einer Stufe.

    Züge und Lösungen werden nur über lösbare Puzzles gemittelt,
    Sackgassen über alle. Ohne lösbares Puzzle sind min/max 0.
    """

    difficulty: int
    total_puzzles: int = 0
    solvable_count: int = 0
    min_moves: int = 0
    max_moves: int = 0
    avg_moves: float = 0.0
    min_solutions: int = 0
    max_solutions: int = 0
    avg_solutions: float = 0.0
    min_dead_ends: int = 0
    max_dead_ends: int = 0
    avg_dead_ends: float = 0.0

    @property
    def solvable_ratio(self) -> float:
        if self.total_puzzles == 0:
            return 0.0
        return self.solvable_count / self.total_puzzles


@dataclass
class UniquenessReport:
    difficulty: int
    unique: int = 0
    multiple: int = 0
    unsolvable: int = 0
    unique_seeds: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.unique + self.multiple + self.unsolvable


def analyze_puzzle(
    definition: PuzzleDefinition, cache_size: Optional[int] = None
) -> PuzzleAnalysis:
    """Vollständige Referenz-Suche über ein Puzzle."""
    solver = PuzzleSolver(definition, cache_size=cache_size or SOLVER_CACHE_MAXSIZE)
    with PerformanceLogger(
        logger.logger,
        "analyze_puzzle",
        width=definition.width,
        height=definition.height,
        constraints=len(definition.constraints),
    ) as perf:
        result = solver.solve()

    return PuzzleAnalysis(
        is_solvable=result.is_solvable,
        solution_count=result.solution_count,
        fewest_moves=result.fewest_moves,
        dead_ends=result.dead_ends,
        nodes_visited=result.nodes_visited,
        constraint_count=len(definition.constraints),
        duration_ms=perf.duration_ms,
    )


def analyze_difficulty(
    difficulty: Union[Difficulty, int],
    seeds: Iterable[int],
    generator: Optional[PuzzleGenerator] = None,
) -> DifficultyStats:
    """
    Generiert und analysiert ein Puzzle pro Seed.

    Args:
        difficulty: Schwierigkeitsstufe
        seeds: Seeds der zu generierenden Puzzles
        generator: Optionaler Generator (Standard: PuzzleGenerator())
    """
    generator = generator or PuzzleGenerator()
    stats = DifficultyStats(difficulty=int(difficulty))
    log_component_start(logger, "analyze_difficulty", difficulty=stats.difficulty)
    moves: List[int] = []
    solutions: List[int] = []
    dead_ends: List[int] = []

    with PerformanceLogger(logger.logger, "analyze_difficulty", difficulty=int(difficulty)):
        for seed in seeds:
            analysis = analyze_puzzle(
                generator.generate_for_difficulty(difficulty, seed),
                cache_size=generator.config.solver_cache_size,
            )
            stats.total_puzzles += 1
            dead_ends.append(analysis.dead_ends)
            if analysis.is_solvable:
                stats.solvable_count += 1
                moves.append(analysis.fewest_moves)
                solutions.append(analysis.solution_count)

    if moves:
        stats.min_moves = min(moves)
        stats.max_moves = max(moves)
        stats.avg_moves = sum(moves) / len(moves)
        stats.min_solutions = min(solutions)
        stats.max_solutions = max(solutions)
        stats.avg_solutions = sum(solutions) / len(solutions)
    if dead_ends:
        stats.min_dead_ends = min(dead_ends)
        stats.max_dead_ends = max(dead_ends)
        stats.avg_dead_ends = sum(dead_ends) / len(dead_ends)

    log_component_end(
        logger,
        "analyze_difficulty",
        difficulty=stats.difficulty,
        puzzles=stats.total_puzzles,
        solvable=stats.solvable_count,
        avg_moves=round(stats.avg_moves, 2),
    )
    return stats


def check_uniqueness(
    difficulty: Union[Difficulty, int],
    seeds: Iterable[int],
    generator: Optional[PuzzleGenerator] = None,
) -> UniquenessReport:
    """Zählt eindeutig, mehrdeutig und nicht lösbare Puzzles (FastSolver, Limit 2)."""
    generator = generator or PuzzleGenerator()
    report = UniquenessReport(difficulty=int(difficulty))
    log_component_start(logger, "check_uniqueness", difficulty=report.difficulty)

    with PerformanceLogger(logger.logger, "check_uniqueness", difficulty=int(difficulty)):
        for seed in seeds:
            definition = generator.generate_for_difficulty(difficulty, seed)
            solver = FastSolver(definition, cache_size=generator.config.solver_cache_size)
            count = solver.count_solutions(limit=UNIQUENESS_SOLUTION_LIMIT)
            if count == 0:
                report.unsolvable += 1
            elif count == 1:
                report.unique += 1
                report.unique_seeds.append(seed)
            else:
                report.multiple += 1

    log_component_end(
        logger,
        "check_uniqueness",
        difficulty=report.difficulty,
        unique=report.unique,
        multiple=report.multiple,
        unsolvable=report.unsolvable,
    )
    return report
