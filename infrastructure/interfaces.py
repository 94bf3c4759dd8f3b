"""
infrastructure/interfaces.py

Base interface for the puzzle solvers.

Both solvers (the reference PuzzleSolver and the optimized FastSolver)
implement BasePuzzleSolver so analysis code can use them interchangeably.

Interface Contract:
    - solve(stop_at_first) runs a complete (or first-hit) search and
      returns a result object exposing at least is_solvable,
      solution_count and nodes_visited
    - get_capabilities() declares what the solver reports beyond counts
    - estimate_cost() gives a relative cost figure for the search space

Usage:
    from infrastructure.interfaces import BasePuzzleSolver

    def count(solver: BasePuzzleSolver) -> int:
        return solver.solve().solution_count
"""

from abc import ABC, abstractmethod
from typing import Any, List


class BasePuzzleSolver(ABC):
    """
    Abstract base class for backtracking solvers.

    Thread Safety:
        Implementations keep their board copy, memo and counters as instance
        attributes. One instance must not be shared between threads; separate
        instances can run in parallel without locks.
    """

    @abstractmethod
    def solve(self, stop_at_first: bool = False) -> Any:
        """
        Search the assignments of all unlocked cells.

        Args:
            stop_at_first: Stop after the first terminal-satisfying board

        Returns:
            Solver-specific result with is_solvable, solution_count and
            nodes_visited
        """

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        """
        Return the features this solver reports.

        Standard Capabilities:
            - "solution_count": Counts all satisfying assignments
            - "fewest_moves": Reports the minimal number of changed cells
            - "best_solution": Returns a board reaching fewest_moves
            - "dead_ends": Counts pruned and memoized branches
            - "uniqueness": Can stop early once two solutions are found
        """

    @abstractmethod
    def estimate_cost(self) -> float:
        """
        Estimate the size of the search space.

        Returns:
            log10 of 4^(unlocked cells), i.e. 0.0 for a fully locked board
        """

    def supports_capability(self, capability: str) -> bool:
        """Check if this solver supports a specific capability."""
        return capability in self.get_capabilities()
