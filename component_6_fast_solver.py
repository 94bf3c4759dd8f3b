"""
component_6_fast_solver.py
==========================
Optimierter Solver für Lösungszählung und Eindeutigkeitsprüfung.

Gleiche Semantik wie der Referenz-Solver (Pruning-Regeln, Form-Reihenfolge,
Terminal-Prüfung), aber:
- Board als flaches bytearray, Index = zeile * breite + spalte
- Constraints einmalig in ParsedConstraint mit vorberechneten Zellindizes
- Memo-Schlüssel: exakte Basis-4-Zahl, inkrementell gepflegt. Python-ints
  sind unbeschränkt, der Schlüssel bleibt auch auf großen Boards kollisionsfrei
- Keine fewest_moves-Auswertung

Author: KAI Development Team
Date: 2025-12-03
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from common.constants import SOLVER_CACHE_MAXSIZE, UNIQUENESS_SOLUTION_LIMIT
from component_1_shape_board import Shape
from component_3_constraint_evaluator import cell_predicate
from component_3_constraints import (
    CellOperator,
    ConstraintKind,
    ConstraintScope,
    CountOperator,
    PuzzleDefinition,
)
from component_5_reference_solver import shape_order
from component_15_logging_config import get_logger
from infrastructure.cache_manager import FailureStateCache
from infrastructure.interfaces import BasePuzzleSolver

logger = get_logger(__name__)

ANY_SHAPE = -1
CAT = int(Shape.CAT)


@dataclass(frozen=True)
class ParsedConstraint:
    """
    Vorverarbeiteter Constraint.

    target ist der int-Wert der Form, ANY_SHAPE (-1) für "jede Form".
    Zell-Constraints haben genau einen Eintrag in indices.
    """

    kind: ConstraintKind
    target: int
    count: int
    indices: Tuple[int, ...]
    count_operator: Optional[CountOperator] = None
    cell_operator: Optional[CellOperator] = None

    @property
    def prunable(self) -> bool:
        return self.kind == ConstraintKind.CELL or self.target != CAT


@dataclass
class FastSolverResult:
    solution_count: int
    is_solvable: bool
    nodes_visited: int
    dead_ends: int = 0


def parse_constraints(definition: PuzzleDefinition) -> List[ParsedConstraint]:
    """Übersetzt die Constraints in flache Index-Listen."""
    width = definition.width
    height = definition.height
    parsed: List[ParsedConstraint] = []

    for constraint in definition.constraints:
        if constraint.kind == ConstraintKind.CELL:
            parsed.append(
                ParsedConstraint(
                    kind=ConstraintKind.CELL,
                    target=int(constraint.shape),
                    count=0,
                    indices=(constraint.y * width + constraint.x,),
                    cell_operator=constraint.operator,
                )
            )
            continue

        if constraint.scope == ConstraintScope.ROW:
            indices = tuple(constraint.index * width + x for x in range(width))
        elif constraint.scope == ConstraintScope.COLUMN:
            indices = tuple(y * width + constraint.index for y in range(height))
        else:
            indices = tuple(range(width * height))

        parsed.append(
            ParsedConstraint(
                kind=ConstraintKind.COUNT,
                target=ANY_SHAPE if constraint.shape is None else int(constraint.shape),
                count=constraint.count,
                indices=indices,
                count_operator=constraint.operator,
            )
        )

    return parsed


class FastSolver(BasePuzzleSolver):
    """Backtracking auf flachem bytearray mit Failure-Memo."""

    def __init__(
        self,
        definition: PuzzleDefinition,
        cache_size: int = SOLVER_CACHE_MAXSIZE,
        trace: bool = False,
    ):
        self.definition = definition
        self.cache_size = cache_size
        self.trace = trace

        board = definition.initial_board
        self.width = board.width
        self.height = board.height
        self.cell_count = board.size

        self._initial = bytearray(int(cell.shape) for cell in board.all_cells())
        locked = [cell.locked for cell in board.all_cells()]
        self._unlocked: List[int] = [i for i in range(self.cell_count) if not locked[i]]

        # Position im Suchpfad, -1 = gesperrt (immer belegt)
        self._order: List[int] = [-1] * self.cell_count
        for step, index in enumerate(self._unlocked):
            self._order[index] = step

        self._constraints = parse_constraints(definition)
        self._prunable = [c for c in self._constraints if c.prunable]
        self._pow4 = [4**i for i in range(self.cell_count)]

    # ------------------------------------------------------------------
    # BasePuzzleSolver
    # ------------------------------------------------------------------

    def get_capabilities(self) -> List[str]:
        return ["solution_count", "dead_ends", "uniqueness"]

    def estimate_cost(self) -> float:
        return len(self._unlocked) * math.log10(4)

    def solve(self, stop_at_first: bool = False) -> FastSolverResult:
        return self._run(1 if stop_at_first else None)

    def count_solutions(self, limit: Optional[int] = None) -> int:
        """Zählt Lösungen, optional bis zu einer Obergrenze."""
        return self._run(limit).solution_count

    def has_unique_solution(self) -> bool:
        return self.count_solutions(UNIQUENESS_SOLUTION_LIMIT) == 1

    # ------------------------------------------------------------------
    # Suche
    # ------------------------------------------------------------------

    def _run(self, limit: Optional[int]) -> FastSolverResult:
        self._board = bytearray(self._initial)
        self._memo = FailureStateCache(self.cache_size, name="fast_solver")
        self._limit = limit
        self._solutions = 0
        self._nodes = 0
        self._dead_ends = 0

        self._search(0, self._full_key())

        result = FastSolverResult(
            solution_count=self._solutions,
            is_solvable=self._solutions > 0,
            nodes_visited=self._nodes,
            dead_ends=self._dead_ends,
        )
        logger.debug(
            "Schnelle Suche beendet",
            extra={
                "cells": self.cell_count,
                "solutions": result.solution_count,
                "nodes": result.nodes_visited,
                "dead_ends": result.dead_ends,
                "limit": limit,
            },
        )
        return result

    def _search(self, cursor: int, key: int) -> int:
        self._nodes += 1

        if self._memo.contains(key):
            self._dead_end("memo", cursor)
            return 0

        if self._is_pruned(cursor):
            self._dead_end("prune", cursor)
            self._memo.mark_failed(key)
            return 0

        if cursor == len(self._unlocked):
            if self._all_satisfied():
                self._solutions += 1
                return 1
            self._dead_end("leaf", cursor)
            self._memo.mark_failed(key)
            return 0

        index = self._unlocked[cursor]
        start = self._initial[index]
        weight = self._pow4[index]
        found = 0

        for shape in shape_order(Shape(start)):
            value = int(shape)
            self._board[index] = value
            found += self._search(cursor + 1, key + (value - start) * weight)
            if self._limit is not None and self._solutions >= self._limit:
                break

        self._board[index] = start

        if found == 0:
            self._memo.mark_failed(key)
        return found

    def _is_pruned(self, cursor: int) -> bool:
        board = self._board
        order = self._order

        for constraint in self._prunable:
            if constraint.kind == ConstraintKind.CELL:
                index = constraint.indices[0]
                if order[index] >= cursor:
                    continue
                if not cell_predicate(
                    board[index], constraint.target, constraint.cell_operator
                ):
                    return True
                continue

            target = constraint.target
            lower = 0
            unassigned = 0
            for index in constraint.indices:
                if order[index] >= cursor:
                    unassigned += 1
                    continue
                value = board[index]
                if target == ANY_SHAPE or value == target or value == CAT:
                    lower += 1

            count = constraint.count
            operator = constraint.count_operator
            if operator == CountOperator.EXACTLY:
                if lower > count or lower + unassigned < count:
                    return True
            elif operator == CountOperator.AT_MOST:
                if lower > count:
                    return True
            elif operator == CountOperator.NONE:
                if lower > 0:
                    return True
            elif lower + unassigned < count:
                return True

        return False

    def _all_satisfied(self) -> bool:
        board = self._board
        for constraint in self._constraints:
            if constraint.kind == ConstraintKind.CELL:
                if not cell_predicate(
                    board[constraint.indices[0]], constraint.target, constraint.cell_operator
                ):
                    return False
                continue

            target = constraint.target
            if target == ANY_SHAPE:
                matching = len(constraint.indices)
            elif target == CAT:
                matching = sum(1 for i in constraint.indices if board[i] == CAT)
            else:
                matching = sum(
                    1 for i in constraint.indices if board[i] == target or board[i] == CAT
                )

            operator = constraint.count_operator
            count = constraint.count
            if operator == CountOperator.EXACTLY:
                ok = matching == count
            elif operator == CountOperator.AT_LEAST:
                ok = matching >= count
            elif operator == CountOperator.AT_MOST:
                ok = matching <= count
            else:
                ok = matching == 0
            if not ok:
                return False

        return True

    def _dead_end(self, reason: str, cursor: int) -> None:
        self._dead_ends += 1
        if self.trace:
            logger.debug(
                "Sackgasse",
                extra={"reason": reason, "cursor": cursor, "dead_ends": self._dead_ends},
            )

    # ------------------------------------------------------------------
    # Memo-Schlüssel
    # ------------------------------------------------------------------

    def _full_key(self) -> int:
        return sum(value * self._pow4[i] for i, value in enumerate(self._board))

