"""
component_5_reference_solver.py
===============================
Referenz-Solver: rekursives Backtracking über alle ungesperrten Zellen.

Ablauf pro Knoten:
1. Failure-Memo prüfen (Treffer = Sackgasse)
2. Pruning: Ist ein Constraint mit den bereits belegten Zellen beweisbar
   verletzt? (Sackgasse)
3. Blatt: Terminal-Prüfung aller Constraints, Lösung zählen und
   fewest_moves aktualisieren
4. Sonst: nächste Zelle mit jeder Form belegen, in der Reihenfolge
   aktuelle Form, SQUARE, CIRCLE, TRIANGLE, CAT

Belegt sind gesperrte Zellen und alle Zellen vor dem Cursor.

Pruning für Zähl-Constraints mit konkreter Form oder ohne Form:
    lower = belegte Zellen im Scope, die passen (Zielform oder CAT)
    upper = lower + unbelegte Zellen im Scope
    exactly:  lower > count oder upper < count
    at_most:  lower > count
    none:     lower > 0
    at_least: upper < count
CAT-Zähl-Constraints werden erst am Blatt geprüft. Zell-Constraints werden
geprüft, sobald ihre Zelle belegt ist.

Ein Zug ist eine ungesperrte Zelle, deren Form vom Start-Board abweicht.

Author: KAI Development Team
Date: 2025-12-02
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from common.constants import SOLVER_CACHE_MAXSIZE
from component_1_shape_board import CONCRETE_SHAPES, Board, Shape
from component_3_constraint_evaluator import (
    all_constraints_satisfied,
    cell_predicate,
)
from component_3_constraints import (
    CellConstraint,
    ConstraintKind,
    ConstraintScope,
    CountConstraint,
    CountOperator,
    PuzzleDefinition,
)
from component_15_logging_config import get_logger
from infrastructure.cache_manager import FailureStateCache
from infrastructure.interfaces import BasePuzzleSolver

logger = get_logger(__name__)

Position = Tuple[int, int]


@dataclass
class ReferenceSolverResult:
    """
    Ergebnis einer Referenz-Suche.

    Attributes:
        is_solvable: Mindestens eine Lösung gefunden
        solution_count: Anzahl gefundener Lösungen (bei stop_at_first max. 1)
        fewest_moves: Minimale Anzahl geänderter Zellen, None wenn unlösbar
        dead_ends: Prunings, Memo-Treffer und verworfene Blätter
        nodes_visited: Besuchte Suchknoten
        best_solution: Board mit fewest_moves Änderungen
    """

    is_solvable: bool
    solution_count: int
    fewest_moves: Optional[int]
    dead_ends: int
    nodes_visited: int
    best_solution: Optional[Board] = None


def shape_order(current: Shape) -> List[Shape]:
    """Aktuelle Form zuerst, dann konkrete Formen, CAT zuletzt."""
    order = [current]
    order.extend(shape for shape in CONCRETE_SHAPES if shape != current)
    if current != Shape.CAT:
        order.append(Shape.CAT)
    return order


class PuzzleSolver(BasePuzzleSolver):
    """
    Referenz-Backtracking-Solver.

    Der gesamte Suchzustand (Board-Kopie, Memo, Zähler) liegt in der
    Instanz. Eine Instanz pro Thread.
    """

    def __init__(
        self,
        definition: PuzzleDefinition,
        cache_size: int = SOLVER_CACHE_MAXSIZE,
        trace: bool = False,
    ):
        self.definition = definition
        self.cache_size = cache_size
        self.trace = trace

        self._initial = definition.initial_board
        self._unlocked: List[Position] = [
            (x, y)
            for x, y in self._initial.positions()
            if not self._initial.get_cell(x, y).locked
        ]
        self._order: Dict[Position, int] = {
            pos: i for i, pos in enumerate(self._unlocked)
        }
        self._scopes: List[Tuple[CountConstraint, List[Position]]] = [
            (c, self._scope_positions(c))
            for c in definition.constraints
            if c.kind == ConstraintKind.COUNT and c.shape != Shape.CAT
        ]
        self._cell_constraints: List[CellConstraint] = [
            c for c in definition.constraints if c.kind == ConstraintKind.CELL
        ]

    # ------------------------------------------------------------------
    # BasePuzzleSolver
    # ------------------------------------------------------------------

    def get_capabilities(self) -> List[str]:
        return ["solution_count", "fewest_moves", "best_solution", "dead_ends"]

    def estimate_cost(self) -> float:
        return len(self._unlocked) * math.log10(4)

    def solve(self, stop_at_first: bool = False) -> ReferenceSolverResult:
        """
        Durchsucht alle Belegungen der ungesperrten Zellen.

        Args:
            stop_at_first: Nach der ersten Lösung abbrechen
        """
        self._board = self._initial.clone()
        self._memo = FailureStateCache(self.cache_size, name="reference_solver")
        self._stop_at_first = stop_at_first
        self._solutions = 0
        self._fewest: Optional[int] = None
        self._best: Optional[Board] = None
        self._dead_ends = 0
        self._nodes = 0
        self._stopped = False

        logger.debug(
            "Referenz-Suche gestartet",
            extra={
                "width": self._initial.width,
                "height": self._initial.height,
                "unlocked": len(self._unlocked),
                "constraints": len(self.definition.constraints),
                "stop_at_first": stop_at_first,
            },
        )

        self._search(0, 0)

        result = ReferenceSolverResult(
            is_solvable=self._solutions > 0,
            solution_count=self._solutions,
            fewest_moves=self._fewest,
            dead_ends=self._dead_ends,
            nodes_visited=self._nodes,
            best_solution=self._best,
        )
        logger.info(
            "Referenz-Suche beendet",
            extra={
                "solutions": result.solution_count,
                "fewest_moves": result.fewest_moves,
                "dead_ends": result.dead_ends,
                "nodes": result.nodes_visited,
                "memo_hits": self._memo.statistics.hits,
            },
        )
        return result

    # ------------------------------------------------------------------
    # Suche
    # ------------------------------------------------------------------

    def _search(self, cursor: int, moves: int) -> int:
        """Gibt die Anzahl der Lösungen im Teilbaum zurück."""
        self._nodes += 1

        key = self._board_key()
        if self._memo.contains(key):
            self._dead_end("memo", cursor)
            return 0

        if self._is_pruned(cursor):
            self._dead_end("prune", cursor)
            self._memo.mark_failed(key)
            return 0

        if cursor == len(self._unlocked):
            if all_constraints_satisfied(self._board, self.definition.constraints):
                self._record_solution(moves)
                return 1
            self._dead_end("leaf", cursor)
            self._memo.mark_failed(key)
            return 0

        x, y = self._unlocked[cursor]
        start_shape = self._initial.get_cell(x, y).shape
        found = 0

        for shape in shape_order(start_shape):
            self._board.set_shape(x, y, shape)
            found += self._search(cursor + 1, moves + (shape != start_shape))
            if self._stopped:
                break

        self._board.set_shape(x, y, start_shape)

        if found == 0:
            self._memo.mark_failed(key)
        return found

    def _is_pruned(self, cursor: int) -> bool:
        for constraint, positions in self._scopes:
            lower = 0
            unassigned = 0
            for pos in positions:
                if not self._is_assigned(pos, cursor):
                    unassigned += 1
                    continue
                shape = self._board.get_cell(*pos).shape
                if (
                    constraint.shape is None
                    or shape == constraint.shape
                    or shape == Shape.CAT
                ):
                    lower += 1

            upper = lower + unassigned
            count = constraint.count
            operator = constraint.operator

            if operator == CountOperator.EXACTLY and (lower > count or upper < count):
                return True
            if operator == CountOperator.AT_MOST and lower > count:
                return True
            if operator == CountOperator.NONE and lower > 0:
                return True
            if operator == CountOperator.AT_LEAST and upper < count:
                return True

        for constraint in self._cell_constraints:
            pos = (constraint.x, constraint.y)
            if not self._is_assigned(pos, cursor):
                continue
            shape = self._board.get_cell(*pos).shape
            if not cell_predicate(shape, constraint.shape, constraint.operator):
                return True

        return False

    def _is_assigned(self, pos: Position, cursor: int) -> bool:
        order = self._order.get(pos)
        return order is None or order < cursor

    def _record_solution(self, moves: int) -> None:
        self._solutions += 1
        if self._fewest is None or moves < self._fewest:
            self._fewest = moves
            self._best = self._board.clone()
        if self._stop_at_first:
            self._stopped = True

    def _dead_end(self, reason: str, cursor: int) -> None:
        self._dead_ends += 1
        if self.trace:
            logger.debug(
                "Sackgasse",
                extra={"reason": reason, "cursor": cursor, "dead_ends": self._dead_ends},
            )

    def _board_key(self) -> bytes:
        return bytes(cell.shape for cell in self._board.all_cells())

    def _scope_positions(self, constraint: CountConstraint) -> List[Position]:
        board = self._initial
        if constraint.scope == ConstraintScope.ROW:
            return [(x, constraint.index) for x in range(board.width)]
        if constraint.scope == ConstraintScope.COLUMN:
            return [(constraint.index, y) for y in range(board.height)]
        return list(board.positions())
