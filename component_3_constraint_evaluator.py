"""
component_3_constraint_evaluator.py
===================================
Zwei Auswertungs-Semantiken für Constraints.

1. Live-Fortschritt (constraint_state): SATISFIED / VIOLATED / IN_PROGRESS.
   Wird von der Session nach jedem Zug berechnet und an die Oberfläche
   gemeldet. Ein Constraint ist erst VIOLATED, wenn festgelegte Formen ihn
   sicher brechen.

2. Terminal-Prüfung (is_constraint_satisfied): bool. Wird von den Solvern
   am Blatt des Suchbaums benutzt.

Zählweisen:
- matching_count: Zellen mit der Zielform plus alle CAT-Zellen
  (Ziel None: alle Zellen, Ziel CAT: nur CAT-Zellen)
- committed_count: nur exakte Treffer konkreter Formen
  (Ziel None: alle konkreten Zellen, Ziel CAT: 0)

Die beiden Semantiken können auseinanderlaufen. Beispiel: "at_most 1 SQUARE"
über [CAT, SQUARE] ist live SATISFIED (nur ein festgelegtes Quadrat), terminal
aber verletzt (matching = 2).

Author: KAI Development Team
Date: 2025-12-02
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence

from component_1_shape_board import Board, Cell, Shape
from component_3_constraints import (
    CellConstraint,
    CellOperator,
    Constraint,
    ConstraintKind,
    ConstraintScope,
    CountConstraint,
    CountOperator,
)


class ConstraintState(Enum):
    SATISFIED = "satisfied"
    VIOLATED = "violated"
    IN_PROGRESS = "in_progress"


# ============================================================================
# Zählen
# ============================================================================


def matching_count(cells: Iterable[Cell], target: Optional[Shape]) -> int:
    """Zellen, die die Zielform sein oder werden können."""
    if target is None:
        return sum(1 for _ in cells)
    if target == Shape.CAT:
        return sum(1 for cell in cells if cell.shape == Shape.CAT)
    return sum(
        1 for cell in cells if cell.shape == target or cell.shape == Shape.CAT
    )


def committed_count(cells: Iterable[Cell], target: Optional[Shape]) -> int:
    """Zellen, die sicher die Zielform tragen (ohne CAT)."""
    if target is None:
        return sum(1 for cell in cells if cell.shape != Shape.CAT)
    if target == Shape.CAT:
        return 0
    return sum(1 for cell in cells if cell.shape == target)


def cells_in_scope(board: Board, constraint: Constraint) -> List[Cell]:
    """Betroffene Zellen. Leere Liste bei ungültigem Index."""
    if constraint.kind == ConstraintKind.CELL:
        cell = board.get_cell(constraint.x, constraint.y)
        return [cell] if cell is not None else []

    if constraint.scope == ConstraintScope.ROW:
        return board.row_cells(constraint.index) if constraint.index is not None else []
    if constraint.scope == ConstraintScope.COLUMN:
        return (
            board.column_cells(constraint.index) if constraint.index is not None else []
        )
    return board.all_cells()


# ============================================================================
# Live-Fortschritt
# ============================================================================


def constraint_state(board: Board, constraint: Constraint) -> ConstraintState:
    """Tri-State-Auswertung für die Live-Anzeige."""
    if constraint.kind == ConstraintKind.CELL:
        return _cell_state(board, constraint)
    return _count_state(board, constraint)


def _count_state(board: Board, constraint: CountConstraint) -> ConstraintState:
    cells = cells_in_scope(board, constraint)
    operator = constraint.operator

    if operator == CountOperator.EXACTLY:
        if matching_count(cells, constraint.shape) == constraint.count:
            return ConstraintState.SATISFIED
        if committed_count(cells, constraint.shape) > constraint.count:
            return ConstraintState.VIOLATED
        return ConstraintState.IN_PROGRESS

    if operator == CountOperator.AT_LEAST:
        if matching_count(cells, constraint.shape) >= constraint.count:
            return ConstraintState.SATISFIED
        return ConstraintState.IN_PROGRESS

    if operator == CountOperator.AT_MOST:
        if committed_count(cells, constraint.shape) > constraint.count:
            return ConstraintState.VIOLATED
        return ConstraintState.SATISFIED

    # NONE
    if committed_count(cells, constraint.shape) > 0:
        return ConstraintState.VIOLATED
    return ConstraintState.SATISFIED


def _cell_state(board: Board, constraint: CellConstraint) -> ConstraintState:
    cell = board.get_cell(constraint.x, constraint.y)
    if cell is None:
        return ConstraintState.VIOLATED

    shape = cell.shape
    target = constraint.shape

    if constraint.operator == CellOperator.IS:
        if target == Shape.CAT:
            ok = shape == Shape.CAT
        else:
            ok = shape == target or shape == Shape.CAT
        return ConstraintState.SATISFIED if ok else ConstraintState.VIOLATED

    # IS_NOT
    if shape == Shape.CAT:
        return ConstraintState.IN_PROGRESS
    if shape == target:
        return ConstraintState.VIOLATED
    return ConstraintState.SATISFIED


def constraint_states(
    board: Board, constraints: Iterable[Constraint]
) -> List[ConstraintState]:
    return [constraint_state(board, constraint) for constraint in constraints]


def all_states_satisfied(states: Sequence[ConstraintState]) -> bool:
    return all(state == ConstraintState.SATISFIED for state in states)


# ============================================================================
# Terminal-Prüfung
# ============================================================================


def is_constraint_satisfied(board: Board, constraint: Constraint) -> bool:
    """Binäre Prüfung am Blatt des Suchbaums."""
    if constraint.kind == ConstraintKind.CELL:
        cell = board.get_cell(constraint.x, constraint.y)
        if cell is None:
            return False
        return cell_predicate(cell.shape, constraint.shape, constraint.operator)

    matching = matching_count(cells_in_scope(board, constraint), constraint.shape)
    return count_predicate(matching, constraint.operator, constraint.count)


def count_predicate(matching: int, operator: CountOperator, count: int) -> bool:
    if operator == CountOperator.EXACTLY:
        return matching == count
    if operator == CountOperator.AT_LEAST:
        return matching >= count
    if operator == CountOperator.AT_MOST:
        return matching <= count
    return matching == 0


def cell_predicate(shape: int, target: int, operator: CellOperator) -> bool:
    """Terminal-Prüfung einer Zelle. Akzeptiert Shapes oder deren int-Werte."""
    if operator == CellOperator.IS:
        if target == Shape.CAT:
            return shape == Shape.CAT
        return shape == target or shape == Shape.CAT

    if target == Shape.CAT:
        return shape != Shape.CAT
    return shape != target and shape != Shape.CAT


def all_constraints_satisfied(board: Board, constraints: Iterable[Constraint]) -> bool:
    return all(is_constraint_satisfied(board, constraint) for constraint in constraints)
