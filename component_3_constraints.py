"""
component_3_constraints.py
==========================
Constraint-Modell und Puzzle-Definition.

Zwei Constraint-Varianten:
- CountConstraint: zählt Zellen einer Zeile, Spalte oder des ganzen Felds
  (exactly / at_least / at_most / none). shape=None zählt jede Zelle.
- CellConstraint: fordert (is) oder verbietet (is_not) eine Form in einer
  einzelnen Zelle.

Beide tragen ein kind-Tag, auf das der Evaluator dispatcht.

PuzzleDefinition bündelt Start-Board und Constraints. Sie wird bei der
Konstruktion validiert und danach nie verändert.

Author: KAI Development Team
Date: 2025-12-02
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from component_1_shape_board import Board, Shape
from shapes_exceptions import InvalidConstraintError


class ConstraintKind(Enum):
    COUNT = "count"
    CELL = "cell"


class ConstraintScope(Enum):
    ROW = "row"
    COLUMN = "column"
    GLOBAL = "global"


class CountOperator(Enum):
    EXACTLY = "exactly"
    AT_LEAST = "at_least"
    AT_MOST = "at_most"
    NONE = "none"


class CellOperator(Enum):
    IS = "is"
    IS_NOT = "is_not"


@dataclass(frozen=True)
class CountConstraint:
    """
    Zähl-Constraint über eine Zeile, Spalte oder das ganze Spielfeld.

    Attributes:
        scope: ROW, COLUMN oder GLOBAL
        operator: Vergleichsoperator
        count: Sollwert (>= 0). Bei NONE ignoriert.
        shape: Zu zählende Form, None = jede Zelle
        index: Zeilen-/Spaltenindex, None bei GLOBAL
    """

    scope: ConstraintScope
    operator: CountOperator
    count: int = 0
    shape: Optional[Shape] = None
    index: Optional[int] = None
    kind: ConstraintKind = field(default=ConstraintKind.COUNT, init=False)


@dataclass(frozen=True)
class CellConstraint:
    """Constraint auf eine einzelne Zelle (x = Spalte, y = Zeile)."""

    x: int
    y: int
    shape: Shape
    operator: CellOperator = CellOperator.IS
    kind: ConstraintKind = field(default=ConstraintKind.CELL, init=False)


Constraint = Union[CountConstraint, CellConstraint]


def validate_constraint(constraint: Constraint, board: Board) -> None:
    """
    Prüft einen Constraint gegen die Spielfeldmaße.

    Raises:
        InvalidConstraintError: Bei ungültigem Index, Koordinaten, Count oder Typ
    """
    if isinstance(constraint, CellConstraint):
        if not isinstance(constraint.operator, CellOperator):
            raise InvalidConstraintError(
                f"Unbekannter Zell-Operator: {constraint.operator!r}",
                constraint=constraint,
            )
        _require_shape(constraint, constraint.shape, allow_none=False)
        if not board.in_bounds(constraint.x, constraint.y):
            raise InvalidConstraintError(
                f"Zelle ({constraint.x}, {constraint.y}) liegt außerhalb von "
                f"{board.width}x{board.height}",
                constraint=constraint,
            )
        return

    if not isinstance(constraint, CountConstraint):
        raise InvalidConstraintError(
            f"Unbekannter Constraint-Typ: {type(constraint).__name__}",
            constraint=constraint,
        )

    if not isinstance(constraint.operator, CountOperator):
        raise InvalidConstraintError(
            f"Unbekannter Zähl-Operator: {constraint.operator!r}",
            constraint=constraint,
        )
    _require_shape(constraint, constraint.shape, allow_none=True)

    if not isinstance(constraint.count, int) or constraint.count < 0:
        raise InvalidConstraintError(
            f"Count muss eine Ganzzahl >= 0 sein: {constraint.count!r}",
            constraint=constraint,
        )

    if constraint.scope == ConstraintScope.GLOBAL:
        if constraint.index is not None:
            raise InvalidConstraintError(
                "Globale Constraints haben keinen Index", constraint=constraint
            )
        return

    if constraint.scope == ConstraintScope.ROW:
        limit = board.height
    elif constraint.scope == ConstraintScope.COLUMN:
        limit = board.width
    else:
        raise InvalidConstraintError(
            f"Unbekannter Scope: {constraint.scope!r}", constraint=constraint
        )

    if constraint.index is None or not 0 <= constraint.index < limit:
        raise InvalidConstraintError(
            f"{constraint.scope.value}-Index {constraint.index!r} außerhalb von [0, {limit})",
            constraint=constraint,
        )


def _require_shape(constraint: Constraint, shape, allow_none: bool) -> None:
    if shape is None and allow_none:
        return
    if not isinstance(shape, Shape):
        raise InvalidConstraintError(
            f"Ungültiger Shape: {shape!r}", constraint=constraint
        )


@dataclass(frozen=True)
class PuzzleDefinition:
    """
    Unveränderliche Puzzle-Definition.

    Das Board wird bei der Konstruktion kopiert, alle Constraints werden
    gegen die Maße validiert. initial_board liefert bei jedem Zugriff eine
    frische Kopie, Änderungen daran wirken nicht auf die Definition.
    """

    _board: Board
    constraints: Tuple[Constraint, ...] = ()

    def __init__(self, initial_board: Board, constraints: Iterable[Constraint] = ()):
        board = initial_board.clone()
        constraint_tuple = tuple(constraints)
        for constraint in constraint_tuple:
            validate_constraint(constraint, board)

        object.__setattr__(self, "_board", board)
        object.__setattr__(self, "constraints", constraint_tuple)

    @property
    def initial_board(self) -> Board:
        return self._board.clone()

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    def __str__(self) -> str:
        return (
            f"PuzzleDefinition({self.width}x{self.height}, "
            f"{len(self.constraints)} constraints)"
        )
