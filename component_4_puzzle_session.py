"""
component_4_puzzle_session.py
=============================
Spielsitzung: Arbeits-Board, Zug-Historie und Live-Constraint-Status.

Zustände:
    Created -> Playing <-> (make_move / undo_move) -> Solved
    reset_to_initial() führt zurück in den Created-Zustand.

Erwartbare Fälle (gesperrte Zelle, außerhalb des Felds, leere Historie)
liefern False statt Exceptions.

Invariante: initial_board + alle Züge der Historie ergeben das Arbeits-Board.

Author: KAI Development Team
Date: 2025-12-02
"""

from dataclasses import dataclass
from typing import List, Tuple

from component_1_shape_board import Board, Shape
from component_3_constraint_evaluator import (
    ConstraintState,
    all_states_satisfied,
    constraint_states,
)
from component_3_constraints import PuzzleDefinition
from component_15_logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    x: int
    y: int
    new_shape: Shape
    previous_shape: Shape


class PuzzleSession:
    """
    Veränderliche Spielsitzung über einer unveränderlichen PuzzleDefinition.

    Nach jeder Mutation wird der Tri-State jedes Constraints neu berechnet
    und zwischengespeichert. is_solved() liest nur diesen Cache.
    """

    def __init__(self, definition: PuzzleDefinition):
        self.definition = definition
        self.board: Board = definition.initial_board
        self._history: List[MoveRecord] = []
        self._states: List[ConstraintState] = []
        self._recompute()

    # ------------------------------------------------------------------
    # Züge
    # ------------------------------------------------------------------

    def can_move(self, x: int, y: int) -> bool:
        cell = self.board.get_cell(x, y)
        return cell is not None and not cell.locked

    def make_move(self, x: int, y: int, shape: Shape) -> bool:
        """
        Setzt eine Form. Auch ein Zug auf die bereits gesetzte Form wird
        als Zug gezählt.

        Returns:
            False bei gesperrter Zelle oder außerhalb des Felds, sonst True
        """
        if not self.can_move(x, y):
            logger.debug("Zug abgelehnt", extra={"x": x, "y": y})
            return False

        cell = self.board.get_cell(x, y)
        record = MoveRecord(x, y, Shape(shape), cell.shape)
        self._history.append(record)
        self.board.set_shape(x, y, record.new_shape)
        self._recompute()

        if self.is_solved():
            logger.info("Puzzle gelöst", extra={"moves": len(self._history)})
        return True

    def undo_move(self) -> bool:
        """Nimmt den letzten Zug zurück. False bei leerer Historie."""
        if not self._history:
            return False

        record = self._history.pop()
        self.board.set_shape(record.x, record.y, record.previous_shape)
        self._recompute()
        return True

    def reset_to_initial(self) -> None:
        self.board = self.definition.initial_board
        self._history.clear()
        self._recompute()

    # ------------------------------------------------------------------
    # Abfragen
    # ------------------------------------------------------------------

    def is_solved(self) -> bool:
        return all_states_satisfied(self._states)

    def can_undo(self) -> bool:
        return bool(self._history)

    def move_count(self) -> int:
        return len(self._history)

    def get_move_count(self) -> int:
        return self.move_count()

    @property
    def constraint_states(self) -> List[ConstraintState]:
        """Kopie des zwischengespeicherten Live-Status."""
        return list(self._states)

    @property
    def history(self) -> Tuple[MoveRecord, ...]:
        return tuple(self._history)

    def replay_history(self) -> Board:
        """Start-Board mit allen Zügen der Historie neu angewandt."""
        board = self.definition.initial_board
        for record in self._history:
            board.set_shape(record.x, record.y, record.new_shape)
        return board

    def _recompute(self) -> None:
        self._states = constraint_states(self.board, self.definition.constraints)


def create_session(definition: PuzzleDefinition) -> PuzzleSession:
    return PuzzleSession(definition)
