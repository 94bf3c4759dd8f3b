"""
Tests für component_3_constraints

Testet die Puzzle-Definition:
- Validierung der Constraints gegen die Spielfeldmaße
- Unveränderlichkeit des Start-Boards
"""

import pytest

from component_1_shape_board import Board, Shape
from component_3_constraints import (
    CellConstraint,
    ConstraintScope,
    CountConstraint,
    CountOperator,
    PuzzleDefinition,
)
from shapes_exceptions import InvalidConstraintError


@pytest.fixture
def definition():
    """2x2-Puzzle mit leerem Board und genau einem CAT."""
    return PuzzleDefinition(
        Board.blank(2, 2),
        [CountConstraint(ConstraintScope.GLOBAL, CountOperator.EXACTLY, 1, Shape.CAT)],
    )


class TestInitialBoard:
    def test_returned_board_is_a_copy(self, definition):
        """Test: Änderungen am gelieferten Board wirken nicht auf die Definition."""
        board = definition.initial_board
        board.set_shape(0, 0, Shape.SQUARE)

        assert definition.initial_board.get_cell(0, 0).shape == Shape.CAT
        assert definition.initial_board == Board.blank(2, 2)

    def test_source_board_is_copied(self):
        """Test: Spätere Änderungen am übergebenen Board wirken nicht."""
        source = Board.blank(2, 1)
        definition = PuzzleDefinition(source)
        source.set_shape(1, 0, Shape.TRIANGLE)

        assert definition.initial_board.get_cell(1, 0).shape == Shape.CAT

    def test_equal_definitions(self, definition):
        """Test: Gleiche Boards und Constraints ergeben gleiche Definitionen."""
        other = PuzzleDefinition(Board.blank(2, 2), definition.constraints)
        assert other == definition
        assert (other.width, other.height) == (2, 2)

    def test_str(self, definition):
        assert str(definition) == "PuzzleDefinition(2x2, 1 constraints)"


class TestValidation:
    @pytest.mark.parametrize(
        "constraint",
        [
            CountConstraint(ConstraintScope.ROW, CountOperator.EXACTLY, 1, Shape.SQUARE, index=2),
            CountConstraint(ConstraintScope.COLUMN, CountOperator.AT_LEAST, 1, None),
            CountConstraint(ConstraintScope.GLOBAL, CountOperator.AT_MOST, 1, None, index=0),
            CountConstraint(ConstraintScope.GLOBAL, CountOperator.EXACTLY, -1, Shape.CAT),
            CellConstraint(2, 0, Shape.CIRCLE),
            CellConstraint(0, 0, None),
        ],
    )
    def test_invalid_constraints_rejected(self, constraint):
        """Test: Ungültige Indizes, Counts und Formen werfen InvalidConstraintError."""
        with pytest.raises(InvalidConstraintError):
            PuzzleDefinition(Board.blank(2, 2), [constraint])

    def test_constraints_stored_as_tuple(self):
        rules = [CellConstraint(1, 1, Shape.CAT)]
        definition = PuzzleDefinition(Board.blank(2, 2), rules)
        rules.append(CellConstraint(0, 0, Shape.CAT))

        assert definition.constraints == (CellConstraint(1, 1, Shape.CAT),)
