"""
Tests für component_10_puzzle_format

Testet Kachel-Koordinaten, Shape-Codes, Beschreibungen, Board-Ausgabe
und die Dict-Darstellung von Puzzles.
"""

import pytest

from component_1_shape_board import Board, Cell, Shape
from component_3_constraint_evaluator import ConstraintState
from component_3_constraints import (
    CellConstraint,
    CellOperator,
    ConstraintScope,
    CountConstraint,
    CountOperator,
    PuzzleDefinition,
)
from component_10_puzzle_format import (
    constraint_from_dict,
    constraint_to_dict,
    definition_from_dict,
    definition_to_dict,
    describe_constraint,
    format_board,
    format_constraints,
    parse_shape,
    parse_tile,
    tile_name,
)
from shapes_exceptions import InvalidBoardError, InvalidConstraintError


class TestTiles:
    @pytest.mark.parametrize(
        "tile,expected",
        [("A1", (0, 0)), ("B3", (2, 1)), ("c2", (1, 2)), (" D10 ", (9, 3))],
    )
    def test_parse_tile(self, tile, expected):
        assert parse_tile(tile) == expected

    @pytest.mark.parametrize("tile", ["", "1A", "A", "A0", "AA1", "A-1"])
    def test_invalid_tiles(self, tile):
        """Test: Ungültige Kacheln liefern None."""
        assert parse_tile(tile) is None

    def test_tile_name(self):
        assert tile_name(0, 0) == "A1"
        assert tile_name(2, 1) == "B3"
        assert parse_tile(tile_name(3, 2)) == (3, 2)


class TestShapeCodes:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("CAT", Shape.CAT),
            ("?", Shape.CAT),
            ("sqr", Shape.SQUARE),
            ("Circle", Shape.CIRCLE),
            ("TRI", Shape.TRIANGLE),
            ("2", Shape.CIRCLE),
            (3, Shape.TRIANGLE),
            (Shape.SQUARE, Shape.SQUARE),
        ],
    )
    def test_parse_shape(self, code, expected):
        assert parse_shape(code) == expected

    @pytest.mark.parametrize("code", ["HEXAGON", "7", 9, None, True, 1.5])
    def test_unknown_shape(self, code):
        assert parse_shape(code) is None


class TestDescriptions:
    @pytest.mark.parametrize(
        "constraint,expected",
        [
            (CellConstraint(0, 0, Shape.SQUARE), "A1 = Square"),
            (CellConstraint(2, 1, Shape.CAT, CellOperator.IS_NOT), "B3 != Cat"),
            (
                CountConstraint(ConstraintScope.ROW, CountOperator.EXACTLY, 1, Shape.CIRCLE, index=1),
                "Row B: exactly 1 Circle",
            ),
            (
                CountConstraint(ConstraintScope.GLOBAL, CountOperator.NONE, 0, Shape.CAT),
                "ALL: no Cats",
            ),
            (
                CountConstraint(ConstraintScope.COLUMN, CountOperator.AT_LEAST, 2, None, index=1),
                "Col 2: at least 2 shapes",
            ),
            (
                CountConstraint(ConstraintScope.COLUMN, CountOperator.AT_MOST, 2, Shape.TRIANGLE, index=0),
                "Col 1: at most 2 Triangles",
            ),
        ],
    )
    def test_describe(self, constraint, expected):
        assert describe_constraint(constraint) == expected

    def test_format_constraints_with_states(self):
        """Test: Nummerierte Liste mit Status-Markern."""
        constraints = [
            CountConstraint(ConstraintScope.GLOBAL, CountOperator.EXACTLY, 1, Shape.CAT),
            CellConstraint(0, 0, Shape.SQUARE),
        ]
        text = format_constraints(
            constraints, [ConstraintState.SATISFIED, ConstraintState.IN_PROGRESS]
        )
        assert text.splitlines() == [
            " 1. [OK] ALL: exactly 1 Cat",
            " 2. [..] A1 = Square",
        ]

    def test_format_constraints_without_states(self):
        text = format_constraints([CellConstraint(0, 0, Shape.SQUARE)])
        assert text == " 1. A1 = Square"


class TestBoardText:
    def test_format_board(self):
        """Test: Textgitter mit Zeilenbuchstaben und Sperr-Markierung."""
        board = Board([[Cell(Shape.SQUARE, locked=True), Cell()], [Cell(Shape.CIRCLE), Cell(Shape.TRIANGLE)]])
        lines = format_board(board).splitlines()

        assert lines[0] == "    1   2"
        assert lines[1] == "  +---+---+"
        assert lines[2] == "A | S*| ? |"
        assert lines[4] == "B | C | T |"
        assert lines[-1].startswith("Legend:")

    def test_output_is_ascii(self):
        text = format_board(Board.blank(3, 3))
        assert text.isascii()


class TestDictFormat:
    @pytest.fixture
    def definition(self):
        board = Board([[Cell(Shape.SQUARE, locked=True), Cell()], [Cell(), Cell(Shape.TRIANGLE)]])
        return PuzzleDefinition(
            board,
            [
                CountConstraint(ConstraintScope.GLOBAL, CountOperator.EXACTLY, 1, Shape.CAT),
                CountConstraint(ConstraintScope.ROW, CountOperator.AT_LEAST, 2, None, index=1),
                CellConstraint(1, 0, Shape.CIRCLE, CellOperator.IS_NOT),
            ],
        )

    def test_definition_roundtrip(self, definition):
        """Test: Dict-Darstellung erhält Board und Constraints."""
        restored = definition_from_dict(definition_to_dict(definition))
        assert restored.initial_board == definition.initial_board
        assert restored.constraints == definition.constraints

    def test_dict_layout(self, definition):
        data = definition_to_dict(definition)
        assert data["width"] == 2
        assert data["board"][0][0] == {"shape": "SQUARE", "locked": True}
        assert data["constraints"][0] == {
            "type": "global",
            "operator": "exactly",
            "count": 1,
            "shape": "CAT",
        }
        assert data["constraints"][2]["type"] == "cell"
        assert data["constraints"][2]["operator"] == "is_not"

    def test_cell_constraint_default_operator(self):
        constraint = constraint_from_dict({"type": "cell", "x": 0, "y": 1, "shape": "T"})
        assert constraint == CellConstraint(0, 1, Shape.TRIANGLE, CellOperator.IS)

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "diagonal", "operator": "exactly", "count": 1},
            {"type": "row", "operator": "more_than", "count": 1, "index": 0},
            {"type": "row", "count": 1, "index": 0},
            {"type": "cell", "x": 0, "y": 0, "shape": "HEXAGON"},
            {"operator": "exactly"},
        ],
    )
    def test_invalid_constraint_dict(self, data):
        """Test: Kaputte Constraint-Dicts werfen InvalidConstraintError."""
        with pytest.raises(InvalidConstraintError):
            constraint_from_dict(data)

    def test_invalid_board_shape(self):
        data = {"board": [[{"shape": "HEXAGON"}]], "constraints": []}
        with pytest.raises(InvalidBoardError):
            definition_from_dict(data)

    def test_missing_board(self):
        with pytest.raises(InvalidBoardError):
            definition_from_dict({"constraints": []})

    def test_constraint_outside_board(self):
        """Test: Constraint außerhalb des Boards wird bei der Definition abgelehnt."""
        data = {
            "board": [[{"shape": "CAT"}]],
            "constraints": [{"type": "row", "operator": "exactly", "count": 1, "index": 4, "shape": "S"}],
        }
        with pytest.raises(InvalidConstraintError):
            definition_from_dict(data)

    def test_any_shape_dict(self):
        rule = CountConstraint(ConstraintScope.COLUMN, CountOperator.AT_LEAST, 2, None, index=0)
        assert constraint_to_dict(rule)["shape"] is None
        assert constraint_from_dict(constraint_to_dict(rule)) == rule
