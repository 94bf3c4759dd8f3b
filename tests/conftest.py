"""
Gemeinsame Fixtures für die Solver-Tests.
"""

import pytest

from component_1_shape_board import Board, Shape
from component_3_constraints import PuzzleDefinition
from solver_cases import CASES, global_cats


@pytest.fixture(params=sorted(CASES))
def known_case(request):
    """Parametrisierte Fixture: (PuzzleDefinition, erwartete Lösungsanzahl)."""
    return CASES[request.param]


@pytest.fixture
def fully_locked_valid():
    """Komplett gesperrtes Board, das 'genau ein CAT' erfüllt."""
    board = Board.from_shapes(
        [[Shape.SQUARE, Shape.CAT], [Shape.CIRCLE, Shape.TRIANGLE]],
        locked=[[True, True], [True, True]],
    )
    return PuzzleDefinition(board, [global_cats(1)])


@pytest.fixture
def fully_locked_invalid():
    """Komplett gesperrtes Board, das 'genau ein CAT' verletzt."""
    board = Board.from_shapes(
        [[Shape.SQUARE, Shape.CIRCLE], [Shape.CIRCLE, Shape.TRIANGLE]],
        locked=[[True, True], [True, True]],
    )
    return PuzzleDefinition(board, [global_cats(1)])
