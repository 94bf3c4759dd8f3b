"""
component_10_puzzle_format.py
=============================
Text- und Dict-Formate für Puzzles.

- Kachel-Koordinaten: "A1" = Zeile A, Spalte 1  <->  (x=0, y=0)
- Shape-Codes: CAT, ?, SQR, SQUARE, CIR, CIRCLE, TRI, TRIANGLE
  (Groß-/Kleinschreibung egal, auch Zahlen 0-3)
- describe_constraint: lesbare Beschreibung eines Constraints
- format_board: Textgitter, gesperrte Zellen mit *
- definition_to_dict / definition_from_dict: JSON-taugliche Darstellung

Ausgaben bleiben ASCII, damit Konsolen mit cp1252 sie darstellen können.

Author: KAI Development Team
Date: 2025-12-04
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from component_1_shape_board import Board, Cell, Shape
from component_3_constraint_evaluator import ConstraintState
from component_3_constraints import (
    CellConstraint,
    CellOperator,
    Constraint,
    ConstraintKind,
    ConstraintScope,
    CountConstraint,
    CountOperator,
    PuzzleDefinition,
)
from shapes_exceptions import InvalidBoardError, InvalidConstraintError, wrap_exception

TILE_PATTERN = re.compile(r"^([A-Z])(\d+)$")

SHAPE_SYMBOLS: Dict[Shape, str] = {
    Shape.CAT: "?",
    Shape.SQUARE: "S",
    Shape.CIRCLE: "C",
    Shape.TRIANGLE: "T",
}

SHAPE_NAMES: Dict[Shape, str] = {
    Shape.CAT: "Cat",
    Shape.SQUARE: "Square",
    Shape.CIRCLE: "Circle",
    Shape.TRIANGLE: "Triangle",
}

SHAPE_CODES: Dict[str, Shape] = {
    "CAT": Shape.CAT,
    "?": Shape.CAT,
    "SQR": Shape.SQUARE,
    "SQUARE": Shape.SQUARE,
    "S": Shape.SQUARE,
    "CIR": Shape.CIRCLE,
    "CIRCLE": Shape.CIRCLE,
    "C": Shape.CIRCLE,
    "TRI": Shape.TRIANGLE,
    "TRIANGLE": Shape.TRIANGLE,
    "T": Shape.TRIANGLE,
}

STATE_SYMBOLS: Dict[ConstraintState, str] = {
    ConstraintState.SATISFIED: "[OK]",
    ConstraintState.VIOLATED: "[X] ",
    ConstraintState.IN_PROGRESS: "[..]",
}


# ============================================================================
# Koordinaten und Shapes
# ============================================================================


def parse_tile(tile: str) -> Optional[Tuple[int, int]]:
    """
    "B3" -> (2, 1). None bei ungültigem Format.

    Die Grenzen des Spielfelds werden nicht geprüft.
    """
    match = TILE_PATTERN.match(tile.strip().upper())
    if not match:
        return None
    y = ord(match.group(1)) - ord("A")
    x = int(match.group(2)) - 1
    if x < 0:
        return None
    return x, y


def tile_name(x: int, y: int) -> str:
    return f"{chr(ord('A') + y)}{x + 1}"


def parse_shape(code: Any) -> Optional[Shape]:
    """Shape aus Code, Name oder int-Wert. None wenn unbekannt."""
    if isinstance(code, Shape):
        return code
    if isinstance(code, int) and not isinstance(code, bool):
        try:
            return Shape(code)
        except ValueError:
            return None
    if isinstance(code, str):
        normalized = code.strip().upper()
        if normalized.isdigit():
            return parse_shape(int(normalized))
        return SHAPE_CODES.get(normalized)
    return None


# ============================================================================
# Text
# ============================================================================


def describe_constraint(constraint: Constraint) -> str:
    """
    Lesbare Beschreibung.

    Beispiele: "A1 = Square", "Row B: exactly 1 Circle", "ALL: no Cats",
    "Col 2: at least 2 shapes"
    """
    if constraint.kind == ConstraintKind.CELL:
        operator = "=" if constraint.operator == CellOperator.IS else "!="
        return f"{tile_name(constraint.x, constraint.y)} {operator} {SHAPE_NAMES[constraint.shape]}"

    if constraint.scope == ConstraintScope.GLOBAL:
        scope = "ALL"
    elif constraint.scope == ConstraintScope.ROW:
        scope = f"Row {chr(ord('A') + constraint.index)}"
    else:
        scope = f"Col {constraint.index + 1}"

    noun = "shape" if constraint.shape is None else SHAPE_NAMES[constraint.shape]

    if constraint.operator == CountOperator.NONE:
        return f"{scope}: no {noun}s"

    prefix = {
        CountOperator.EXACTLY: "exactly",
        CountOperator.AT_LEAST: "at least",
        CountOperator.AT_MOST: "at most",
    }[constraint.operator]
    plural = "" if constraint.count == 1 else "s"
    return f"{scope}: {prefix} {constraint.count} {noun}{plural}"


def format_board(board: Board) -> str:
    """Textgitter mit Spaltennummern und Zeilenbuchstaben."""
    separator = "  +" + "---+" * board.width
    lines = ["    " + "".join(f"{x + 1:<4}" for x in range(board.width)).rstrip()]
    lines.append(separator)

    for y, row in enumerate(board.rows):
        cells = "".join(
            f" {SHAPE_SYMBOLS[cell.shape]}{'*' if cell.locked else ' '}|" for cell in row
        )
        lines.append(f"{chr(ord('A') + y)} |{cells}")
        lines.append(separator)

    lines.append("")
    lines.append("Legend: ? = Cat, S = Square, C = Circle, T = Triangle, * = locked")
    return "\n".join(lines)


def format_constraints(
    constraints: Sequence[Constraint],
    states: Optional[Sequence[ConstraintState]] = None,
) -> str:
    """Nummerierte Constraint-Liste, optional mit Live-Status."""
    lines: List[str] = []
    for i, constraint in enumerate(constraints):
        marker = ""
        if states is not None and i < len(states):
            marker = STATE_SYMBOLS[states[i]] + " "
        lines.append(f"{i + 1:>2}. {marker}{describe_constraint(constraint)}")
    return "\n".join(lines)


# ============================================================================
# Dict / JSON
# ============================================================================


def constraint_to_dict(constraint: Constraint) -> Dict[str, Any]:
    if constraint.kind == ConstraintKind.CELL:
        return {
            "type": "cell",
            "x": constraint.x,
            "y": constraint.y,
            "operator": constraint.operator.value,
            "shape": constraint.shape.name,
        }

    data: Dict[str, Any] = {
        "type": constraint.scope.value,
        "operator": constraint.operator.value,
        "count": constraint.count,
        "shape": constraint.shape.name if constraint.shape is not None else None,
    }
    if constraint.index is not None:
        data["index"] = constraint.index
    return data


def constraint_from_dict(data: Dict[str, Any]) -> Constraint:
    """
    Raises:
        InvalidConstraintError: Bei unbekanntem Typ, Operator oder Shape
    """
    try:
        kind = data["type"]
        if kind == "cell":
            shape = parse_shape(data["shape"])
            if shape is None:
                raise InvalidConstraintError(
                    f"Unbekannter Shape: {data['shape']!r}", constraint=data
                )
            return CellConstraint(
                x=int(data["x"]),
                y=int(data["y"]),
                shape=shape,
                operator=CellOperator(data.get("operator", "is")),
            )

        raw_shape = data.get("shape")
        shape = None if raw_shape is None else parse_shape(raw_shape)
        if raw_shape is not None and shape is None:
            raise InvalidConstraintError(
                f"Unbekannter Shape: {raw_shape!r}", constraint=data
            )
        index = data.get("index")
        return CountConstraint(
            scope=ConstraintScope(kind),
            operator=CountOperator(data["operator"]),
            count=int(data.get("count", 0)),
            shape=shape,
            index=None if index is None else int(index),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise wrap_exception(
            e, InvalidConstraintError, "Constraint-Dict ungültig", constraint=data
        ) from e


def definition_to_dict(definition: PuzzleDefinition) -> Dict[str, Any]:
    board = definition.initial_board
    return {
        "width": board.width,
        "height": board.height,
        "board": [
            [{"shape": cell.shape.name, "locked": cell.locked} for cell in row]
            for row in board.rows
        ],
        "constraints": [constraint_to_dict(c) for c in definition.constraints],
    }


def definition_from_dict(data: Dict[str, Any]) -> PuzzleDefinition:
    """
    Gegenstück zu definition_to_dict.

    Raises:
        InvalidBoardError: Bei ungültigem Board
        InvalidConstraintError: Bei ungültigen Constraints
    """
    try:
        rows: List[List[Cell]] = []
        for row in data["board"]:
            cells: List[Cell] = []
            for raw in row:
                shape = parse_shape(raw["shape"])
                if shape is None:
                    raise InvalidBoardError(f"Unbekannter Shape: {raw['shape']!r}")
                cells.append(Cell(shape, bool(raw.get("locked", False))))
            rows.append(cells)
    except (KeyError, TypeError) as e:
        raise wrap_exception(e, InvalidBoardError, "Board-Dict ungültig") from e

    constraints = [constraint_from_dict(c) for c in data.get("constraints", [])]
    return PuzzleDefinition(Board(rows), constraints)
