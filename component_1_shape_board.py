"""
component_1_shape_board.py
==========================
Spielfeld und Formen für Schrödinger's Shapes.

Ein Board ist eine rechteckige, zeilenweise gespeicherte Matrix von Zellen.
Jede Zelle trägt eine Form (Shape) und ein locked-Flag. Die Form CAT ist die
Superposition: sie kann beim Prüfen von Constraints für jede konkrete Form
einspringen, zählt aber nie als festgelegte Instanz einer konkreten Form.

Koordinaten: x = Spalte, y = Zeile, Ursprung oben links.

Author: KAI Development Team
Date: 2025-12-02
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

from shapes_exceptions import InvalidBoardError


class Shape(IntEnum):
    """Die vier Zellzustände. CAT ist der Wildcard-/Superpositions-Zustand."""

    CAT = 0
    SQUARE = 1
    CIRCLE = 2
    TRIANGLE = 3

    @property
    def is_wildcard(self) -> bool:
        return self is Shape.CAT


CONCRETE_SHAPES: Tuple[Shape, ...] = (Shape.SQUARE, Shape.CIRCLE, Shape.TRIANGLE)


@dataclass
class Cell:
    """Eine Zelle des Spielfelds. Gesperrte Zellen sind vorgegebene Anker."""

    shape: Shape = Shape.CAT
    locked: bool = False

    def copy(self) -> "Cell":
        return Cell(self.shape, self.locked)


@dataclass
class Board:
    """
    Rechteckiges Spielfeld aus Zellen (zeilenweise).

    Invarianten:
    - Mindestens 1x1
    - Alle Zeilen gleich lang
    - Jede Zelle trägt einen gültigen Shape

    Verletzungen werfen InvalidBoardError bei der Konstruktion.
    """

    rows: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self):
        """Validiert die Spielfeld-Invarianten."""
        if not self.rows or not self.rows[0]:
            raise InvalidBoardError("Spielfeld muss mindestens 1x1 groß sein")

        width = len(self.rows[0])
        for y, row in enumerate(self.rows):
            if len(row) != width:
                raise InvalidBoardError(
                    f"Zeile {y} hat {len(row)} Zellen, erwartet {width}",
                    width=width,
                    height=len(self.rows),
                )
            for x, cell in enumerate(row):
                if not isinstance(cell, Cell):
                    raise InvalidBoardError(
                        f"Zelle ({x}, {y}) ist keine Cell: {cell!r}",
                        width=width,
                        height=len(self.rows),
                    )
                try:
                    cell.shape = Shape(cell.shape)
                except ValueError as e:
                    raise InvalidBoardError(
                        f"Ungültiger Shape in Zelle ({x}, {y}): {cell.shape!r}",
                        width=width,
                        height=len(self.rows),
                        original_exception=e,
                    ) from e

    # ------------------------------------------------------------------
    # Konstruktion
    # ------------------------------------------------------------------

    @classmethod
    def blank(cls, width: int, height: int) -> "Board":
        """Spielfeld mit ungesperrten CAT-Zellen."""
        if width < 1 or height < 1:
            raise InvalidBoardError(
                f"Spielfeld muss mindestens 1x1 groß sein: {width}x{height}",
                width=width,
                height=height,
            )
        return cls([[Cell() for _ in range(width)] for _ in range(height)])

    @classmethod
    def from_shapes(
        cls,
        shapes: Sequence[Sequence[int]],
        locked: Optional[Sequence[Sequence[bool]]] = None,
    ) -> "Board":
        """
        Erstellt ein Board aus einer Shape-Matrix.

        Args:
            shapes: Zeilen von Shapes (oder deren int-Werten)
            locked: Optionale Matrix gleicher Form mit locked-Flags
        """
        rows: List[List[Cell]] = []
        for y, shape_row in enumerate(shapes):
            row: List[Cell] = []
            for x, value in enumerate(shape_row):
                is_locked = False
                if locked is not None:
                    try:
                        is_locked = bool(locked[y][x])
                    except IndexError as e:
                        raise InvalidBoardError(
                            f"locked-Matrix passt nicht zur Shape-Matrix bei ({x}, {y})",
                            original_exception=e,
                        ) from e
                row.append(Cell(value, is_locked))
            rows.append(row)
        return cls(rows)

    def to_shapes(self) -> List[List[Shape]]:
        """Shape-Matrix ohne locked-Flags."""
        return [[cell.shape for cell in row] for row in self.rows]

    def clone(self) -> "Board":
        """Tiefe Kopie."""
        return Board([[cell.copy() for cell in row] for row in self.rows])

    # ------------------------------------------------------------------
    # Abfragen
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Zelle an (x, y) oder None außerhalb des Spielfelds."""
        if not self.in_bounds(x, y):
            return None
        return self.rows[y][x]

    def set_shape(self, x: int, y: int, shape: Shape) -> None:
        """Setzt den Shape einer Zelle. Ignoriert Positionen außerhalb."""
        if not self.in_bounds(x, y):
            return
        self.rows[y][x].shape = Shape(shape)

    def row_cells(self, index: int) -> List[Cell]:
        """Zellen einer Zeile, leere Liste bei ungültigem Index."""
        if not 0 <= index < self.height:
            return []
        return list(self.rows[index])

    def column_cells(self, index: int) -> List[Cell]:
        """Zellen einer Spalte, leere Liste bei ungültigem Index."""
        if not 0 <= index < self.width:
            return []
        return [row[index] for row in self.rows]

    def all_cells(self) -> List[Cell]:
        return [cell for row in self.rows for cell in row]

    def positions(self) -> Iterable[Tuple[int, int]]:
        """Alle (x, y) in Zeilen-Reihenfolge."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def count_shape(self, shape: Shape) -> int:
        return sum(1 for cell in self.all_cells() if cell.shape == shape)

    def unlocked_count(self) -> int:
        return sum(1 for cell in self.all_cells() if not cell.locked)

    def __str__(self) -> str:
        return f"Board({self.width}x{self.height})"
