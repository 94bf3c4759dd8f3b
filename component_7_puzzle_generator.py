"""
component_7_puzzle_generator.py
===============================
Prozeduraler, seed-basierter Puzzle-Generator.

Ablauf:
1. Spielfeld komplett mit ungesperrten CAT-Zellen füllen
2. Erster Constraint immer: GLOBAL exactly <required_superpositions> CAT
3. Ziel-Anzahl der Constraints aus [min_constraints, max_constraints] ziehen
4. Ab Stufe 2 feste Vorlagen der Stufe anhängen (siehe _template_constraints)
5. Zufällige Zeilen-/Spalten-Constraints ziehen, Duplikate auf
   (scope, index, shape) verwerfen, bis die Ziel-Anzahl erreicht ist

Der Generator ruft keinen Solver auf. Lösbarkeit und Eindeutigkeit sind
nicht garantiert, siehe component_9_puzzle_analysis.

Author: KAI Development Team
Date: 2025-12-03
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple, Union

from common.constants import ANY_SHAPE_PROBABILITY, MAX_GENERATION_ATTEMPTS
from component_1_shape_board import CONCRETE_SHAPES, Board, Shape
from component_2_seeded_rng import SeededRNG
from component_3_constraints import (
    Constraint,
    ConstraintScope,
    CountConstraint,
    CountOperator,
    PuzzleDefinition,
)
from component_15_logging_config import get_logger
from shapes_config import Difficulty, ShapesConfig, get_config
from shapes_exceptions import InvalidGeneratorConfigError

logger = get_logger(__name__)

Seed = Union[int, str]
SlotKey = Tuple[ConstraintScope, Optional[int], Optional[Shape]]

OPERATORS: Tuple[CountOperator, ...] = (
    CountOperator.EXACTLY,
    CountOperator.AT_LEAST,
    CountOperator.AT_MOST,
    CountOperator.NONE,
)


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Parameter für einen Generator-Lauf.

    min_constraints / max_constraints zählen den globalen CAT-Constraint mit.
    difficulty wählt die Vorlagen-Constraints (None oder 1 = keine).
    """

    width: int
    height: int
    min_constraints: int
    max_constraints: int
    required_superpositions: int = 1
    any_shape_probability: float = ANY_SHAPE_PROBABILITY
    difficulty: Optional[int] = None

    def validate(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidGeneratorConfigError(
                f"Spielfeld muss mindestens 1x1 sein: {self.width}x{self.height}",
                config=self,
            )
        if self.min_constraints < 1 or self.min_constraints > self.max_constraints:
            raise InvalidGeneratorConfigError(
                f"Ungültiger Constraint-Bereich [{self.min_constraints}, "
                f"{self.max_constraints}]",
                config=self,
            )
        if not 0 <= self.required_superpositions <= self.width * self.height:
            raise InvalidGeneratorConfigError(
                f"required_superpositions {self.required_superpositions} passt nicht "
                f"auf {self.width}x{self.height}",
                config=self,
            )
        if not 0.0 <= self.any_shape_probability <= 1.0:
            raise InvalidGeneratorConfigError(
                f"any_shape_probability muss in [0, 1] liegen: "
                f"{self.any_shape_probability}",
                config=self,
            )
        if self.difficulty is not None and self.difficulty < 1:
            raise InvalidGeneratorConfigError(
                f"Ungültige Schwierigkeitsstufe: {self.difficulty}", config=self
            )


def _slot_key(constraint: CountConstraint) -> SlotKey:
    return constraint.scope, constraint.index, constraint.shape


def random_constraint(
    rng: SeededRNG, width: int, height: int, any_shape_probability: float
) -> CountConstraint:
    """
    Zieht einen zufälligen Zeilen- oder Spalten-Constraint.

    Constraints ohne Form zählen jede Zelle. Sie bekommen die Scope-Länge als
    Count und nie den Operator NONE, damit sie nicht widersprüchlich sind.
    """
    if rng.random() < 0.5:
        scope = ConstraintScope.ROW
        index = rng.next_int(height)
        length = width
    else:
        scope = ConstraintScope.COLUMN
        index = rng.next_int(width)
        length = height

    shape: Optional[Shape] = None
    if rng.random() >= any_shape_probability:
        shape = CONCRETE_SHAPES[rng.next_int(len(CONCRETE_SHAPES))]

    operator = OPERATORS[rng.next_int(len(OPERATORS))]

    if shape is None:
        if operator == CountOperator.NONE:
            operator = CountOperator.AT_LEAST
        count = length
    elif operator == CountOperator.AT_MOST:
        count = rng.next_int(min(length // 2, 2)) + 1
    elif operator == CountOperator.NONE:
        count = 0
    else:
        count = 1

    return CountConstraint(
        scope=scope, operator=operator, count=count, shape=shape, index=index
    )


def _template_constraints(
    rng: SeededRNG, width: int, height: int, difficulty: Optional[int]
) -> List[CountConstraint]:
    """
    Feste Constraint-Vorlagen einer Schwierigkeitsstufe.

    Stufe 2: zwei exactly-Constraints mit verschiedenen Formen auf derselben
    Zeile. Ab Stufe 3: eine Zeile und eine Spalte mit genau einer Form X,
    dazu global höchstens w*h/4 einer Form und mindestens eine einer anderen.
    Stufe 1 und None liefern keine Vorlagen.
    """
    if difficulty is None or difficulty <= 1:
        return []

    if difficulty == 2:
        row = rng.next_int(height)
        first = CONCRETE_SHAPES[rng.next_int(len(CONCRETE_SHAPES))]
        others = [shape for shape in CONCRETE_SHAPES if shape != first]
        second = others[rng.next_int(len(others))]
        count = min(width // 2, 1)
        return [
            CountConstraint(ConstraintScope.ROW, CountOperator.EXACTLY, count, first, index=row),
            CountConstraint(ConstraintScope.ROW, CountOperator.EXACTLY, count, second, index=row),
        ]

    row = rng.next_int(height)
    column = rng.next_int(width)
    crossing = CONCRETE_SHAPES[rng.next_int(len(CONCRETE_SHAPES))]
    limited = CONCRETE_SHAPES[rng.next_int(len(CONCRETE_SHAPES))]
    required = next(shape for shape in CONCRETE_SHAPES if shape != limited)
    return [
        CountConstraint(ConstraintScope.ROW, CountOperator.EXACTLY, 1, crossing, index=row),
        CountConstraint(ConstraintScope.COLUMN, CountOperator.EXACTLY, 1, crossing, index=column),
        CountConstraint(
            ConstraintScope.GLOBAL, CountOperator.AT_MOST, (width * height) // 4, limited
        ),
        CountConstraint(ConstraintScope.GLOBAL, CountOperator.AT_LEAST, 1, required),
    ]


class PuzzleGenerator:
    """
    Erzeugt PuzzleDefinitions aus GeneratorConfig oder Schwierigkeitsstufe.

    Args:
        config: ShapesConfig mit Schwierigkeitstabelle (Standard: get_config())
    """

    def __init__(self, config: Optional[ShapesConfig] = None):
        self.config = config or get_config()

    def config_for_difficulty(self, difficulty: Union[Difficulty, int]) -> GeneratorConfig:
        settings = self.config.settings_for(difficulty)
        return GeneratorConfig(
            width=settings.width,
            height=settings.height,
            min_constraints=settings.min_constraints,
            max_constraints=settings.max_constraints,
            required_superpositions=settings.required_superpositions,
            any_shape_probability=self.config.any_shape_probability,
            difficulty=min(max(int(difficulty), 1), 5),
        )

    def generate_for_difficulty(
        self, difficulty: Union[Difficulty, int], seed: Optional[Seed] = None
    ) -> PuzzleDefinition:
        return self.generate(self.config_for_difficulty(difficulty), seed)

    def generate(
        self, config: GeneratorConfig, seed: Optional[Seed] = None
    ) -> PuzzleDefinition:
        """
        Erzeugt ein Puzzle.

        Args:
            config: Generator-Parameter
            seed: Seed für SeededRNG, None = Seed aus System-Zufall

        Returns:
            PuzzleDefinition mit leerem CAT-Board

        Raises:
            InvalidGeneratorConfigError: Bei unerfüllbarer Konfiguration
        """
        config.validate()

        if seed is None:
            seed = random.SystemRandom().getrandbits(32)
            logger.info("Seed aus System-Zufall gezogen", extra={"seed": seed})

        rng = SeededRNG(seed)
        board = Board.blank(config.width, config.height)

        constraints: List[Constraint] = [
            CountConstraint(
                scope=ConstraintScope.GLOBAL,
                operator=CountOperator.EXACTLY,
                count=config.required_superpositions,
                shape=Shape.CAT,
            )
        ]

        requested = rng.next_int_range(config.min_constraints, config.max_constraints)
        target = min(requested, 1 + self._slot_count(config))
        if target < requested:
            logger.warning(
                "Ziel-Anzahl auf verfügbare Slots begrenzt",
                extra={"requested": requested, "target": target},
            )

        seen: Set[SlotKey] = {_slot_key(constraints[0])}
        for template in _template_constraints(
            rng, config.width, config.height, config.difficulty
        ):
            key = _slot_key(template)
            if key in seen or len(constraints) >= config.max_constraints:
                continue
            seen.add(key)
            constraints.append(template)

        attempts = 0
        while len(constraints) < target and attempts < MAX_GENERATION_ATTEMPTS:
            attempts += 1
            candidate = random_constraint(
                rng, config.width, config.height, config.any_shape_probability
            )
            key = _slot_key(candidate)
            if key in seen:
                continue
            seen.add(key)
            constraints.append(candidate)

        if len(constraints) < target:
            logger.warning(
                "Maximale Versuche erreicht, Puzzle hat weniger Constraints",
                extra={
                    "target": target,
                    "generated": len(constraints),
                    "attempts": attempts,
                },
            )

        definition = PuzzleDefinition(board, constraints)
        logger.debug(
            "Puzzle generiert",
            extra={
                "seed": seed,
                "width": config.width,
                "height": config.height,
                "constraints": len(constraints),
                "attempts": attempts,
            },
        )
        return definition

    @staticmethod
    def _slot_count(config: GeneratorConfig) -> int:
        """Anzahl unterschiedlicher (scope, index, shape)-Kombinationen."""
        shapes = len(CONCRETE_SHAPES)
        if config.any_shape_probability > 0.0:
            shapes += 1
        if config.any_shape_probability >= 1.0:
            shapes = 1
        return (config.width + config.height) * shapes


def generate(config: GeneratorConfig, seed: Optional[Seed] = None) -> PuzzleDefinition:
    """Erzeugt ein Puzzle mit der Standard-Konfiguration."""
    return PuzzleGenerator().generate(config, seed)
