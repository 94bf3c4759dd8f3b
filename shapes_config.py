"""
shapes_config.py

Konfiguration der Shapes-Engine: Schwierigkeitsstufen, Solver-Memo-Größe,
Generator-Wahrscheinlichkeiten.

Quelle (in dieser Reihenfolge):
1. Explizit übergebener Pfad an load_config()
2. Umgebungsvariable SHAPES_CONFIG
3. config/difficulty_settings.yaml neben diesem Modul
4. Eingebaute Defaults (wenn die Datei fehlt)

Die Konfiguration wird explizit an Generator und Solver übergeben. Solver
lesen keinen globalen Zustand.

Verwendung:
    from shapes_config import Difficulty, get_config

    settings = get_config().settings_for(Difficulty.LEVEL_3)
    print(settings.width, settings.height)
"""

import os
from dataclasses import dataclass, field, replace
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from common.constants import ANY_SHAPE_PROBABILITY, SOLVER_CACHE_MAXSIZE
from component_15_logging_config import get_logger
from shapes_exceptions import InvalidConfigError, wrap_exception

logger = get_logger(__name__)

CONFIG_ENV_VAR = "SHAPES_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "difficulty_settings.yaml"


class Difficulty(IntEnum):
    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4
    LEVEL_5 = 5


@dataclass(frozen=True)
class DifficultySettings:
    """Parameter einer Schwierigkeitsstufe."""

    width: int
    height: int
    min_constraints: int
    max_constraints: int
    required_superpositions: int

    def validate(
        self, level: Union[int, str] = "?", config_path: Optional[str] = None
    ) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidConfigError(
                f"Level {level}: Spielfeld muss mindestens 1x1 sein "
                f"({self.width}x{self.height})",
                config_path=config_path,
            )
        if self.min_constraints < 1 or self.min_constraints > self.max_constraints:
            raise InvalidConfigError(
                f"Level {level}: ungültiger Constraint-Bereich "
                f"[{self.min_constraints}, {self.max_constraints}]",
                config_path=config_path,
            )
        if not 0 <= self.required_superpositions <= self.width * self.height:
            raise InvalidConfigError(
                f"Level {level}: required_superpositions "
                f"{self.required_superpositions} außerhalb von "
                f"[0, {self.width * self.height}]",
                config_path=config_path,
            )


DEFAULT_DIFFICULTY_SETTINGS: Dict[Difficulty, DifficultySettings] = {
    Difficulty.LEVEL_1: DifficultySettings(2, 2, 2, 4, 1),
    Difficulty.LEVEL_2: DifficultySettings(2, 3, 3, 12, 1),
    Difficulty.LEVEL_3: DifficultySettings(3, 3, 4, 20, 1),
    Difficulty.LEVEL_4: DifficultySettings(3, 4, 5, 25, 1),
    Difficulty.LEVEL_5: DifficultySettings(4, 4, 6, 30, 2),
}


@dataclass
class ShapesConfig:
    """Gesamtkonfiguration."""

    difficulty_settings: Dict[Difficulty, DifficultySettings] = field(
        default_factory=lambda: dict(DEFAULT_DIFFICULTY_SETTINGS)
    )
    solver_cache_size: int = SOLVER_CACHE_MAXSIZE
    any_shape_probability: float = ANY_SHAPE_PROBABILITY
    source: Optional[str] = None

    def settings_for(self, difficulty: Union[Difficulty, int]) -> DifficultySettings:
        """Einstellungen einer Stufe. Werte außerhalb 1..5 werden geklemmt."""
        level = Difficulty(min(max(int(difficulty), 1), 5))
        return self.difficulty_settings[level]


def _parse_settings(level: Any, raw: Any, path: str) -> DifficultySettings:
    if not isinstance(raw, dict):
        raise InvalidConfigError(
            f"Level {level}: erwartet ein Mapping, erhalten {type(raw).__name__}",
            config_path=path,
        )
    try:
        settings = DifficultySettings(
            width=int(raw["width"]),
            height=int(raw["height"]),
            min_constraints=int(raw["min_constraints"]),
            max_constraints=int(raw["max_constraints"]),
            required_superpositions=int(raw.get("required_superpositions", 1)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise wrap_exception(
            e, InvalidConfigError, f"Level {level}: ungültige Werte", config_path=path
        ) from e

    settings.validate(level, config_path=path)
    return settings


def load_config(path: Optional[Union[str, Path]] = None) -> ShapesConfig:
    """
    Lädt die Konfiguration aus YAML.

    Args:
        path: Pfad zur YAML-Datei (Standard: SHAPES_CONFIG oder
              config/difficulty_settings.yaml)

    Returns:
        ShapesConfig, Defaults wenn die Datei nicht existiert

    Raises:
        InvalidConfigError: Wenn die Datei nicht parsebar ist oder ungültige
            Werte enthält
    """
    config_file = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)

    if not config_file.exists():
        logger.warning(
            "Config-Datei nicht gefunden, verwende Defaults",
            extra={"config_path": str(config_file)},
        )
        return ShapesConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.log_exception(e, "Config nicht ladbar", config_path=str(config_file))
        raise wrap_exception(
            e, InvalidConfigError, "YAML nicht parsebar", config_path=str(config_file)
        ) from e

    if not isinstance(raw, dict):
        raise InvalidConfigError(
            "Top-Level der Config muss ein Mapping sein", config_path=str(config_file)
        )

    config = ShapesConfig(source=str(config_file))

    levels = raw.get("difficulty_levels", {}) or {}
    if not isinstance(levels, dict):
        raise InvalidConfigError(
            "difficulty_levels muss ein Mapping sein", config_path=str(config_file)
        )
    for key, value in levels.items():
        try:
            level = Difficulty(int(key))
        except ValueError as e:
            raise wrap_exception(
                e,
                InvalidConfigError,
                f"Unbekannte Schwierigkeitsstufe: {key!r}",
                config_path=str(config_file),
            ) from e
        config.difficulty_settings[level] = _parse_settings(
            key, value, str(config_file)
        )

    solver = raw.get("solver", {}) or {}
    if "cache_size" in solver:
        cache_size = solver["cache_size"]
        if not isinstance(cache_size, int) or cache_size < 1:
            raise InvalidConfigError(
                f"solver.cache_size muss eine Ganzzahl >= 1 sein: {cache_size!r}",
                config_path=str(config_file),
            )
        config.solver_cache_size = cache_size

    generator = raw.get("generator", {}) or {}
    if "any_shape_probability" in generator:
        probability = generator["any_shape_probability"]
        if not isinstance(probability, (int, float)) or not 0.0 <= probability <= 1.0:
            raise InvalidConfigError(
                f"generator.any_shape_probability muss in [0, 1] liegen: {probability!r}",
                config_path=str(config_file),
            )
        config.any_shape_probability = float(probability)

    logger.info(
        "Config geladen",
        extra={
            "config_path": str(config_file),
            "levels": len(config.difficulty_settings),
            "solver_cache_size": config.solver_cache_size,
        },
    )
    return config


_config: Optional[ShapesConfig] = None


def get_config() -> ShapesConfig:
    """Gecachte Standard-Konfiguration."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def with_overrides(config: ShapesConfig, **overrides: Any) -> ShapesConfig:
    """Kopie der Konfiguration mit geänderten Feldern."""
    overrides.setdefault("difficulty_settings", dict(config.difficulty_settings))
    return replace(config, **overrides)
