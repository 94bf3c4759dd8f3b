"""
component_8_level_number.py
===========================
Levelnummern: teilbare Kodierung von Schwierigkeit und Seed.

    level = difficulty * 10000 + seed      (difficulty 1..5, seed 0..9999)

Beispiel: Schwierigkeit 3, Seed 42 -> 30042, angezeigt als "3-0042".

Beim Kodieren wird der Seed in [0, 9999] geklemmt, beim Dekodieren die
Schwierigkeit in [1, 5]. next/previous laufen über Stufengrenzen hinweg und
von Stufe 5 zurück auf Stufe 1 (und umgekehrt).

Author: KAI Development Team
Date: 2025-12-03
"""

from typing import Optional, Tuple

from common.constants import MAX_DIFFICULTY, MIN_DIFFICULTY, SEEDS_PER_DIFFICULTY
from component_3_constraints import PuzzleDefinition
from component_7_puzzle_generator import PuzzleGenerator

MAX_SEED = SEEDS_PER_DIFFICULTY - 1


def encode_level_number(difficulty: int, seed: int) -> int:
    seed = min(max(int(seed), 0), MAX_SEED)
    return int(difficulty) * SEEDS_PER_DIFFICULTY + seed


def decode_level_number(level: int) -> Tuple[int, int]:
    """Gibt (difficulty, seed) zurück."""
    level = int(level)
    difficulty = min(max(level // SEEDS_PER_DIFFICULTY, MIN_DIFFICULTY), MAX_DIFFICULTY)
    seed = level % SEEDS_PER_DIFFICULTY
    return difficulty, seed


def next_level_number(level: int) -> int:
    difficulty, seed = decode_level_number(level)
    if seed < MAX_SEED:
        return encode_level_number(difficulty, seed + 1)
    if difficulty < MAX_DIFFICULTY:
        return encode_level_number(difficulty + 1, 0)
    return encode_level_number(MIN_DIFFICULTY, 0)


def previous_level_number(level: int) -> int:
    difficulty, seed = decode_level_number(level)
    if seed > 0:
        return encode_level_number(difficulty, seed - 1)
    if difficulty > MIN_DIFFICULTY:
        return encode_level_number(difficulty - 1, MAX_SEED)
    return encode_level_number(MAX_DIFFICULTY, MAX_SEED)


def starting_level_number(difficulty: int) -> int:
    """Erste Levelnummer einer Stufe (Seed 0)."""
    difficulty = min(max(int(difficulty), MIN_DIFFICULTY), MAX_DIFFICULTY)
    return encode_level_number(difficulty, 0)


def format_level_number(level: int) -> str:
    """Anzeigeform "D-SSSS"."""
    difficulty, seed = decode_level_number(level)
    return f"{difficulty}-{seed:04d}"


def generate_level(
    level: int, generator: Optional[PuzzleGenerator] = None
) -> PuzzleDefinition:
    """Erzeugt das Puzzle zu einer Levelnummer."""
    difficulty, seed = decode_level_number(level)
    return (generator or PuzzleGenerator()).generate_for_difficulty(difficulty, seed)
