"""
Tests für component_8_level_number

Testet Kodierung, Dekodierung, Wrapping und Formatierung der Levelnummern.
"""

import pytest

from component_3_constraints import ConstraintScope, CountOperator
from component_1_shape_board import Shape
from component_8_level_number import (
    decode_level_number,
    encode_level_number,
    format_level_number,
    generate_level,
    next_level_number,
    previous_level_number,
    starting_level_number,
)


class TestEncoding:
    """Tests für encode/decode."""

    @pytest.mark.parametrize(
        "difficulty,seed,expected",
        [(1, 0, 10000), (2, 1005, 21005), (3, 5000, 35000), (4, 9999, 49999)],
    )
    def test_encode_examples(self, difficulty, seed, expected):
        """Test: Bekannte Beispiele."""
        assert encode_level_number(difficulty, seed) == expected

    def test_roundtrip(self):
        """Test: decode(encode(d, s)) == (d, s)."""
        for difficulty in range(1, 6):
            for seed in (0, 1, 42, 9998, 9999):
                level = encode_level_number(difficulty, seed)
                assert decode_level_number(level) == (difficulty, seed)

    def test_seed_clamped_on_encode(self):
        """Test: Seed wird beim Kodieren auf [0, 9999] geklemmt."""
        assert encode_level_number(2, 12345) == 29999
        assert encode_level_number(2, -7) == 20000

    def test_difficulty_clamped_on_decode(self):
        """Test: Schwierigkeit wird beim Dekodieren auf [1, 5] geklemmt."""
        assert decode_level_number(42) == (1, 42)
        assert decode_level_number(90001) == (5, 1)

    def test_starting_level_number(self):
        """Test: Erste Levelnummer einer Stufe."""
        assert starting_level_number(3) == 30000
        assert starting_level_number(9) == 50000


class TestWrapping:
    """Tests für next/previous."""

    def test_next_within_difficulty(self):
        assert next_level_number(30042) == 30043

    def test_next_wraps_to_next_difficulty(self):
        """Test: Seed 9999 springt auf die nächste Stufe, Seed 0."""
        assert next_level_number(29999) == 30000

    def test_next_wraps_from_five_to_one(self):
        assert next_level_number(59999) == 10000

    def test_previous_within_difficulty(self):
        assert previous_level_number(30042) == 30041

    def test_previous_wraps_to_previous_difficulty(self):
        assert previous_level_number(30000) == 29999

    def test_previous_wraps_from_one_to_five(self):
        assert previous_level_number(10000) == 59999

    def test_next_then_previous(self):
        """Test: previous(next(x)) == x für gültige Levelnummern."""
        for level in (10000, 19999, 35000, 49999, 59999):
            assert previous_level_number(next_level_number(level)) == level


class TestFormatting:
    def test_format(self):
        """Test: Anzeigeform D-SSSS."""
        assert format_level_number(30042) == "3-0042"
        assert format_level_number(10000) == "1-0000"
        assert format_level_number(59999) == "5-9999"


class TestGenerateLevel:
    def test_generate_level_is_deterministic(self):
        """Test: Gleiche Levelnummer ergibt gleiches Puzzle."""
        a = generate_level(20017)
        b = generate_level(20017)
        assert a.constraints == b.constraints

    def test_generate_level_uses_difficulty_settings(self):
        """Test: Stufe 5 ergibt ein 4x4-Feld mit 2 geforderten CATs."""
        definition = generate_level(50003)
        assert (definition.width, definition.height) == (4, 4)

        first = definition.constraints[0]
        assert first.scope == ConstraintScope.GLOBAL
        assert first.operator == CountOperator.EXACTLY
        assert first.shape == Shape.CAT
        assert first.count == 2
