"""
component_2_seeded_rng.py
=========================
Deterministischer Zufallszahlengenerator.

32-Bit linearer Kongruenzgenerator. Gleicher Seed ergibt plattformunabhängig
dieselbe Folge, damit Levelnummern teilbar sind. Der Generator ist NICHT
kryptographisch sicher.

String-Seeds werden per djb2 auf 32 Bit gefaltet. Ein Seed von 0 wird zu 1.

Author: KAI Development Team
Date: 2025-12-02
"""

from typing import Sequence, TypeVar, Union

from common.constants import DJB2_SEED, LCG_INCREMENT, LCG_MULTIPLIER, UINT32_MASK

T = TypeVar("T")


def fold_seed(seed: Union[int, str]) -> int:
    """
    Faltet einen Seed auf einen 32-Bit-Startzustand.

    Args:
        seed: Ganzzahl oder String (djb2-Hash)

    Returns:
        Zustand in [1, 2^32 - 1]
    """
    if isinstance(seed, str):
        value = DJB2_SEED
        for char in seed:
            value = (value * 33 + ord(char)) & UINT32_MASK
    else:
        value = int(seed) & UINT32_MASK

    return value if value != 0 else 1


class SeededRNG:
    """
    LCG mit 32-Bit-Zustand.

    state = (state * 1664525 + 1013904223) mod 2^32
    random() = state / 0xFFFFFFFF
    """

    def __init__(self, seed: Union[int, str]):
        self._state = fold_seed(seed)

    def random(self) -> float:
        """Nächster Wert in [0, 1]. 1.0 ist möglich, aber selten."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) & UINT32_MASK
        return self._state / UINT32_MASK

    def next_int(self, max_value: int) -> int:
        """
        Ganzzahl in [0, max_value).

        Verbraucht immer genau einen Zufallswert, auch für max_value <= 0
        (Ergebnis dann 0). Generierte Puzzles hängen von dieser Schrittfolge ab.
        """
        value = self.random()
        if max_value <= 0:
            return 0
        return min(int(value * max_value), max_value - 1)

    def next_int_range(self, low: int, high: int) -> int:
        """
        Ganzzahl in [low, high] (inklusive).

        Keine Vertauschung bei high < low: der Bereich ist dann leer und das
        Ergebnis ist low (der Zustand rückt trotzdem weiter).
        """
        return low + self.next_int(high - low + 1)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("choice() aus leerer Sequenz")
        return items[self.next_int(len(items))]

    def get_seed(self) -> int:
        """Aktueller interner Zustand."""
        return self._state

    def set_seed(self, seed: Union[int, str]) -> None:
        self._state = fold_seed(seed)
