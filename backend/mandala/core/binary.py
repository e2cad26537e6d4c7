"""Binary model: bigrams, trigrams, quarters and faces of a line pattern.

Patterns are read BOTTOM to TOP: index 0 is the foundational (innermost) line,
index 5 the most volatile (outermost). Every classification is a table lookup
on bit tuples, never a bit count. Thunder (charge at index 0) and Mountain
(charge at index 2) differ only by position.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import NamedTuple

from mandala.errors import InvalidLinePattern

LinePattern = tuple[int, int, int, int, int, int]

PATTERN_LENGTH = 6


def line_pattern(values: Sequence[int] | str) -> LinePattern:
    """Validate and freeze a pattern given as a bit sequence or a '101111' string."""
    if isinstance(values, str):
        if any(ch not in "01" for ch in values):
            raise InvalidLinePattern(values, "values must be 0 or 1")
        values = [int(ch) for ch in values]
    if len(values) != PATTERN_LENGTH:
        raise InvalidLinePattern(values, f"expected {PATTERN_LENGTH} values, got {len(values)}")
    for v in values:
        if isinstance(v, bool) or v not in (0, 1):
            raise InvalidLinePattern(values, "values must be 0 or 1")
    return tuple(int(v) for v in values)  # type: ignore[return-value]


def pattern_to_string(pattern: Sequence[int]) -> str:
    return "".join(str(v) for v in line_pattern(pattern))


def invert(pattern: Sequence[int]) -> LinePattern:
    """Full inversion: every charge becomes void and vice versa."""
    return tuple(1 - v for v in line_pattern(pattern))  # type: ignore[return-value]


class Bigram(enum.Enum):
    VOID_VOID = (0, 0)
    CHARGE_CHARGE = (1, 1)
    CHARGE_VOID = (1, 0)
    VOID_CHARGE = (0, 1)

    @property
    def letter(self) -> str:
        return _CODON_LETTERS[self]

    @property
    def opposite(self) -> Bigram:
        return Bigram((1 - self.value[0], 1 - self.value[1]))


_CODON_LETTERS = {
    Bigram.CHARGE_CHARGE: "A",
    Bigram.VOID_VOID: "U",
    Bigram.CHARGE_VOID: "C",
    Bigram.VOID_CHARGE: "G",
}


class Trigram(enum.Enum):
    HEAVEN = "Heaven"
    EARTH = "Earth"
    THUNDER = "Thunder"
    WATER = "Water"
    MOUNTAIN = "Mountain"
    WIND = "Wind"
    FIRE = "Fire"
    LAKE = "Lake"

    @property
    def bits(self) -> tuple[int, int, int]:
        return _BITS_BY_TRIGRAM[self]

    @property
    def opposite(self) -> Trigram:
        return TRIGRAM_BY_BITS[tuple(1 - b for b in self.bits)]


# Bottom-to-top bit tuple -> trigram. (1, 0, 0) has its charge at the BOTTOM.
TRIGRAM_BY_BITS: dict[tuple[int, ...], Trigram] = {
    (1, 1, 1): Trigram.HEAVEN,
    (0, 0, 0): Trigram.EARTH,
    (1, 0, 0): Trigram.THUNDER,
    (0, 1, 0): Trigram.WATER,
    (0, 0, 1): Trigram.MOUNTAIN,
    (0, 1, 1): Trigram.WIND,
    (1, 0, 1): Trigram.FIRE,
    (1, 1, 0): Trigram.LAKE,
}

_BITS_BY_TRIGRAM = {t: bits for bits, t in TRIGRAM_BY_BITS.items()}


class TrigramPair(NamedTuple):
    lower: Trigram
    upper: Trigram


class Quarter(enum.Enum):
    CIVILISATION = "Civilisation"
    MUTATION = "Mutation"
    INITIATION = "Initiation"
    DUALITY = "Duality"

    @property
    def opposite(self) -> Quarter:
        return QUARTER_BY_BIGRAM[_BIGRAM_BY_QUARTER[self].opposite]


QUARTER_BY_BIGRAM: dict[Bigram, Quarter] = {
    Bigram.VOID_VOID: Quarter.CIVILISATION,
    Bigram.CHARGE_CHARGE: Quarter.MUTATION,
    Bigram.CHARGE_VOID: Quarter.INITIATION,
    Bigram.VOID_CHARGE: Quarter.DUALITY,
}

_BIGRAM_BY_QUARTER = {q: b for b, q in QUARTER_BY_BIGRAM.items()}


class Face(enum.Enum):
    HADES = "AA"
    PROMETHEUS = "AC"
    VISHNU = "AG"
    KEEPERS_OF_THE_WHEEL = "AU"
    KALI = "CA"
    MITRA = "CC"
    MICHAEL = "CG"
    JANUS = "CU"
    MINERVA = "GA"
    CHRIST = "GC"
    HARMONIA = "GG"
    THOTH = "GU"
    MAAT = "UA"
    PARVATI = "UC"
    LAKSHMI = "UG"
    MAIA = "UU"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title().replace(" Of The ", " of the ")

    @property
    def codons(self) -> str:
        return self.value

    @property
    def opposite(self) -> Face:
        return Face("".join(_INVERTED_LETTER[ch] for ch in self.value))


_INVERTED_LETTER = {"A": "U", "U": "A", "C": "G", "G": "C"}


def decompose_bigrams(pattern: Sequence[int]) -> tuple[Bigram, Bigram, Bigram]:
    """Return (bottom, middle, top) bigrams from positions 0-1, 2-3, 4-5."""
    p = line_pattern(pattern)
    return (Bigram(p[0:2]), Bigram(p[2:4]), Bigram(p[4:6]))


def decompose_trigrams(pattern: Sequence[int]) -> TrigramPair:
    p = line_pattern(pattern)
    return TrigramPair(lower=TRIGRAM_BY_BITS[p[0:3]], upper=TRIGRAM_BY_BITS[p[3:6]])


def classify_quarter(pattern: Sequence[int]) -> Quarter:
    bottom, _, _ = decompose_bigrams(pattern)
    return QUARTER_BY_BIGRAM[bottom]


def classify_face(pattern: Sequence[int]) -> Face:
    bottom, middle, _ = decompose_bigrams(pattern)
    return Face(bottom.letter + middle.letter)


def codon(pattern: Sequence[int]) -> str:
    """Three codon letters, bottom bigram first."""
    return "".join(b.letter for b in decompose_bigrams(pattern))
