"""Static gate table: gate identifier -> bottom-to-top line pattern."""

from __future__ import annotations

from functools import lru_cache

from mandala.core.binary import LinePattern, Face, classify_face, invert, line_pattern
from mandala.errors import InvalidGate

TOTAL_GATES = 64
LINES_PER_GATE = 6
TOTAL_LINES = TOTAL_GATES * LINES_PER_GATE

# Index 0 of each string is line 1 (bottom).
GATE_PATTERNS: dict[int, str] = {
    1: "111111", 2: "000000", 3: "100010", 4: "010001",
    5: "111010", 6: "010111", 7: "010000", 8: "000010",
    9: "111011", 10: "110111", 11: "111000", 12: "000111",
    13: "101111", 14: "111101", 15: "001000", 16: "000100",
    17: "100110", 18: "011001", 19: "110000", 20: "000011",
    21: "100101", 22: "101001", 23: "000001", 24: "100000",
    25: "100111", 26: "111001", 27: "100001", 28: "011110",
    29: "010010", 30: "101101", 31: "001110", 32: "011100",
    33: "001111", 34: "111100", 35: "000101", 36: "101000",
    37: "101011", 38: "110101", 39: "001010", 40: "010100",
    41: "110001", 42: "100011", 43: "111110", 44: "011111",
    45: "000110", 46: "011000", 47: "010110", 48: "011010",
    49: "101110", 50: "011101", 51: "100100", 52: "001001",
    53: "001011", 54: "110100", 55: "101100", 56: "001101",
    57: "011011", 58: "110110", 59: "010011", 60: "110010",
    61: "110011", 62: "001100", 63: "101010", 64: "010101",
}

ALL_GATES: tuple[int, ...] = tuple(range(1, TOTAL_GATES + 1))


def check_gate(gate: object) -> int:
    if isinstance(gate, bool) or not isinstance(gate, int) or gate not in GATE_PATTERNS:
        raise InvalidGate(gate)
    return gate


def gate_pattern(gate: int) -> LinePattern:
    return _patterns()[check_gate(gate)]


def gate_for_pattern(pattern: LinePattern) -> int:
    return _gates_by_pattern()[line_pattern(pattern)]


def opposite_gate(gate: int) -> int:
    """Gate whose pattern is the full inversion of this gate's pattern."""
    return gate_for_pattern(invert(gate_pattern(gate)))


def gates_in_face(face: Face) -> list[int]:
    return [g for g in ALL_GATES if classify_face(gate_pattern(g)) is face]


@lru_cache(maxsize=1)
def _patterns() -> dict[int, LinePattern]:
    return {gate: line_pattern(bits) for gate, bits in GATE_PATTERNS.items()}


@lru_cache(maxsize=1)
def _gates_by_pattern() -> dict[LinePattern, int]:
    return {pattern: gate for gate, pattern in _patterns().items()}


# The 36 channels: each joins two gates; gates 10, 20, 34 and 57 sit in three.
CHANNEL_PAIRS: tuple[tuple[int, int], ...] = (
    (1, 8), (2, 14), (3, 60), (4, 63), (5, 15), (6, 59), (7, 31), (9, 52),
    (10, 20), (10, 34), (10, 57), (11, 56), (12, 22), (13, 33), (16, 48), (17, 62),
    (18, 58), (19, 49), (20, 34), (20, 57), (21, 45), (23, 43), (24, 61), (25, 51),
    (26, 44), (27, 50), (28, 38), (29, 46), (30, 41), (32, 54), (34, 57), (35, 36),
    (37, 40), (39, 55), (42, 53), (47, 64),
)


def channels_of(gate: int) -> list[tuple[int, int]]:
    """Channels touching a gate, ordered by partner gate."""
    check_gate(gate)
    found = [pair for pair in CHANNEL_PAIRS if gate in pair]
    return sorted(found, key=lambda pair: pair[1] if pair[0] == gate else pair[0])
