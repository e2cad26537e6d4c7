"""Positioning algorithm — gate -> wheel angle + classification bundle.

Pure functions of (gate, SequenceConfiguration). The ordering decides only the
sequence index; the rotation offset is only ever added at the end, so changing
one never changes what the other means.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from mandala.core.binary import (
    Bigram,
    Face,
    LinePattern,
    Quarter,
    TrigramPair,
    classify_face,
    classify_quarter,
    codon,
    decompose_bigrams,
    decompose_trigrams,
    pattern_to_string,
)
from mandala.core.gates import ALL_GATES, LINES_PER_GATE, TOTAL_GATES, TOTAL_LINES, gate_pattern, opposite_gate
from mandala.core.sequence import SequenceConfiguration, index_of, validate

DEGREES_PER_GATE = 360.0 / TOTAL_GATES  # 5.625
DEGREES_PER_LINE = 360.0 / TOTAL_LINES  # 0.9375


def normalize_angle(degrees: float) -> float:
    """Fold into [0, 360). Values within 1e-9 of 360 fold to 0."""
    a = float(degrees) % 360.0
    if a >= 360.0 - 1e-9:
        return 0.0
    return a


@dataclass(frozen=True)
class WheelPosition:
    gate: int
    sequence_index: int
    angle_degrees: float


@dataclass(frozen=True)
class GateDocking:
    """Everything a ring needs to know about one gate under one configuration."""

    gate: int
    pattern: LinePattern
    binary: str
    codon: str
    bigrams: tuple[Bigram, Bigram, Bigram]
    trigrams: TrigramPair
    quarter: Quarter
    face: Face
    opposite_gate: int
    position: WheelPosition

    @property
    def angle_degrees(self) -> float:
        return self.position.angle_degrees

    def data_attributes(self) -> dict[str, str]:
        """Queryable data-* attributes shared by every ring's output."""
        return {
            "data-gate": str(self.gate),
            "data-binary": self.binary,
            "data-codon": self.codon,
            "data-quarter": self.quarter.value,
            "data-face": self.face.label,
            "data-trigram-upper": self.trigrams.upper.value,
            "data-trigram-lower": self.trigrams.lower.value,
            "data-wheel-index": str(self.position.sequence_index),
        }


def wheel_position(gate: int, config: SequenceConfiguration) -> WheelPosition:
    idx = index_of(gate, config)
    base = idx * DEGREES_PER_GATE
    signed = base * config.direction.sign
    return WheelPosition(
        gate=gate,
        sequence_index=idx,
        angle_degrees=normalize_angle(signed + config.rotation_offset_degrees),
    )


def dock(gate: int, config: SequenceConfiguration) -> GateDocking:
    pattern = gate_pattern(gate)
    return GateDocking(
        gate=gate,
        pattern=pattern,
        binary=pattern_to_string(pattern),
        codon=codon(pattern),
        bigrams=decompose_bigrams(pattern),
        trigrams=decompose_trigrams(pattern),
        quarter=classify_quarter(pattern),
        face=classify_face(pattern),
        opposite_gate=opposite_gate(gate),
        position=wheel_position(gate, config),
    )


def all_positions(config: SequenceConfiguration) -> list[WheelPosition]:
    """Positions of all 64 gates, ascending by gate identifier."""
    validate(config)
    indices = np.array([index_of(g, config) for g in ALL_GATES], dtype=np.float64)
    angles = np.mod(indices * DEGREES_PER_GATE * config.direction.sign + config.rotation_offset_degrees, 360.0)
    return [
        WheelPosition(gate=g, sequence_index=int(i), angle_degrees=normalize_angle(a))
        for g, i, a in zip(ALL_GATES, indices, angles)
    ]


def line_angle(gate: int, line: int, config: SequenceConfiguration) -> float:
    """Wheel angle of line 1-6 inside its gate's sector.

    Offsets are centred on the gate angle in steps of ``DEGREES_PER_LINE``;
    line 1 leans toward the next gate in the sequence and line 6 toward
    the previous one, so all six stay inside ``sector_bounds``.
    """
    if not 1 <= line <= LINES_PER_GATE:
        raise ValueError(f"Invalid line number: {line} (must be 1-6)")
    pos = wheel_position(gate, config)
    return normalize_angle(pos.angle_degrees + (3.5 - line) * DEGREES_PER_LINE * config.direction.sign)


def sector_bounds(gate: int, config: SequenceConfiguration) -> tuple[float, float]:
    """(start, end) wheel angles of the arc between the dividers either side of a gate."""
    pos = wheel_position(gate, config)
    half = DEGREES_PER_GATE / 2 * config.direction.sign
    return normalize_angle(pos.angle_degrees - half), normalize_angle(pos.angle_degrees + half)
