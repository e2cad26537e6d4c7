"""Mandala wheel geometry core: binary model, sequences, positioning, formulas."""

from mandala.core.binary import Face, Quarter, Trigram, classify_face, classify_quarter, decompose_bigrams, decompose_trigrams
from mandala.core.positioning import GateDocking, WheelPosition, dock, wheel_position
from mandala.core.sequence import Direction, SequenceConfiguration, get_preset, index_of, validate

__all__ = [
    "Face",
    "Quarter",
    "Trigram",
    "classify_face",
    "classify_quarter",
    "decompose_bigrams",
    "decompose_trigrams",
    "GateDocking",
    "WheelPosition",
    "dock",
    "wheel_position",
    "Direction",
    "SequenceConfiguration",
    "get_preset",
    "index_of",
    "validate",
]
