"""Gate sequence registry — orderings of the 64 gates plus direction and rotation.

A sequence is only meaningful with an explicit direction and rotation offset;
neither is ever defaulted. Presets supply the ordering and nothing else.
"""

from __future__ import annotations

import enum
import json
import logging
import math
from collections import Counter
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from mandala.core.gates import ALL_GATES, TOTAL_GATES, check_gate
from mandala.errors import IncompleteSequence, InvalidGate, MissingMandatoryField

logger = logging.getLogger(__name__)


class Direction(str, enum.Enum):
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter-clockwise"

    @property
    def sign(self) -> int:
        return 1 if self is Direction.CLOCKWISE else -1


class SequenceConfiguration(BaseModel):
    """Ordering + direction + rotation offset. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    name: str = "custom"
    ordering: tuple[int, ...]
    # None is rejected by validate() with MissingMandatoryField.
    direction: Direction | None = None
    rotation_offset_degrees: float | None = None

    @field_validator("rotation_offset_degrees")
    @classmethod
    def _normalize_offset(cls, v: float | None) -> float | None:
        if v is None:
            return None
        if not math.isfinite(v):
            raise ValueError("rotation_offset_degrees must be finite")
        a = float(v) % 360.0
        # tiny negatives wrap to 360.0 under float modulo
        return 0.0 if a >= 360.0 - 1e-9 else a

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], name: str | None = None) -> SequenceConfiguration:
        """Build and validate a configuration from a JSON-style mapping."""
        cfg_name = name or str(data.get("name", "custom"))
        for key in ("direction", "rotation_offset_degrees"):
            if data.get(key) is None:
                raise MissingMandatoryField(cfg_name, key)
        config = cls(
            name=cfg_name,
            ordering=tuple(data.get("ordering") or data.get("sequence") or ()),
            direction=Direction(data["direction"]),
            rotation_offset_degrees=float(data["rotation_offset_degrees"]),
        )
        return validate(config)


def validate(config: SequenceConfiguration) -> SequenceConfiguration:
    """Check the ordering is a bijection onto gates 1-64 and mandatory fields are set."""
    _check_ordering(config.name, config.ordering)
    if config.direction is None:
        raise MissingMandatoryField(config.name, "direction")
    if config.rotation_offset_degrees is None:
        raise MissingMandatoryField(config.name, "rotation_offset_degrees")
    return config


@lru_cache(maxsize=32)
def _check_ordering(name: str, ordering: tuple[int, ...]) -> None:
    unknown: list[object] = []
    for gate in ordering:
        try:
            check_gate(gate)
        except InvalidGate:
            unknown.append(gate)
    counts = Counter(ordering)
    duplicates = sorted(g for g, n in counts.items() if n > 1)
    missing = [g for g in ALL_GATES if g not in counts]
    if unknown or duplicates or missing or len(ordering) != TOTAL_GATES:
        raise IncompleteSequence(name, missing=missing, duplicates=duplicates, unknown=unknown)


@lru_cache(maxsize=32)
def _index_map(ordering: tuple[int, ...]) -> dict[int, int]:
    return {gate: i for i, gate in enumerate(ordering)}


def index_of(gate: int, config: SequenceConfiguration) -> int:
    """Position of a gate within the configuration's ordering (0-63)."""
    check_gate(gate)
    validate(config)
    return _index_map(config.ordering)[gate]


def gate_at(index: int, config: SequenceConfiguration) -> int:
    validate(config)
    return config.ordering[index % TOTAL_GATES]


# ── Presets ────────────────────────────────────────────────────────────────

RAVE_WHEEL_ORDERING: tuple[int, ...] = (
    41, 19, 13, 49, 30, 55, 37, 63, 22, 36, 25, 17, 21, 51, 42, 3,
    27, 24, 2, 23, 8, 20, 16, 35, 45, 12, 15, 52, 39, 53, 62, 56,
    31, 33, 7, 4, 29, 59, 40, 64, 47, 6, 46, 18, 48, 57, 32, 50,
    28, 44, 1, 43, 14, 34, 9, 5, 26, 11, 10, 58, 38, 54, 61, 60,
)

KING_WEN_ORDERING: tuple[int, ...] = ALL_GATES

PRESETS: dict[str, tuple[int, ...]] = {
    "rave-wheel": RAVE_WHEEL_ORDERING,
    "king-wen": KING_WEN_ORDERING,
}


def get_preset(
    name: str,
    *,
    direction: Direction | str,
    rotation_offset_degrees: float,
) -> SequenceConfiguration:
    """Build a validated configuration from a named ordering preset."""
    try:
        ordering = PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown sequence preset: {name}") from None
    return SequenceConfiguration.from_mapping(
        {
            "ordering": ordering,
            "direction": Direction(direction),
            "rotation_offset_degrees": rotation_offset_degrees,
        },
        name=name,
    )


def load_preset(path: str | Path) -> SequenceConfiguration:
    """Read a JSON preset ({"name", "ordering", "direction", "rotation_offset_degrees"})."""
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    config = SequenceConfiguration.from_mapping(data, name=data.get("name", path.stem))
    logger.info(
        "Loaded sequence '%s' (%s, offset %.4f°) from %s",
        config.name,
        config.direction.value if config.direction else "?",
        config.rotation_offset_degrees,
        path,
    )
    return config
