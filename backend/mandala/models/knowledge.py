"""Knowledge payloads consumed by the ring generators.

Content (names, keynotes, planets) is authored elsewhere; this module only
defines its shape and reads it once per run.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mandala.core.gates import CHANNEL_PAIRS, check_gate

logger = logging.getLogger(__name__)


class GateKnowledge(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None
    iching_name: str | None = None
    keynote: str | None = None


class LineKnowledge(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    keynote: str = ""
    exaltation: list[str] = Field(default_factory=list)
    detriment: list[str] = Field(default_factory=list)


class ChannelKnowledge(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    gates: tuple[int, int]
    name: str
    circuit: str | None = None

    @field_validator("gates")
    @classmethod
    def _known_pair(cls, v: tuple[int, int]) -> tuple[int, int]:
        a, b = sorted(check_gate(g) for g in v)
        if (a, b) not in CHANNEL_PAIRS:
            raise ValueError(f"{a}-{b} is not a channel")
        return (a, b)


class KnowledgePayload(BaseModel):
    """Keyed knowledge: gates by number, lines by 'gate.line', channels by pair."""

    model_config = ConfigDict(frozen=True)

    gates: dict[int, GateKnowledge] = Field(default_factory=dict)
    lines: dict[str, LineKnowledge] = Field(default_factory=dict)
    channels: list[ChannelKnowledge] = Field(default_factory=list)

    @field_validator("gates")
    @classmethod
    def _known_gates(cls, v: dict[int, GateKnowledge]) -> dict[int, GateKnowledge]:
        for gate in v:
            check_gate(gate)
        return v

    @field_validator("channels")
    @classmethod
    def _unique_channels(cls, v: list[ChannelKnowledge]) -> list[ChannelKnowledge]:
        seen: set[tuple[int, int]] = set()
        for ch in v:
            if ch.gates in seen:
                raise ValueError(f"channel {ch.gates[0]}-{ch.gates[1]} listed twice")
            seen.add(ch.gates)
        return v

    def gate(self, gate: int) -> GateKnowledge | None:
        return self.gates.get(gate)

    def line(self, gate: int, line: int) -> LineKnowledge | None:
        return self.lines.get(f"{gate}.{line}")

    def channel(self, pair: tuple[int, int]) -> ChannelKnowledge | None:
        key = tuple(sorted(pair))
        for ch in self.channels:
            if ch.gates == key:
                return ch
        return None


def load_payload(path: str | Path) -> KnowledgePayload:
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    payload = KnowledgePayload.model_validate(data)
    logger.info(
        "Loaded knowledge from %s: %d gates, %d lines, %d channels",
        path,
        len(payload.gates),
        len(payload.lines),
        len(payload.channels),
    )
    return payload
