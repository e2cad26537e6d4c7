"""RenderContext and GeneratedElement — what a ring generator receives and returns.

Nodes are plain dicts in the serializer's shape: ``tag``, optional ``text`` and
``children``, every other key an SVG attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mandala.core.geometry import POSITION_OFFSET, Point, to_canvas_angle, to_cartesian
from mandala.core.positioning import GateDocking, dock
from mandala.core.gates import ALL_GATES
from mandala.core.sequence import SequenceConfiguration, validate
from mandala.core.text_fit import TEXT_RATIOS, TextRatios
from mandala.models.knowledge import KnowledgePayload
from mandala.models.ring import RingGeometry
from mandala.rings.config import RenderConfig

SvgNode = dict[str, Any]


@dataclass(frozen=True)
class GeneratedElement:
    """One positioned primitive (or group) attributed to a gate."""

    ring: str
    gate: int
    source_field: str
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    sub_index: int | None = None
    text: str | None = None
    children: tuple[SvgNode, ...] = ()
    # Tie-break between elements sharing (gate, sub_index)
    order: int = 0

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.gate, self.sub_index or 0, self.order)

    def to_node(self) -> SvgNode:
        node: SvgNode = {"tag": self.tag}
        node.update(self.attributes)
        node["data-ring"] = self.ring
        node["data-gate"] = str(self.gate)
        node["data-source"] = self.source_field
        if self.sub_index is not None:
            node["data-sub-index"] = str(self.sub_index)
        if self.text is not None:
            node["text"] = self.text
        if self.children:
            node["children"] = list(self.children)
        return node


@dataclass(frozen=True)
class RenderContext:
    """Inputs to one ring generator. Nothing here is mutated during a run."""

    ring_id: str
    sequence: SequenceConfiguration
    geometry: RingGeometry
    payload: KnowledgePayload = field(default_factory=KnowledgePayload)
    position_offset: float = POSITION_OFFSET
    config: RenderConfig = field(default_factory=RenderConfig)
    ratios: TextRatios = TEXT_RATIOS

    def __post_init__(self) -> None:
        validate(self.sequence)

    def dockings(self) -> list[GateDocking]:
        """Every gate's docking under this context's sequence, ascending by gate."""
        return [dock(gate, self.sequence) for gate in ALL_GATES]

    def canvas_angle(self, wheel_angle: float) -> float:
        return to_canvas_angle(wheel_angle, self.position_offset)

    def point(self, canvas_angle: float, radius: float) -> Point:
        return to_cartesian(canvas_angle, radius, self.geometry.center)

    def fmt(self, value: float) -> str:
        return self.config.fmt(value)

    def transform(self, point: Point, rotation: float) -> str:
        """translate(...) rotate(...) placing a locally-authored node at `point`."""
        return f"translate({self.fmt(point.x)}, {self.fmt(point.y)}) rotate({self.fmt(rotation)})"

    def text_node(
        self,
        text: str,
        font_size: float,
        source: str,
        **attrs: str,
    ) -> SvgNode:
        """Centred text node at the local origin."""
        node: SvgNode = {
            "tag": "text",
            "x": "0",
            "y": "0",
            "font-family": self.config.font_family,
            "font-size": self.fmt(font_size),
            "fill": self.config.text_colour,
            "text-anchor": "middle",
            "dominant-baseline": "central",
            "data-source": source,
            "text": text,
        }
        node.update(attrs)
        return node
