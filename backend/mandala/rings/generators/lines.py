"""Lines ring — 384 units, six per gate.

A gate's sector is cut radially into six line slots, line 6 (volatile) at the
outer boundary and line 1 at the inner. Across each slot, along the arc, sit
the five detail fields: polarity marker, detriment planets, line number,
exaltation planets and keynote.
"""

from __future__ import annotations

import logging

from mandala.core.gates import LINES_PER_GATE
from mandala.core.geometry import arc_length, sub_band_radius, to_outward_rotation
from mandala.core.positioning import DEGREES_PER_GATE, GateDocking, line_angle
from mandala.core.text_fit import fit_text
from mandala.errors import MissingKnowledge, OverflowUnresolved
from mandala.models.knowledge import LineKnowledge
from mandala.rings.context import GeneratedElement, RenderContext, SvgNode
from mandala.rings.registry import Unit, ring
from mandala.rings.text import text_block

logger = logging.getLogger(__name__)

RING_ID = "lines"

# (field, data-source, share of the sector width), in wheel order
FIELDS: tuple[tuple[str, str, float], ...] = (
    ("polarity", "line.polarity", 1.0),
    ("detriment", "line.detriment", 2.0),
    ("number", "line.number", 1.0),
    ("exaltation", "line.exaltation", 2.0),
    ("keynote", "line.keynote", 4.0),
)


def field_offsets() -> list[tuple[float, float]]:
    """(centre offset from the gate angle, width) per field, in wheel degrees."""
    total = sum(share for _, _, share in FIELDS)
    start = -DEGREES_PER_GATE / 2
    spans = []
    for _, _, share in FIELDS:
        width = DEGREES_PER_GATE * share / total
        spans.append((start + width / 2, width))
        start += width
    return spans


def _field_text(ctx: RenderContext, d: GateDocking, line: int, field: str, knowledge: LineKnowledge) -> str:
    if field == "polarity":
        return ctx.config.yang_marker if d.pattern[line - 1] == 1 else ctx.config.yin_marker
    if field == "number":
        return str(line)
    if field == "keynote":
        return knowledge.keynote
    return " ".join(getattr(knowledge, field))


@ring(
    id=RING_ID,
    unit=Unit.GATE_LINE,
    sub_bands=len(FIELDS),
    order=60,
    sources=tuple(source for _, source, _ in FIELDS),
)
def lines_ring(ctx: RenderContext) -> list[GeneratedElement]:
    """Six line units per gate with their detail fields."""
    slot_height = ctx.geometry.band_width / LINES_PER_GATE
    spans = field_offsets()
    sign = ctx.sequence.direction.sign

    elements = []
    for d in ctx.dockings():
        for line in range(1, LINES_PER_GATE + 1):
            knowledge = ctx.payload.line(d.gate, line)
            if knowledge is None or not knowledge.keynote:
                raise MissingKnowledge(RING_ID, f"line {d.gate}.{line}", "keynote")

            radius = sub_band_radius(ctx.geometry, LINES_PER_GATE - line, LINES_PER_GATE)
            children: list[SvgNode] = []
            for index, ((field, source, _), (offset, width)) in enumerate(zip(FIELDS, spans)):
                content = _field_text(ctx, d, line, field, knowledge)
                try:
                    fit = fit_text(content, slot_height, ctx.ratios, available_width=arc_length(radius, width))
                except OverflowUnresolved as e:
                    raise e.for_gate(d.gate) from None
                canvas = ctx.canvas_angle(d.angle_degrees + offset * sign)
                children.append(
                    text_block(
                        ctx,
                        fit,
                        source,
                        ctx.transform(ctx.point(canvas, radius), to_outward_rotation(canvas)),
                        **{"data-sub-index": str(index)},
                    )
                )

            attrs = d.data_attributes()
            attrs.update(
                {
                    "id": f"line-{d.gate}-{line}",
                    "data-line": str(line),
                    "data-polarity": "yang" if d.pattern[line - 1] == 1 else "yin",
                    "data-radius": ctx.fmt(radius),
                    "data-line-angle": ctx.fmt(line_angle(d.gate, line, ctx.sequence)),
                }
            )
            elements.append(
                GeneratedElement(
                    ring=RING_ID,
                    gate=d.gate,
                    sub_index=line,
                    source_field="line",
                    tag="g",
                    attributes=attrs,
                    children=tuple(children),
                )
            )

    logger.info("Lines ring: %d line units", len(elements))
    return elements
