"""Channels ring — one entry per channel member, 72 in all.

Every channel is drawn twice, once at each of its gates' own angles. A gate in
several channels splits its sector into equal slots, ordered by partner gate.
Sub-band 0 (outer) carries the partner gate number, sub-band 1 the channel name.
"""

from __future__ import annotations

import logging

from mandala.core.gates import channels_of
from mandala.core.geometry import arc_length, ratio_radius, sub_band_radius, to_outward_rotation, to_radial_rotation
from mandala.core.positioning import DEGREES_PER_GATE
from mandala.core.text_fit import fit_text
from mandala.errors import MissingKnowledge, OverflowUnresolved
from mandala.rings.context import GeneratedElement, RenderContext, SvgNode
from mandala.rings.registry import Unit, ring
from mandala.rings.text import text_block

logger = logging.getLogger(__name__)

RING_ID = "channels"
SUB_BANDS = 2

# Connector tick at the inner edge, as a share of the band width
CONNECTOR_RATIO = 0.05


def slot_offset(index: int, count: int) -> float:
    """Angular offset of slot `index` of `count` from the gate angle, centred on it."""
    width = DEGREES_PER_GATE / count
    return ((count - 1) / 2 - index) * width


def _connector(ctx: RenderContext, canvas: float) -> SvgNode:
    inner = ctx.geometry.inner_radius + ctx.config.divider_inset
    outer = ratio_radius(ctx.geometry, CONNECTOR_RATIO)
    p1 = ctx.point(canvas, inner)
    p2 = ctx.point(canvas, outer)
    return {
        "tag": "line",
        "x1": ctx.fmt(p1.x),
        "y1": ctx.fmt(p1.y),
        "x2": ctx.fmt(p2.x),
        "y2": ctx.fmt(p2.y),
        "stroke": ctx.config.stroke_colour,
        "stroke-width": ctx.fmt(ctx.config.stroke_width),
        "data-source": "channel",
    }


@ring(id=RING_ID, unit=Unit.PAIR, sub_bands=SUB_BANDS, order=10, sources=("channel.partner", "channel.name"))
def channels_ring(ctx: RenderContext) -> list[GeneratedElement]:
    """Channel entries at both member gates."""
    height = ctx.geometry.band_width / SUB_BANDS
    outer_r = sub_band_radius(ctx.geometry, 0, SUB_BANDS)
    inner_r = sub_band_radius(ctx.geometry, 1, SUB_BANDS)
    sign = ctx.sequence.direction.sign

    elements = []
    for d in ctx.dockings():
        pairs = channels_of(d.gate)
        for index, pair in enumerate(pairs):
            knowledge = ctx.payload.channel(pair)
            key = f"channel {pair[0]}-{pair[1]}"
            if knowledge is None or not knowledge.name:
                raise MissingKnowledge(RING_ID, key, "name")
            partner = pair[1] if pair[0] == d.gate else pair[0]

            offset = slot_offset(index, len(pairs))
            canvas = ctx.canvas_angle(d.angle_degrees + offset * sign)
            slot = DEGREES_PER_GATE / len(pairs)
            try:
                number_fit = fit_text(str(partner), arc_length(outer_r, slot), ctx.ratios)
                name_fit = fit_text(knowledge.name, arc_length(inner_r, slot), ctx.ratios, available_width=height)
            except OverflowUnresolved as e:
                raise e.for_gate(d.gate) from None

            children = (
                _connector(ctx, canvas),
                text_block(
                    ctx,
                    number_fit,
                    "channel.partner",
                    ctx.transform(ctx.point(canvas, outer_r), to_outward_rotation(canvas)),
                    **{"data-sub-index": "0"},
                ),
                text_block(
                    ctx,
                    name_fit,
                    "channel.name",
                    ctx.transform(ctx.point(canvas, inner_r), to_radial_rotation(canvas)),
                    **{"data-sub-index": "1"},
                ),
            )

            attrs = d.data_attributes()
            attrs.update(
                {
                    "id": f"channel-{pair[0]}-{pair[1]}-at-{d.gate}",
                    "data-channel": f"{pair[0]}-{pair[1]}",
                    "data-partner-gate": str(partner),
                    "data-channel-name": knowledge.name,
                }
            )
            if knowledge.circuit:
                attrs["data-circuit"] = knowledge.circuit
            elements.append(
                GeneratedElement(
                    ring=RING_ID,
                    gate=d.gate,
                    sub_index=index,
                    source_field="channel",
                    tag="g",
                    attributes=attrs,
                    children=children,
                )
            )

    logger.info("Channels ring: %d entries", len(elements))
    return elements
