"""Fitted multi-line text blocks shared by the text-bearing rings."""

from __future__ import annotations

from mandala.core.text_fit import TextFit
from mandala.rings.context import RenderContext, SvgNode


def tspans(ctx: RenderContext, fit: TextFit) -> list[SvgNode]:
    """One tspan per fitted line, the block vertically centred on the anchor."""
    nodes: list[SvgNode] = []
    start = -fit.block_height / 2
    for i, line in enumerate(fit.lines):
        node: SvgNode = {
            "tag": "tspan",
            "x": "0",
            "dy": ctx.fmt(start if i == 0 else fit.line_height),
            "text": line.text,
        }
        if abs(line.font_size - fit.font_size) > 1e-9:
            node["font-size"] = ctx.fmt(line.font_size)
        nodes.append(node)
    return nodes


def text_block(
    ctx: RenderContext,
    fit: TextFit,
    source: str,
    transform: str,
    **attrs: str,
) -> SvgNode:
    """A <text> node holding a fitted block, stretched by the vertical scale."""
    node = ctx.text_node("", fit.font_size, source, **attrs)
    del node["text"]
    node["transform"] = f"{transform} scale(1 {ctx.fmt(ctx.ratios.vertical_scale)})"
    node["stroke"] = "none"
    node["children"] = tspans(ctx, fit)
    return node
