"""Write SVG markup from element dicts."""

from __future__ import annotations

from html import escape
from typing import Any

_RESERVED = ("tag", "children", "text")


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 24.0,
    canvas_h: float = 24.0,
    title: str = "",
    description: str = "",
    styles: dict[str, str] | None = None,
) -> str:
    """Generate SVG markup from (possibly nested) element definitions."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {canvas_w} {canvas_h}" width="{canvas_w}" height="{canvas_h}"'
        ' xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")

    if styles:
        lines.append("  <style>")
        for selector, props in styles.items():
            lines.append(f"    {selector} {{ {props} }}")
        lines.append("  </style>")

    for elem in elements:
        _write(elem, lines, depth=1)

    lines.append("</svg>")
    return "\n".join(lines)


def serialize_element(elem: dict[str, Any]) -> str:
    lines: list[str] = []
    _write(elem, lines, depth=0)
    return "\n".join(lines)


def _write(elem: dict[str, Any], lines: list[str], depth: int) -> None:
    pad = "  " * depth
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in _RESERVED}
    attr_str = "".join(f' {k}="{escape(str(v))}"' for k, v in attrs.items())
    text = elem.get("text")
    children = elem.get("children") or []

    if not children and text is None:
        lines.append(f"{pad}<{tag}{attr_str} />")
    elif not children:
        lines.append(f"{pad}<{tag}{attr_str}>{escape(str(text))}</{tag}>")
    elif tag in ("text", "tspan"):
        # Inline so whitespace does not leak into rendered text
        inner = escape(str(text)) if text is not None else ""
        inner += "".join(serialize_element(c) for c in children)
        lines.append(f"{pad}<{tag}{attr_str}>{inner}</{tag}>")
    else:
        lines.append(f"{pad}<{tag}{attr_str}>")
        if text is not None:
            lines.append(f"{pad}  {escape(str(text))}")
        for child in children:
            _write(child, lines, depth + 1)
        lines.append(f"{pad}</{tag}>")
