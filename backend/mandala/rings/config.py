"""Render configuration: drawing tunables shared by every ring."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RenderConfig:
    """Stroke, colour and numeric formatting for generated SVG."""

    # Dividers stop short of the ring circles by this many units
    divider_inset: float = 2.0

    # Decimal places written for coordinates and angles
    precision: int = 4

    stroke_width: float = 1.0
    stroke_colour: str = "#000000"
    fill_colour: str = "#000000"
    text_colour: str = "#000000"
    font_family: str = "Copperplate, 'Copperplate Gothic Bold', serif"

    # Polarity marker for the lines ring
    yang_marker: str = "▲"
    yin_marker: str = "▼"

    def fmt(self, value: float) -> str:
        """Format a number at the configured precision without trailing zeros."""
        text = f"{value:.{self.precision}f}".rstrip("0").rstrip(".")
        return "0" if text in ("", "-0") else text
