"""Proportional text fitting.

Font size and line height are fixed ratios of the band width, measured from the
master diagram (19px font and 15.62px leading in a 75.66px band). Long words get
a compressive multiplier by character count. If the content still does not fit,
the whole block is retried at the next compression step; past the last step the
caller gets OverflowUnresolved, never clipped text.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from mandala.errors import OverflowUnresolved

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRatios:
    font_size_to_band_width: float = 0.2511
    line_height_to_band_width: float = 0.2064
    vertical_scale: float = 1.2
    # Copperplate Bold average advance
    char_width_to_font_size: float = 0.7
    # (min chars, multiplier), checked longest first
    long_word_multipliers: tuple[tuple[int, float], ...] = ((13, 0.792), (12, 0.875), (11, 0.916))
    compression_steps: tuple[float, ...] = (1.0, 0.9, 0.8, 0.7)

    def word_multiplier(self, word: str) -> float:
        for threshold, mult in self.long_word_multipliers:
            if len(word) >= threshold:
                return mult
        return 1.0


TEXT_RATIOS = TextRatios()


@dataclass(frozen=True)
class TextLine:
    text: str
    font_size: float


@dataclass(frozen=True)
class TextFit:
    font_size: float
    line_height: float
    lines: list[TextLine] = field(default_factory=list)
    compression: float = 1.0

    @property
    def line_breaks(self) -> list[str]:
        return [ln.text for ln in self.lines]

    @property
    def block_height(self) -> float:
        return self.line_height * max(len(self.lines) - 1, 0)


def fit_text(
    content: str,
    band_width: float,
    ratios: TextRatios = TEXT_RATIOS,
    available_width: float | None = None,
    max_lines: int | None = None,
) -> TextFit:
    """Size and break `content` for a band.

    `available_width` is the run length of one line (arc length for tangential
    text, band width for radial text, the default). `max_lines` defaults to as
    many lines as the standard leading allows inside the band.
    """
    words = content.split()
    if band_width <= 0:
        raise OverflowUnresolved(content, band_width, "band width must be positive")
    if not words:
        return TextFit(
            font_size=band_width * ratios.font_size_to_band_width,
            line_height=band_width * ratios.line_height_to_band_width,
        )

    width = band_width if available_width is None else available_width
    line_limit = max_lines if max_lines is not None else max(
        1, math.floor(1.0 / ratios.line_height_to_band_width)
    )

    reason = ""
    for step in ratios.compression_steps:
        font = band_width * ratios.font_size_to_band_width * step
        lines, reason = _pack(words, font, width, ratios)
        if lines is None:
            continue
        if len(lines) > line_limit:
            reason = f"needs {len(lines)} lines, band holds {line_limit}"
            continue
        if step < 1.0:
            logger.debug("Compressed %r to %.0f%% to fit band %.2f", content, step * 100, band_width)
        return TextFit(
            font_size=font,
            line_height=band_width * ratios.line_height_to_band_width * step,
            lines=lines,
            compression=step,
        )

    raise OverflowUnresolved(content, band_width, reason)


def _pack(
    words: list[str], font: float, width: float, ratios: TextRatios
) -> tuple[list[TextLine] | None, str]:
    """Greedy line packing; each line takes the smallest size of the words on it."""
    char_w = font * ratios.char_width_to_font_size
    lines: list[TextLine] = []
    current: list[str] = []
    current_w = 0.0

    for word in words:
        word_font = font * ratios.word_multiplier(word)
        word_w = len(word) * word_font * ratios.char_width_to_font_size
        if word_w > width:
            return None, f"word {word!r} is {word_w:.2f} wide, line holds {width:.2f}"
        extra = word_w + (char_w if current else 0.0)
        if current and current_w + extra > width:
            lines.append(_line(current, font, ratios))
            current, current_w = [word], word_w
        else:
            current.append(word)
            current_w += extra

    if current:
        lines.append(_line(current, font, ratios))
    return lines, ""


def _line(words: list[str], font: float, ratios: TextRatios) -> TextLine:
    size = min(font * ratios.word_multiplier(w) for w in words)
    return TextLine(text=" ".join(words), font_size=size)
