"""Shared geometry formulas. Every ring positions and orients through these.

Leaf module: no generator imports. A visual correction for any part of the
wheel goes here, as a formula over angles, never as a case on a gate.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from mandala.models.ring import RingGeometry

# Aligns wheel angles with the master diagram: the 10|11 divider sits at the
# top of the canvas (-90°). Measured by the calibration extractor.
POSITION_OFFSET = 323.4375


class Point(NamedTuple):
    x: float
    y: float


def to_canvas_angle(wheel_angle: float, position_offset: float = POSITION_OFFSET) -> float:
    """Wheel angle (0° = top, clockwise) -> canvas angle (0° = 3 o'clock, y down, mirrored)."""
    return -wheel_angle - 90.0 + position_offset


def to_cartesian(canvas_angle: float, radius: float, center: tuple[float, float]) -> Point:
    rad = np.radians(canvas_angle)
    return Point(
        float(center[0] + radius * np.cos(rad)),
        float(center[1] + radius * np.sin(rad)),
    )


def to_cartesian_many(
    canvas_angles: NDArray[np.float64], radius: float, center: tuple[float, float]
) -> NDArray[np.float64]:
    """Vectorised to_cartesian: Nx2 array of points."""
    rad = np.radians(np.asarray(canvas_angles, dtype=np.float64))
    return np.column_stack([center[0] + radius * np.cos(rad), center[1] + radius * np.sin(rad)])


def to_outward_rotation(canvas_angle: float) -> float:
    """Rotate a glyph authored with its volatile edge at local 'up' so that edge faces outward."""
    return canvas_angle + 90.0


def fold_angle(degrees: float) -> float:
    """Fold into (-180, 180]."""
    a = (degrees + 180.0) % 360.0 - 180.0
    return 180.0 if a == -180.0 else a


def reads_upside_down(canvas_angle: float) -> bool:
    """True when text rotated to canvas_angle + 180 would read upside down."""
    r = (canvas_angle + 180.0) % 360.0
    return 90.0 < r < 270.0


def to_radial_rotation(canvas_angle: float) -> float:
    """Rotation for text reading along the radius, flipped on the left half to stay upright."""
    rotation = canvas_angle + 180.0
    if reads_upside_down(canvas_angle):
        rotation += 180.0
    return fold_angle(rotation)


def divider_angle(angle_a: float, angle_b: float) -> float:
    """Midpoint of two adjacent wheel angles, across the 0°/360° seam if needed."""
    if abs(angle_b - angle_a) > 180.0:
        return ((angle_a + angle_b + 360.0) / 2.0) % 360.0
    return (angle_a + angle_b) / 2.0


def sub_band_radius(ring: RingGeometry, index: int, count: int) -> float:
    """Centre radius of sub-band `index` of `count` equal sub-bands; 0 is the outermost."""
    if count < 1 or not 0 <= index < count:
        raise ValueError(f"sub-band {index} out of range for {count} sub-bands")
    height = ring.band_width / count
    return ring.outer_radius - (index + 0.5) * height


def ratio_radius(ring: RingGeometry, ratio: float, origin: str = "inner") -> float:
    """Radius at `ratio` of the band width measured from the inner, outer or mid edge."""
    base = {"inner": ring.inner_radius, "outer": ring.outer_radius, "mid": ring.mid_radius}[origin]
    return base + ring.band_width * ratio


def scaled_geometry(
    ring: RingGeometry,
    scale: float = 1.0,
    center: tuple[float, float] | None = None,
) -> RingGeometry:
    """Scale a ring about the canvas origin (or re-centre it) keeping its proportions."""
    if scale <= 0:
        raise ValueError("scale must be positive")
    return RingGeometry(
        center=center if center is not None else (ring.center[0] * scale, ring.center[1] * scale),
        inner_radius=ring.inner_radius * scale,
        outer_radius=ring.outer_radius * scale,
    )


def scaled_sizes(ring: RingGeometry, ratios: dict[str, float]) -> dict[str, float]:
    """Font/element sizes as fixed ratios of the band width."""
    return {name: ring.band_width * r for name, r in ratios.items()}


def arc_length(radius: float, degrees: float) -> float:
    """Length of a circular arc; the tangential room text has inside one sector."""
    return float(radius * np.radians(abs(degrees)))
